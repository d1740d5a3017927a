"""Registry capabilities used to stabilise image tags."""

from __future__ import annotations

import typing as typ


@typ.runtime_checkable
class TagResolver(typ.Protocol):
    """Resolves a registry tag to the image identifier it points at."""

    async def resolve(self, repository: str, tag: str) -> str:
        """Return the image id ``tag`` currently refers to in ``repository``.

        Every call is a fresh lookup; implementations do not cache.
        """
        ...


@typ.runtime_checkable
class Tagger(typ.Protocol):
    """Applies a tag to an existing image."""

    async def tag(self, repository: str, image_id: str, tag: str) -> None:
        """Point ``tag`` at ``image_id`` within ``repository``.

        Applying the same arguments twice leaves the registry in the same
        state as applying them once.
        """
        ...
