"""In-process registry fakes for tests and unconfigured deployments."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(frozen=True, slots=True)
class TagOperation:
    """One recorded call to :meth:`RecordingTagger.tag`."""

    repository: str
    image_id: str
    tag: str


class StaticTagResolver:
    """Resolves tags from a fixed table.

    Lookups missing from ``images`` return ``default``. Unless ``record`` is
    false, every lookup is appended to :attr:`lookups` as
    ``(repository, tag)``.

    Parameters
    ----------
    default
        Image id returned for unknown tags.
    images
        Optional ``(repository, tag) -> image_id`` table.
    record
        Whether to keep lookup history.

    """

    def __init__(
        self,
        default: str = "",
        *,
        images: cabc.Mapping[tuple[str, str], str] | None = None,
        record: bool = True,
    ) -> None:
        """Initialise the resolver with its lookup table."""
        self.default = default
        self.images: dict[tuple[str, str], str] = dict(images or {})
        self.lookups: list[tuple[str, str]] = []
        self._record = record

    async def resolve(self, repository: str, tag: str) -> str:
        """Return the configured image id for ``(repository, tag)``."""
        if self._record:
            self.lookups.append((repository, tag))
        return self.images.get((repository, tag), self.default)

    def reset(self) -> None:
        """Forget recorded lookups."""
        self.lookups.clear()


class RecordingTagger:
    """Records tag operations and the tag mapping they produce.

    :attr:`operations` keeps every call in order, while :attr:`tags` holds
    the resulting ``(repository, tag) -> image_id`` mapping, so repeating an
    operation adds an entry to the former but leaves the latter unchanged.
    """

    def __init__(self) -> None:
        """Start with no operations and an empty mapping."""
        self.operations: list[TagOperation] = []
        self.tags: dict[tuple[str, str], str] = {}

    async def tag(self, repository: str, image_id: str, tag: str) -> None:
        """Record the operation and point ``tag`` at ``image_id``."""
        self.operations.append(TagOperation(repository, image_id, tag))
        self.tags[(repository, tag)] = image_id

    def tags_for(self, image_id: str) -> set[str]:
        """Return every tag currently pointing at ``image_id``."""
        return {tag for (_, tag), image in self.tags.items() if image == image_id}

    def reset(self) -> None:
        """Forget operations and the tag mapping."""
        self.operations.clear()
        self.tags.clear()


class DiscardingTagger:
    """Accepts tag operations and keeps nothing.

    Stands in for the registry when a long-running process has no registry
    credentials.
    """

    async def tag(self, repository: str, image_id: str, tag: str) -> None:
        """Drop the operation."""
        del repository, image_id, tag
