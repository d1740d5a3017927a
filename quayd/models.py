"""Domain records passed between the webhook, the handler and the adapters."""

from __future__ import annotations

import dataclasses as dc
import enum

from quayd.errors import MalformedRepositoryError, UnrecognizedStateError

STATUS_CONTEXT = "Docker Image"

_REPOSITORY_SEGMENTS = 2


class BuildState(enum.StrEnum):
    """Build states reported by the registry and mirrored to GitHub."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def parse(cls, raw: object) -> BuildState:
        """Return the member matching ``raw`` exactly.

        Raises
        ------
        UnrecognizedStateError
            If ``raw`` is not one of the known state values.

        """
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError as exc:
            raise UnrecognizedStateError(raw) from exc


STATUS_DESCRIPTIONS: dict[BuildState, str] = {
    BuildState.PENDING: "The Docker image is building",
    BuildState.SUCCESS: "The Docker image was built",
    BuildState.FAILURE: "The Docker image failed to build",
}


def split_repository(repository: str) -> tuple[str, str]:
    """Split ``owner/name`` into its two segments.

    Raises
    ------
    MalformedRepositoryError
        Unless there are exactly two non-empty segments.

    """
    parts = repository.split("/")
    if len(parts) != _REPOSITORY_SEGMENTS or not all(part.strip() for part in parts):
        raise MalformedRepositoryError(repository)
    owner, name = parts
    return (owner, name)


@dc.dataclass(frozen=True, slots=True)
class BuildEvent:
    """One normalised build notification.

    Attributes
    ----------
    repository
        Repository slug shared by GitHub and the registry (``owner/name``).
    ref
        Commit reference the status is attached to and the image is tagged
        with.
    state
        Reported build state. Raw strings are coerced to ``BuildState``.
    build_url
        Link to the build page, used as the status target URL.
    tag
        Registry tag produced by the build. Only required on success.

    """

    repository: str
    ref: str
    state: BuildState
    build_url: str = ""
    tag: str | None = None

    def __post_init__(self) -> None:
        """Reject unknown states before the event can be handled."""
        object.__setattr__(self, "state", BuildState.parse(self.state))


@dc.dataclass(frozen=True, slots=True)
class CommitStatus:
    """A GitHub commit status, built once per event and then discarded."""

    repository: str
    ref: str
    state: BuildState
    context: str
    description: str
    target_url: str = ""

    @classmethod
    def for_event(cls, event: BuildEvent) -> CommitStatus:
        """Build the status reported for ``event``."""
        return cls(
            repository=event.repository,
            ref=event.ref,
            state=event.state,
            context=STATUS_CONTEXT,
            description=STATUS_DESCRIPTIONS[event.state],
            target_url=event.build_url,
        )


@dc.dataclass(frozen=True, slots=True)
class TagResolution:
    """Image identifier a registry tag resolved to."""

    image_id: str


__all__ = [
    "STATUS_CONTEXT",
    "STATUS_DESCRIPTIONS",
    "BuildEvent",
    "BuildState",
    "CommitStatus",
    "TagResolution",
    "split_repository",
]
