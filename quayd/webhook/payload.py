"""Decoding of Quay build webhooks into :class:`BuildEvent` records."""

from __future__ import annotations

import msgspec

from quayd.errors import InvalidPayloadError
from quayd.models import BuildEvent, BuildState

AUTOMATED_TRIGGERS = frozenset({"github", "gitlab", "bitbucket", "custom-git"})

_SHORT_SHA_LENGTH = 7


class TriggerMetadata(msgspec.Struct, kw_only=True):
    """Git details attached to builds started by a source trigger."""

    ref: str | None = None
    commit: str | None = None
    default_branch: str | None = None


class QuayBuildPayload(msgspec.Struct, kw_only=True):
    """Fields quayd reads from a Quay build notification.

    Attributes
    ----------
    repository
        Repository slug, ``namespace/name``.
    homepage
        URL of the build page.
    docker_tags
        Tags the build pushes; the first is the one resolved on success.
    trigger_kind
        Source trigger that started the build, absent for manual builds.
    is_manual
        Set by Quay when a user started the build by hand.
    trigger_metadata
        Git ref and commit the build was started for.

    """

    repository: str
    homepage: str = ""
    docker_tags: list[str] = msgspec.field(default_factory=list)
    trigger_kind: str | None = None
    is_manual: bool = False
    trigger_metadata: TriggerMetadata = msgspec.field(default_factory=TriggerMetadata)


def decode_payload(body: bytes) -> QuayBuildPayload:
    """Decode a webhook body.

    Raises
    ------
    InvalidPayloadError
        If the body is not JSON or lacks required fields.

    """
    try:
        return msgspec.json.decode(body, type=QuayBuildPayload)
    except msgspec.DecodeError as exc:
        raise InvalidPayloadError(str(exc)) from exc


def is_manual_trigger(payload: QuayBuildPayload) -> bool:
    """Return True unless an automated source trigger started the build."""
    if payload.is_manual:
        return True
    return payload.trigger_kind not in AUTOMATED_TRIGGERS


def commit_ref(payload: QuayBuildPayload) -> str:
    """Return ``<branch>-<short sha>`` for the triggering commit.

    The branch is the last path segment of the git ref, falling back to the
    default branch when the ref is missing.

    Raises
    ------
    InvalidPayloadError
        If the commit or branch cannot be determined.

    """
    metadata = payload.trigger_metadata
    if not metadata.commit:
        raise InvalidPayloadError("missing commit", field="trigger_metadata.commit")

    branch = metadata.ref.rsplit("/", 1)[-1] if metadata.ref else None
    branch = branch or metadata.default_branch
    if not branch:
        raise InvalidPayloadError("missing git ref", field="trigger_metadata.ref")

    return f"{branch}-{metadata.commit[:_SHORT_SHA_LENGTH]}"


def build_event(payload: QuayBuildPayload, state: BuildState) -> BuildEvent:
    """Normalise ``payload`` into the event the handler consumes."""
    return BuildEvent(
        repository=payload.repository,
        ref=commit_ref(payload),
        state=state,
        build_url=payload.homepage,
        tag=payload.docker_tags[0] if payload.docker_tags else None,
    )
