"""Build event handling: commit status first, then tag stabilisation.

Each call to :meth:`BuildEventHandler.handle` is a stateless transition
driven by the event's state:

- ``pending`` and ``failure`` create one commit status.
- ``success`` creates the status, resolves the build's registry tag to an
  image id and tags that image with the commit ref and with its own id, so
  the image can later be pulled by identifier through a tag.

Remote calls run strictly in sequence and the first failure ends the call.
Errors are never caught here; callers decide whether to log or retry.

Usage
-----
Handle an event with fakes for every capability::

    handler = BuildEventHandler()
    await handler.handle(BuildEvent("acme/widgets", "main-abc1234", "pending"))

"""

from __future__ import annotations

import dataclasses as dc

from quayd.errors import InvalidPayloadError
from quayd.logging import get_logger, log_info
from quayd.models import (
    BuildEvent,
    BuildState,
    CommitStatus,
    TagResolution,
    split_repository,
)
from quayd.registry.fake import RecordingTagger, StaticTagResolver
from quayd.registry.protocol import Tagger, TagResolver
from quayd.statuses.fake import RecordingStatusSink
from quayd.statuses.protocol import CommitStatusSink

__all__ = ["BuildEventHandler", "HandlerDependencies"]

logger = get_logger(__name__)


@dc.dataclass(frozen=True, slots=True)
class HandlerDependencies:
    """Capabilities used by :class:`BuildEventHandler`.

    Each capability falls back to its in-process fake when omitted, so a
    handler can always be built from partial configuration.

    Attributes
    ----------
    status_sink
        Where commit statuses are created.
    tag_resolver
        Resolves the build's registry tag to an image id.
    tagger
        Applies stabilisation tags.

    """

    status_sink: CommitStatusSink = dc.field(default_factory=RecordingStatusSink)
    tag_resolver: TagResolver = dc.field(default_factory=StaticTagResolver)
    tagger: Tagger = dc.field(default_factory=RecordingTagger)


class BuildEventHandler:
    """Reports build state and stabilises tags for successful builds."""

    def __init__(self, dependencies: HandlerDependencies | None = None) -> None:
        """Initialise with explicit capabilities or the fakes."""
        self._deps = dependencies or HandlerDependencies()

    @property
    def dependencies(self) -> HandlerDependencies:
        """Capabilities this handler dispatches to."""
        return self._deps

    async def handle(self, event: BuildEvent) -> None:
        """Apply ``event``.

        Parameters
        ----------
        event
            Normalised build notification.

        Raises
        ------
        UnrecognizedStateError
            If the event state is unknown. Nothing is sent.
        MalformedRepositoryError
            If the repository is not ``owner/name``. Nothing is sent.
        InvalidPayloadError
            If a successful build carries no registry tag. Nothing is sent.
        QuaydError
            Whatever the first failing adapter raised.

        """
        state = BuildState.parse(event.state)
        split_repository(event.repository)
        if state is BuildState.SUCCESS and not event.tag:
            raise InvalidPayloadError("successful build has no image tag", field="tag")

        status = CommitStatus.for_event(event)
        await self._deps.status_sink.create(status)
        log_info(
            logger,
            "Reported %s for %s@%s",
            state,
            event.repository,
            event.ref,
        )

        if state is BuildState.SUCCESS and event.tag:
            await self.stabilize_tags(event.repository, event.tag, event.ref)

    async def stabilize_tags(
        self, repository: str, tag: str, commit: str
    ) -> TagResolution:
        """Tag the image behind ``tag`` with ``commit`` and with its own id.

        The registry only serves images by tag, so tagging the image id as
        itself makes the immutable image reachable by name.

        Returns
        -------
        TagResolution
            The image id both tags now point at.

        """
        image_id = await self._deps.tag_resolver.resolve(repository, tag)
        await self._deps.tagger.tag(repository, image_id, commit)
        await self._deps.tagger.tag(repository, image_id, image_id)
        log_info(
            logger,
            "Stabilised %s:%s as image %s (tags %s, %s)",
            repository,
            tag,
            image_id,
            commit,
            image_id,
        )
        return TagResolution(image_id=image_id)
