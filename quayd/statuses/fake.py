"""In-process CommitStatusSink variants for tests and unconfigured deployments."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from quayd.models import CommitStatus


class RecordingStatusSink:
    """Records every created status in call order.

    Instances are not safe to share between concurrently running tests;
    give each test its own sink or call :meth:`reset` between cases.

    Examples
    --------
    >>> import asyncio
    >>> from quayd.models import BuildEvent, CommitStatus
    >>> status = CommitStatus.for_event(
    ...     BuildEvent("acme/widgets", "main-abc1234", "pending")
    ... )
    >>> sink = RecordingStatusSink()
    >>> asyncio.run(sink.create(status))
    >>> sink.statuses == [status]
    True

    """

    def __init__(self) -> None:
        """Start with no recorded statuses."""
        self.statuses: list[CommitStatus] = []

    async def create(self, status: CommitStatus) -> None:
        """Append ``status`` to :attr:`statuses`."""
        self.statuses.append(status)

    def reset(self) -> None:
        """Forget every recorded status."""
        self.statuses.clear()


class DiscardingStatusSink:
    """Accepts statuses and keeps nothing.

    Used when a long-running process has no GitHub token, so memory stays
    flat however many builds are reported.
    """

    async def create(self, status: CommitStatus) -> None:
        """Drop ``status``."""
        del status
