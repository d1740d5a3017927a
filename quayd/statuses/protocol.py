"""CommitStatusSink protocol for publishing build state to source control."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from quayd.models import CommitStatus


@typ.runtime_checkable
class CommitStatusSink(typ.Protocol):
    """Port for creating commit statuses.

    Each call creates exactly one status record. Implementations do not
    batch, deduplicate or retry, and raise whatever the transport reports.

    Examples
    --------
    >>> from quayd.statuses import CommitStatusSink, RecordingStatusSink
    >>> isinstance(RecordingStatusSink(), CommitStatusSink)
    True

    """

    async def create(self, status: CommitStatus) -> None:
        """Create ``status`` against its repository and ref."""
        ...
