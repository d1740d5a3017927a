"""quayd: GitHub commit statuses and stable image tags for Quay builds."""

from __future__ import annotations

from quayd.handler import BuildEventHandler, HandlerDependencies
from quayd.models import (
    STATUS_CONTEXT,
    STATUS_DESCRIPTIONS,
    BuildEvent,
    BuildState,
    CommitStatus,
    TagResolution,
)

__all__ = [
    "STATUS_CONTEXT",
    "STATUS_DESCRIPTIONS",
    "BuildEvent",
    "BuildEventHandler",
    "BuildState",
    "CommitStatus",
    "HandlerDependencies",
    "TagResolution",
]
