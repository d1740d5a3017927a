"""Commit status sinks: the protocol, in-process fakes and the GitHub client."""

from __future__ import annotations

from .config import GitHubStatusConfig
from .fake import DiscardingStatusSink, RecordingStatusSink
from .github import GitHubStatusSink
from .protocol import CommitStatusSink

__all__ = [
    "CommitStatusSink",
    "DiscardingStatusSink",
    "GitHubStatusConfig",
    "GitHubStatusSink",
    "RecordingStatusSink",
]
