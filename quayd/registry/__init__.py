"""Registry adapters for resolving and applying image tags."""

from __future__ import annotations

from .client import RegistryTagger, RegistryTagResolver
from .config import RegistryConfig
from .fake import DiscardingTagger, RecordingTagger, StaticTagResolver, TagOperation
from .protocol import Tagger, TagResolver

__all__ = [
    "DiscardingTagger",
    "RecordingTagger",
    "RegistryConfig",
    "RegistryTagResolver",
    "RegistryTagger",
    "StaticTagResolver",
    "TagOperation",
    "TagResolver",
    "Tagger",
]
