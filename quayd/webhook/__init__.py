"""Inbound Quay webhook: payload decoding and the Falcon resource."""

from __future__ import annotations

from .payload import (
    AUTOMATED_TRIGGERS,
    QuayBuildPayload,
    TriggerMetadata,
    build_event,
    commit_ref,
    decode_payload,
    is_manual_trigger,
)
from .resources import WebhookResource

__all__ = [
    "AUTOMATED_TRIGGERS",
    "QuayBuildPayload",
    "TriggerMetadata",
    "WebhookResource",
    "build_event",
    "commit_ref",
    "decode_payload",
    "is_manual_trigger",
]
