"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import falcon.testing
import pytest

from quayd.api.app import AppDependencies, create_app
from quayd.handler import BuildEventHandler, HandlerDependencies
from quayd.registry.fake import RecordingTagger, StaticTagResolver
from quayd.statuses.fake import RecordingStatusSink
from tests.helpers import IMAGE_ID


@pytest.fixture
def status_sink() -> RecordingStatusSink:
    """Provide a fresh recording sink per test."""
    return RecordingStatusSink()


@pytest.fixture
def tag_resolver() -> StaticTagResolver:
    """Provide a resolver that maps every tag to ``IMAGE_ID``."""
    return StaticTagResolver(IMAGE_ID)


@pytest.fixture
def tagger() -> RecordingTagger:
    """Provide a fresh recording tagger per test."""
    return RecordingTagger()


@pytest.fixture
def handler(
    status_sink: RecordingStatusSink,
    tag_resolver: StaticTagResolver,
    tagger: RecordingTagger,
) -> BuildEventHandler:
    """Build a handler wired to the recording fakes."""
    return BuildEventHandler(
        HandlerDependencies(
            status_sink=status_sink,
            tag_resolver=tag_resolver,
            tagger=tagger,
        )
    )


@pytest.fixture
def client(handler: BuildEventHandler) -> falcon.testing.TestClient:
    """Build a test client for the webhook app."""
    return falcon.testing.TestClient(create_app(AppDependencies(handler=handler)))
