"""Behavioural coverage for Quay webhook handling."""

from __future__ import annotations

import typing as typ

import falcon.testing
import pytest
from pytest_bdd import given, parsers, scenario, then, when

from quayd.api.app import AppDependencies, create_app
from quayd.handler import BuildEventHandler, HandlerDependencies
from quayd.models import BuildState
from quayd.registry.fake import RecordingTagger, StaticTagResolver
from quayd.statuses.fake import RecordingStatusSink
from tests.helpers import load_fixture

if typ.TYPE_CHECKING:
    from falcon.testing.client import Result


class WebhookContext(typ.TypedDict, total=False):
    """Shared mutable scenario state."""

    status_sink: RecordingStatusSink
    tag_resolver: StaticTagResolver
    tagger: RecordingTagger
    response: Result


@scenario("../webhook.feature", "Pending build reports a commit status")
def test_pending_build_reports_status() -> None:
    """Wrap the pytest-bdd scenario for pending builds."""


@scenario("../webhook.feature", "Successful build tags the image")
def test_successful_build_tags_image() -> None:
    """Wrap the pytest-bdd scenario for successful builds."""


@scenario("../webhook.feature", "Unknown build status is rejected")
def test_unknown_build_status_rejected() -> None:
    """Wrap the pytest-bdd scenario for unknown states."""


@scenario("../webhook.feature", "Manually triggered build is ignored")
def test_manual_build_ignored() -> None:
    """Wrap the pytest-bdd scenario for manual builds."""


@pytest.fixture
def webhook_context() -> WebhookContext:
    """Provide empty scenario state."""
    return {}


@given("a quayd app backed by recording adapters")
def given_recording_app(webhook_context: WebhookContext) -> None:
    """Install fresh recording fakes for every capability."""
    webhook_context["status_sink"] = RecordingStatusSink()
    webhook_context["tag_resolver"] = StaticTagResolver()
    webhook_context["tagger"] = RecordingTagger()


@given(parsers.parse('the registry resolves every tag to image "{image_id}"'))
def given_registry_image(webhook_context: WebhookContext, image_id: str) -> None:
    """Point every registry tag at ``image_id``."""
    webhook_context["tag_resolver"] = StaticTagResolver(image_id)


@when(parsers.parse('Quay posts the "{fixture}" payload to {path}'))
def when_quay_posts(webhook_context: WebhookContext, fixture: str, path: str) -> None:
    """Deliver a webhook fixture to the app."""
    handler = BuildEventHandler(
        HandlerDependencies(
            status_sink=webhook_context["status_sink"],
            tag_resolver=webhook_context["tag_resolver"],
            tagger=webhook_context["tagger"],
        )
    )
    client = falcon.testing.TestClient(create_app(AppDependencies(handler=handler)))
    webhook_context["response"] = client.simulate_post(
        path, body=load_fixture(fixture)
    )


@then(parsers.parse("the response status is {status:d}"))
def then_response_status(webhook_context: WebhookContext, status: int) -> None:
    """Assert the HTTP response status code."""
    response = webhook_context["response"]
    assert response.status_code == status, (
        f"expected status {status}, got {response.status_code}"
    )


@then(
    parsers.re(r"(?P<count>\d+) commit status(?:es)? (?:is|are) recorded"),
    converters={"count": int},
)
def then_status_count(webhook_context: WebhookContext, count: int) -> None:
    """Assert how many commit statuses were created."""
    statuses = webhook_context["status_sink"].statuses
    assert len(statuses) == count, f"expected {count} statuses, got {statuses}"


@then(parsers.parse('the status for "{repository}" at "{ref}" is "{state}"'))
def then_status_is(
    webhook_context: WebhookContext, repository: str, ref: str, state: str
) -> None:
    """Assert the recorded status targets the commit with the given state."""
    status = webhook_context["status_sink"].statuses[-1]
    assert (status.repository, status.ref) == (repository, ref)
    assert status.state is BuildState(state)
    assert status.context == "Docker Image"


@then(parsers.parse('image "{image_id}" is tagged "{tag}"'))
def then_image_tagged(webhook_context: WebhookContext, image_id: str, tag: str) -> None:
    """Assert ``tag`` points at ``image_id``."""
    assert tag in webhook_context["tagger"].tags_for(image_id), (
        f"expected {image_id} to carry tag {tag}"
    )


@then("no image is tagged")
def then_no_tags(webhook_context: WebhookContext) -> None:
    """Assert the tagger was never called."""
    assert webhook_context["tagger"].operations == []
