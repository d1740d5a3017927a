"""Unit tests for the GitHub commit status sink."""

from __future__ import annotations

import json
import secrets
import typing as typ
from unittest import mock

import httpx
import pytest

from quayd.errors import (
    ConfigError,
    MalformedRepositoryError,
    TransportError,
    UpstreamRejectionError,
)
from quayd.handler import BuildEventHandler, HandlerDependencies
from quayd.logging import LogLevel
from quayd.models import BuildEvent, BuildState, CommitStatus
from quayd.registry import RecordingTagger, StaticTagResolver
from quayd.statuses import CommitStatusSink, GitHubStatusConfig, GitHubStatusSink

_TOKEN = secrets.token_hex(8)


def _status(repository: str = "ejholmes/docker-statsd") -> CommitStatus:
    return CommitStatus(
        repository=repository,
        ref="long-f1fb3b0",
        state=BuildState.SUCCESS,
        context="Docker Image",
        description="The Docker image was built",
        target_url="https://quay.io/build/1",
    )


def _make_sink(
    status_code: int = 201,
) -> tuple[GitHubStatusSink, httpx.AsyncClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code=status_code, json={"id": 1})

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
    sink = GitHubStatusSink(
        GitHubStatusConfig(token=_TOKEN, api_url="https://github.example.test"),
        http_client=http_client,
    )
    return sink, http_client, requests


class TestGitHubStatusSink:
    """Tests for GitHubStatusSink.create."""

    def test_satisfies_protocol(self) -> None:
        """The sink implements CommitStatusSink."""
        sink = GitHubStatusSink(GitHubStatusConfig(token=_TOKEN))
        assert isinstance(sink, CommitStatusSink)

    def test_rejects_blank_token(self) -> None:
        """A whitespace token is a configuration error."""
        with pytest.raises(ConfigError, match="non-empty"):
            GitHubStatusSink(GitHubStatusConfig(token="  "))

    @pytest.mark.asyncio
    async def test_posts_status_payload(self) -> None:
        """One POST carries state, target_url, context and description."""
        sink, _, requests = _make_sink()

        await sink.create(_status())

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == (
            "https://github.example.test/repos/ejholmes/docker-statsd"
            "/statuses/long-f1fb3b0"
        )
        assert json.loads(request.content) == {
            "state": "success",
            "target_url": "https://quay.io/build/1",
            "context": "Docker Image",
            "description": "The Docker image was built",
        }

    @pytest.mark.asyncio
    async def test_malformed_repository_sends_nothing(self) -> None:
        """The repository is split before any request is made."""
        sink, _, requests = _make_sink()

        with pytest.raises(MalformedRepositoryError):
            await sink.create(_status("docker-statsd"))

        assert requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [307, 422, 500])
    async def test_error_status_raises(self, status_code: int) -> None:
        """Any non-2xx response raises UpstreamRejectionError without retrying."""
        sink, _, requests = _make_sink(status_code=status_code)

        with pytest.raises(UpstreamRejectionError, match=str(status_code)) as exc_info:
            await sink.create(_status())

        assert exc_info.value.service == "GitHub"
        assert exc_info.value.status_code == status_code
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_redirected_status_stops_tagging(self) -> None:
        """A redirect for the status POST aborts the build before tagging."""
        sink, _, _ = _make_sink(status_code=307)
        tagger = RecordingTagger()
        handler = BuildEventHandler(
            HandlerDependencies(
                status_sink=sink,
                tag_resolver=StaticTagResolver("1234"),
                tagger=tagger,
            )
        )
        event = BuildEvent(
            repository="ejholmes/docker-statsd",
            ref="long-f1fb3b0",
            state=BuildState.SUCCESS,
            tag="long",
        )

        with pytest.raises(UpstreamRejectionError, match="307"):
            await handler.handle(event)

        assert tagger.operations == []

    @pytest.mark.asyncio
    async def test_status_is_logged_once_per_build(self) -> None:
        """A pending build through the GitHub sink yields one INFO record."""
        sink, _, _ = _make_sink()
        handler = BuildEventHandler(HandlerDependencies(status_sink=sink))
        event = BuildEvent("ejholmes/docker-statsd", "long-f1fb3b0", "pending")

        with mock.patch("quayd.logging._emit") as emit:
            await handler.handle(event)

        info_calls = [c for c in emit.call_args_list if c.args[1] is LogLevel.INFO]
        assert len(info_calls) == 1, f"expected one INFO record, got {info_calls}"

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        """Connection failures raise TransportError."""

        def _handler(request: httpx.Request) -> typ.NoReturn:
            raise httpx.ConnectError("unreachable", request=request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_handler))
        sink = GitHubStatusSink(
            GitHubStatusConfig(token=_TOKEN), http_client=http_client
        )

        with pytest.raises(TransportError, match="unreachable"):
            await sink.create(_status())

    @pytest.mark.asyncio
    async def test_owned_client_sends_bearer_token(self) -> None:
        """A sink building its own client authenticates with the token."""
        sink = GitHubStatusSink(GitHubStatusConfig(token=_TOKEN))
        try:
            assert sink._client.headers["Authorization"] == f"Bearer {_TOKEN}"  # noqa: SLF001
        finally:
            await sink.aclose()
