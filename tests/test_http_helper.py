"""
HTTP client tests against a local aiohttp server.

Tests cover:
- Successful binary downloads
- Error taxonomy for 404, 403, 5xx, timeouts and unreachable hosts
- Settings parsing and client lifecycle
"""

import asyncio

import pytest

from etf_matcher_vectors.constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_USER_AGENT
from etf_matcher_vectors.helpers.http_helper import HTTPClient, HTTPSettings, download
from etf_matcher_vectors.services.resource_service import fetch_bytes_async
from etf_matcher_vectors.utils.errors import NetworkError, ResourceNotFound
from tests.factories import UNREACHABLE_URL, data_url


class TestHTTPSettings:
    def test_default_values(self) -> None:
        settings = HTTPSettings()
        assert settings.timeout == DEFAULT_HTTP_TIMEOUT
        assert settings.concurrency == 8
        assert settings.user_agent == DEFAULT_USER_AGENT

    def test_from_config_with_http_section(self) -> None:
        settings = HTTPSettings.from_config(
            {"http": {"timeout": 5, "concurrency": 2, "user_agent": "vector-tests/1.0"}}
        )
        assert settings.timeout == 5.0
        assert settings.concurrency == 2
        assert settings.user_agent == "vector-tests/1.0"

    @pytest.mark.parametrize(
        "raw",
        [None, {}, {"http": "nope"}, {"http": {"timeout": "soon", "concurrency": 0}}],
    )
    def test_from_config_falls_back_to_defaults(self, raw) -> None:
        assert HTTPSettings.from_config(raw) == HTTPSettings()


class TestHTTPClient:
    @pytest.mark.asyncio
    async def test_fetch_returns_full_body(self, data_server) -> None:
        async with HTTPClient(timeout=5) as client:
            body = await client.fetch_bytes(data_url(data_server, "vectors.bin"))

        assert body == b"VEC\x00vectors.bin"

    @pytest.mark.asyncio
    async def test_sends_user_agent(self, data_server) -> None:
        async with HTTPClient(timeout=5, user_agent="vector-tests/2.0") as client:
            await client.fetch_bytes(data_url(data_server, "ua.bin"))

        request = data_server.app["requests"][-1]
        assert request.headers["User-Agent"] == "vector-tests/2.0"

    @pytest.mark.asyncio
    async def test_empty_body_is_returned_as_is(self, data_server) -> None:
        async with HTTPClient(timeout=5) as client:
            assert await client.fetch_bytes(data_url(data_server, "empty.bin")) == b""

    @pytest.mark.asyncio
    async def test_404_raises_resource_not_found(self, data_server) -> None:
        url = data_url(data_server, "missing.bin")
        async with HTTPClient(timeout=5) as client:
            with pytest.raises(ResourceNotFound) as exc_info:
                await client.fetch_bytes(url)

        assert exc_info.value.status == 404
        assert exc_info.value.url == url
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_403_is_permanent_network_error(self, data_server) -> None:
        async with HTTPClient(timeout=5) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_bytes(data_url(data_server, "forbidden.bin"))

        assert not isinstance(exc_info.value, ResourceNotFound)
        assert exc_info.value.status == 403
        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_503_is_retryable_network_error(self, data_server) -> None:
        async with HTTPClient(timeout=5) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_bytes(data_url(data_server, "broken.bin"))

        assert exc_info.value.status == 503
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_timeout_raises_network_error(self, data_server) -> None:
        async with HTTPClient(timeout=0.2) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_bytes(data_url(data_server, "slow.bin"))

        assert exc_info.value.status is None
        assert exc_info.value.retryable is True

    @pytest.mark.asyncio
    async def test_unreachable_host_raises_network_error(self) -> None:
        async with HTTPClient(timeout=5) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_bytes(UNREACHABLE_URL)

        assert exc_info.value.status is None
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_health_status_counts_requests(self, data_server) -> None:
        client = HTTPClient(timeout=5)
        await client.fetch_bytes(data_url(data_server, "a.bin"))
        with pytest.raises(ResourceNotFound):
            await client.fetch_bytes(data_url(data_server, "missing.bin"))

        status = client.get_health_status()
        assert status["http_client_status"] == "ok"
        assert status["total_requests"] == 2
        assert status["total_errors"] == 1

        await client.close()
        assert client.get_health_status()["http_client_status"] == "closed"

    @pytest.mark.asyncio
    async def test_download_closes_its_client(self, data_server) -> None:
        body = await download(data_url(data_server, "x.bin"), HTTPSettings(timeout=5))
        assert body == b"VEC\x00x.bin"


class TestSharedConcurrencyCap:
    """Downloads on one event loop share the configured concurrency cap."""

    @pytest.mark.asyncio
    async def test_cap_of_one_serializes_downloads(self, data_server) -> None:
        settings = HTTPSettings(timeout=10, concurrency=1)
        urls = [data_url(data_server, f"pause-{i}.bin") for i in range(3)]

        bodies = await asyncio.gather(*(fetch_bytes_async(url, settings) for url in urls))

        assert bodies == [f"VEC\x00pause-{i}.bin".encode() for i in range(3)]
        assert data_server.app["stats"]["peak_in_flight"] == 1

    @pytest.mark.asyncio
    async def test_wider_cap_allows_parallel_downloads(self, data_server) -> None:
        settings = HTTPSettings(timeout=10, concurrency=3)
        urls = [data_url(data_server, f"pause-{i}.bin") for i in range(3)]

        await asyncio.gather(*(download(url, settings) for url in urls))

        assert data_server.app["stats"]["peak_in_flight"] > 1
