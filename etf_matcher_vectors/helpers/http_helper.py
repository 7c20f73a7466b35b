"""
HTTP client used to download catalog manifests and vector payloads.

Provides a small aiohttp wrapper with:
- A bounded total timeout on every request
- A concurrency cap on in-flight requests
- A clear error taxonomy (ResourceNotFound, NetworkError)
- Session lifecycle management
- Structured logging for all operations

A request is attempted exactly once. Callers that want retries can inspect
``NetworkError.retryable`` and apply their own policy.
"""

import asyncio
import threading
from collections.abc import Coroutine
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, TypeVar

import aiohttp

from etf_matcher_vectors.config.config_loader import ConfigLoader, get_section
from etf_matcher_vectors.constants import (
    DEFAULT_HTTP_CONCURRENCY,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from etf_matcher_vectors.utils.errors import NetworkError, ResourceNotFound
from etf_matcher_vectors.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class HTTPSettings:
    """Configuration for HTTP client behavior."""

    timeout: float = DEFAULT_HTTP_TIMEOUT
    concurrency: int = DEFAULT_HTTP_CONCURRENCY
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> "HTTPSettings":
        """
        Create settings from the loader configuration dict.

        Reads config['http']; missing or malformed values fall back to defaults.
        """
        http_cfg = get_section(config, "http")

        try:
            timeout = float(http_cfg.get("timeout", DEFAULT_HTTP_TIMEOUT))
        except (TypeError, ValueError):
            timeout = DEFAULT_HTTP_TIMEOUT
        try:
            concurrency = int(http_cfg.get("concurrency", DEFAULT_HTTP_CONCURRENCY))
        except (TypeError, ValueError):
            concurrency = DEFAULT_HTTP_CONCURRENCY
        user_agent = http_cfg.get("user_agent") or DEFAULT_USER_AGENT

        return cls(
            timeout=timeout if timeout > 0 else DEFAULT_HTTP_TIMEOUT,
            concurrency=concurrency if concurrency > 0 else DEFAULT_HTTP_CONCURRENCY,
            user_agent=str(user_agent),
        )


class HTTPClient:
    """
    HTTP client for binary downloads.

    Features:
    - Configurable timeout and concurrency
    - Structured logging for all requests
    - Clean session lifecycle management (``async with HTTPClient() as c``)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        concurrency: int = DEFAULT_HTTP_CONCURRENCY,
        user_agent: str | None = None,
        semaphore: asyncio.Semaphore | None = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Total request timeout seconds.
            concurrency: Max in-flight requests.
            user_agent: Optional UA string. Defaults to the package UA.
            semaphore: Cap shared with other clients; overrides concurrency.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._sem = semaphore if semaphore is not None else asyncio.Semaphore(concurrency)
        self._session: aiohttp.ClientSession | None = None
        self._user_agent = user_agent or DEFAULT_USER_AGENT

        self._request_count = 0
        self._error_count = 0

    @classmethod
    def from_settings(
        cls, settings: HTTPSettings, semaphore: asyncio.Semaphore | None = None
    ) -> "HTTPClient":
        return cls(
            timeout=settings.timeout,
            concurrency=settings.concurrency,
            user_agent=settings.user_agent,
            semaphore=semaphore,
        )

    async def __aenter__(self) -> "HTTPClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout, raise_for_status=False
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session cleanly."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP session closed")

    def get_health_status(self) -> dict:
        """Return request counters for diagnostics."""
        return {
            "http_client_status": "ok" if self._session and not self._session.closed else "closed",
            "total_requests": self._request_count,
            "total_errors": self._error_count,
        }

    async def fetch_bytes(self, url: str) -> bytes:
        """
        Issue a single GET and return the full response body.

        Args:
            url: Absolute URL to fetch.

        Returns:
            The complete response body.

        Raises:
            ResourceNotFound: On 404.
            NetworkError: On any other non-2xx status, connection failure,
                invalid URL, or timeout. ``status`` is None when no
                response was received.
        """
        self._request_count += 1

        async with self._sem:
            session = await self._get_session()
            try:
                logger.debug(f"HTTP GET {url}")

                async with session.get(
                    url, headers={"User-Agent": self._user_agent}
                ) as resp:
                    status = resp.status

                    if 200 <= status < 300:
                        body = await resp.read()
                        logger.debug(f"HTTP GET {url} completed ({len(body)} bytes)")
                        return body

                    self._error_count += 1
                    if status == 404:
                        raise ResourceNotFound(url)
                    raise NetworkError(
                        f"HTTP {status} for {url}", url=url, status=status
                    )

            except asyncio.TimeoutError as e:
                # ServerTimeoutError is both a ClientError and a TimeoutError
                self._error_count += 1
                raise NetworkError(
                    f"Timed out after {self._timeout.total}s fetching {url}", url=url
                ) from e
            except aiohttp.ClientError as e:
                self._error_count += 1
                raise NetworkError(f"Client error while fetching {url}: {e}", url=url) from e


def default_settings() -> HTTPSettings:
    """HTTP settings from the loaded configuration file."""
    return HTTPSettings.from_config(ConfigLoader.load_config())


# (loop id, concurrency) -> (loop, semaphore); entries for closed loops are purged
_shared_semaphores: dict[tuple[int, int], tuple[asyncio.AbstractEventLoop, asyncio.Semaphore]] = {}
_semaphore_lock = threading.Lock()


def _shared_semaphore(concurrency: int) -> asyncio.Semaphore:
    """Semaphore shared by every ``download`` on the running loop with this cap."""
    loop = asyncio.get_running_loop()
    key = (id(loop), concurrency)
    with _semaphore_lock:
        for stale_key, (owner, _) in list(_shared_semaphores.items()):
            if owner.is_closed():
                del _shared_semaphores[stale_key]
        entry = _shared_semaphores.get(key)
        if entry is None or entry[0] is not loop:
            entry = (loop, asyncio.Semaphore(concurrency))
            _shared_semaphores[key] = entry
        return entry[1]


async def download(url: str, settings: HTTPSettings | None = None) -> bytes:
    """
    Fetch ``url`` with a short-lived client and return the body.

    Concurrent downloads on one event loop share the ``concurrency`` cap.
    """
    settings = settings or default_settings()
    semaphore = _shared_semaphore(settings.concurrency)
    async with HTTPClient.from_settings(settings, semaphore=semaphore) as client:
        return await client.fetch_bytes(url)


def run_blocking(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run ``coro`` to completion from synchronous code.

    Inside a running event loop (notebooks, async callers) the coroutine runs
    on a private loop in a worker thread, and the calling loop is blocked
    until it finishes.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="etf-matcher-fetch") as pool:
        return pool.submit(asyncio.run, coro).result()
