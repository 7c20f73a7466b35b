"""
Resource fetcher: download vector collections and the symbol map.

Every operation is a single request/response with no state kept between
calls. The blocking functions run their ``*_async`` counterparts to
completion. Called from inside an event loop they work but block that loop,
so async code should await the async variants instead.
"""

import asyncio

from etf_matcher_vectors.helpers.http_helper import HTTPSettings, download, run_blocking
from etf_matcher_vectors.helpers.urls import get_symbol_map_url, resolve_resource_url
from etf_matcher_vectors.services.catalog_service import get_config_by_key
from etf_matcher_vectors.utils.logging import get_logger

logger = get_logger(__name__)


async def fetch_bytes_async(url: str, settings: HTTPSettings | None = None) -> bytes:
    """
    GET ``url`` once and return the whole body.

    Raises:
        NetworkError: On transport failure, timeout or non-2xx status
            (ResourceNotFound for 404).
    """
    return await download(url, settings)


async def fetch_resource_async(
    path: str, settings: HTTPSettings | None = None
) -> bytes:
    """Fetch a relative resource path or a full http(s) URL."""
    return await fetch_bytes_async(resolve_resource_url(path), settings)


async def fetch_config_resource_async(
    key: str, settings: HTTPSettings | None = None
) -> bytes:
    """
    Fetch the vector collection registered under ``key``.

    Raises:
        ConfigNotFound, CatalogUnavailable, NetworkError
    """
    # First access may build the catalog with blocking I/O
    record = await asyncio.to_thread(get_config_by_key, key)
    logger.debug(
        "Fetching vector collection %s", record.path, extra={"config_key": key}
    )
    return await fetch_resource_async(record.path, settings)


async def fetch_symbol_map_async(settings: HTTPSettings | None = None) -> bytes:
    """
    Fetch the ticker symbol map.

    The symbol map is published separately and may not yet cover tickers
    from the newest vector collections.
    """
    return await fetch_bytes_async(get_symbol_map_url(), settings)


def fetch_bytes(url: str, settings: HTTPSettings | None = None) -> bytes:
    """Blocking form of :func:`fetch_bytes_async`."""
    return run_blocking(fetch_bytes_async(url, settings))


def fetch_resource(path: str, settings: HTTPSettings | None = None) -> bytes:
    """Blocking form of :func:`fetch_resource_async`."""
    return run_blocking(fetch_resource_async(path, settings))


def fetch_config_resource(key: str, settings: HTTPSettings | None = None) -> bytes:
    """
    Blocking form of :func:`fetch_config_resource_async`.

    Example:
        data = fetch_config_resource("v5-sma-lstm-stacks")
    """
    # Resolve before entering the loop so the catalog load runs on this thread
    record = get_config_by_key(key)
    logger.debug(
        "Fetching vector collection %s", record.path, extra={"config_key": key}
    )
    return run_blocking(fetch_resource_async(record.path, settings))


def fetch_symbol_map(settings: HTTPSettings | None = None) -> bytes:
    """Blocking form of :func:`fetch_symbol_map_async`."""
    return run_blocking(fetch_symbol_map_async(settings))
