"""
ETF Matcher vector config loader.

Resolve named ticker-vector configurations and download their binary
payloads from etfmatcher.com.

Example:
    from etf_matcher_vectors import get_config_by_key, fetch_config_resource

    record = get_config_by_key("default")
    data = fetch_config_resource("default")
"""

from .constants import BASE_URL, __version__
from .helpers.http_helper import HTTPClient, HTTPSettings
from .helpers.urls import build_resource_url, get_symbol_map_url, resolve_resource_url
from .services.catalog_service import (
    CatalogSource,
    FileCatalogSource,
    RemoteCatalogSource,
    StaticCatalogSource,
    get_all_configs,
    get_config_by_key,
    get_config_by_key_from,
    load_catalog,
    parse_catalog,
    reset_catalog,
    set_catalog_source,
)
from .services.resource_service import (
    fetch_bytes,
    fetch_bytes_async,
    fetch_config_resource,
    fetch_config_resource_async,
    fetch_resource,
    fetch_resource_async,
    fetch_symbol_map,
    fetch_symbol_map_async,
)
from .utils.errors import (
    CatalogUnavailable,
    ConfigNotFound,
    NetworkError,
    ResourceNotFound,
    VectorConfigError,
)
from .utils.types import Catalog, ConfigRecord

__all__ = [
    "BASE_URL",
    "Catalog",
    "CatalogSource",
    "CatalogUnavailable",
    "ConfigNotFound",
    "ConfigRecord",
    "FileCatalogSource",
    "HTTPClient",
    "HTTPSettings",
    "NetworkError",
    "RemoteCatalogSource",
    "ResourceNotFound",
    "StaticCatalogSource",
    "VectorConfigError",
    "__version__",
    "build_resource_url",
    "fetch_bytes",
    "fetch_bytes_async",
    "fetch_config_resource",
    "fetch_config_resource_async",
    "fetch_resource",
    "fetch_resource_async",
    "fetch_symbol_map",
    "fetch_symbol_map_async",
    "get_all_configs",
    "get_config_by_key",
    "get_config_by_key_from",
    "get_symbol_map_url",
    "load_catalog",
    "parse_catalog",
    "reset_catalog",
    "resolve_resource_url",
    "set_catalog_source",
]
