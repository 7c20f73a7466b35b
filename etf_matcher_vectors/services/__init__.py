"""
Services Package

Catalog provisioning/lookup and resource downloads.
"""

from .catalog_service import (
    CatalogSettings,
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
from .resource_service import (
    fetch_bytes,
    fetch_bytes_async,
    fetch_config_resource,
    fetch_config_resource_async,
    fetch_resource,
    fetch_resource_async,
    fetch_symbol_map,
    fetch_symbol_map_async,
)

__all__ = [
    "CatalogSettings",
    "CatalogSource",
    "FileCatalogSource",
    "RemoteCatalogSource",
    "StaticCatalogSource",
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
    "load_catalog",
    "parse_catalog",
    "reset_catalog",
    "set_catalog_source",
]
