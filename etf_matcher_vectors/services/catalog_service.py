"""
Configuration catalog: provisioning, process-wide cache and key lookup.

The catalog is built once through ``load_catalog()`` from a pluggable
``CatalogSource`` and is read-only afterwards. Lookups against an explicit
catalog (``get_config_by_key_from``) never touch the process cache, so tests
and batch callers can work with synthetic catalogs.

Usage:
    catalog = get_all_configs()
    record = get_config_by_key_from(catalog, "v5-sma-lstm-stacks")
    if record is None:
        record = catalog["default"]
"""

from __future__ import annotations

import tomllib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from types import MappingProxyType
from typing import Any

from etf_matcher_vectors.config.config_loader import ConfigLoader, get_section
from etf_matcher_vectors.constants import (
    CATALOG_MANIFEST_FILENAME,
    CATALOG_SECTION,
    DEFAULT_CONFIG_KEY,
)
from etf_matcher_vectors.helpers.http_helper import HTTPSettings, download, run_blocking
from etf_matcher_vectors.helpers.urls import build_resource_url
from etf_matcher_vectors.utils.errors import (
    CatalogUnavailable,
    ConfigNotFound,
    NetworkError,
)
from etf_matcher_vectors.utils.logging import get_logger
from etf_matcher_vectors.utils.types import Catalog, ConfigRecord

logger = get_logger(__name__)


def _freeze(records: Mapping[str, ConfigRecord], origin: str) -> Catalog:
    if not records:
        raise CatalogUnavailable(f"Catalog from {origin} has no entries")
    if DEFAULT_CONFIG_KEY not in records:
        logger.warning(
            "Catalog from %s has no '%s' entry", origin, DEFAULT_CONFIG_KEY
        )
    return MappingProxyType(dict(records))


def parse_catalog(text: str, origin: str = "manifest") -> Catalog:
    """
    Parse a TOML manifest into a read-only catalog.

    Records live under ``[ticker_vector_config.<key>]`` tables.

    Raises:
        CatalogUnavailable: On invalid TOML, a missing or empty section,
            or any malformed record.
    """
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise CatalogUnavailable(f"Invalid TOML in {origin}: {e}") from e

    section = document.get(CATALOG_SECTION)
    if not isinstance(section, dict):
        raise CatalogUnavailable(
            f"{origin} has no [{CATALOG_SECTION}] table"
        )

    records: dict[str, ConfigRecord] = {}
    for key, table in section.items():
        try:
            records[key] = ConfigRecord.from_mapping(table)
        except ValueError as e:
            raise CatalogUnavailable(
                f"Invalid record '{key}' in {origin}: {e}"
            ) from e

    return _freeze(records, origin)


# ---------------------------------------------------------------------------
# Catalog sources
# ---------------------------------------------------------------------------


class CatalogSource(ABC):
    """Where a catalog comes from. ``load`` must raise CatalogUnavailable on failure."""

    @abstractmethod
    def load(self) -> Catalog:
        """Build a fresh catalog."""


class RemoteCatalogSource(CatalogSource):
    """Fetch the TOML manifest over HTTP (the published catalog)."""

    def __init__(
        self, url: str | None = None, settings: HTTPSettings | None = None
    ) -> None:
        self.url = url or build_resource_url(CATALOG_MANIFEST_FILENAME)
        self.settings = settings

    def load(self) -> Catalog:
        try:
            payload = run_blocking(download(self.url, self.settings))
        except NetworkError as e:
            raise CatalogUnavailable(
                f"Could not fetch catalog manifest from {self.url}: {e}"
            ) from e

        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CatalogUnavailable(
                f"Catalog manifest at {self.url} is not UTF-8"
            ) from e

        return parse_catalog(text, origin=self.url)

    def __repr__(self) -> str:
        return f"RemoteCatalogSource(url={self.url!r})"


class FileCatalogSource(CatalogSource):
    """Read a TOML manifest from disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> Catalog:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogUnavailable(
                f"Could not read catalog manifest {self.path}: {e}"
            ) from e
        return parse_catalog(text, origin=str(self.path))

    def __repr__(self) -> str:
        return f"FileCatalogSource(path={str(self.path)!r})"


class StaticCatalogSource(CatalogSource):
    """Serve an in-memory mapping of key -> ConfigRecord."""

    def __init__(self, records: Mapping[str, ConfigRecord]) -> None:
        self._records = dict(records)

    def load(self) -> Catalog:
        return _freeze(self._records, "static records")

    def __repr__(self) -> str:
        return f"StaticCatalogSource(keys={sorted(self._records)!r})"


@dataclass
class CatalogSettings:
    """Catalog provisioning options from the ``catalog`` config section."""

    source: str = "remote"
    url: str | None = None
    path: str | None = None

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> CatalogSettings:
        catalog_cfg = get_section(config, "catalog")
        return cls(
            source=str(catalog_cfg.get("source") or "remote").lower(),
            url=catalog_cfg.get("url") or None,
            path=catalog_cfg.get("path") or None,
        )

    def build_source(self) -> CatalogSource:
        """
        Raises:
            CatalogUnavailable: If the settings do not describe a usable source.
        """
        if self.source == "remote":
            return RemoteCatalogSource(url=self.url)
        if self.source == "file":
            if not self.path:
                raise CatalogUnavailable(
                    "catalog.source is 'file' but catalog.path is not set"
                )
            return FileCatalogSource(self.path)
        raise CatalogUnavailable(f"Unknown catalog.source '{self.source}'")


# ---------------------------------------------------------------------------
# Process-wide catalog
# ---------------------------------------------------------------------------

_catalog: Catalog | None = None
_catalog_source: CatalogSource | None = None
_catalog_lock = RLock()


def set_catalog_source(source: CatalogSource | None) -> None:
    """
    Install the source used by ``load_catalog`` and drop any cached catalog.

    Passing None reverts to the source described by the settings file.
    """
    global _catalog, _catalog_source
    with _catalog_lock:
        _catalog_source = source
        _catalog = None


def reset_catalog() -> None:
    """Clear the cached catalog and any installed source (useful for testing)."""
    set_catalog_source(None)


def load_catalog() -> Catalog:
    """
    Build a catalog from the active source. Does not use or fill the cache.

    Raises:
        CatalogUnavailable: If the catalog could not be constructed.
    """
    source = _catalog_source
    if source is None:
        source = CatalogSettings.from_config(ConfigLoader.load_config()).build_source()

    catalog = source.load()
    logger.info("Loaded %d vector configs from %r", len(catalog), source)
    return catalog


def get_all_configs() -> Catalog:
    """
    Return the process catalog, building it on first use.

    Construction happens at most once even under concurrent first access.
    A failed construction is not cached; the next call tries again.

    Raises:
        CatalogUnavailable: If the catalog could not be constructed.
    """
    global _catalog
    catalog = _catalog
    if catalog is not None:
        return catalog

    with _catalog_lock:
        if _catalog is None:
            _catalog = load_catalog()
        return _catalog


def get_config_by_key_from(catalog: Catalog, key: str) -> ConfigRecord | None:
    """Look up ``key`` in an already materialized catalog; None when absent."""
    return catalog.get(key)


def get_config_by_key(key: str) -> ConfigRecord:
    """
    Look up ``key`` in the process catalog.

    Raises:
        ConfigNotFound: If the key is absent.
        CatalogUnavailable: If the catalog could not be constructed.
    """
    record = get_config_by_key_from(get_all_configs(), key)
    if record is None:
        raise ConfigNotFound(key)
    return record
