"""
Utilities Package

Errors, record types and logging helpers shared across the loader.
"""

from .errors import (
    CatalogUnavailable,
    ConfigNotFound,
    NetworkError,
    ResourceNotFound,
    VectorConfigError,
)
from .logging import get_logger, setup_logging
from .types import Catalog, ConfigRecord

__all__ = [
    "Catalog",
    "CatalogUnavailable",
    "ConfigNotFound",
    "ConfigRecord",
    "NetworkError",
    "ResourceNotFound",
    "VectorConfigError",
    "get_logger",
    "setup_logging",
]
