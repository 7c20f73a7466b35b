"""
Helpers Package

URL construction, the HTTP client and file output helpers.
"""

from .atomic_write import AtomicWriteError, atomic_write_bytes
from .http_helper import HTTPClient, HTTPSettings
from .urls import build_resource_url, get_symbol_map_url, resolve_resource_url

__all__ = [
    "AtomicWriteError",
    "HTTPClient",
    "HTTPSettings",
    "atomic_write_bytes",
    "build_resource_url",
    "get_symbol_map_url",
    "resolve_resource_url",
]
