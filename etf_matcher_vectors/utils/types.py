"""
Type definitions for catalog records.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import date, datetime, time
from typing import Any


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_timestamp(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    # TOML allows unquoted date-times; keep them as ISO strings
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return _optional_str(data, key)


def _optional_count(data: Mapping[str, Any], key: str) -> int | None:
    return _check_count(key, data.get(key))


def _check_count(key: str, value: Any) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; TOML `true` is not a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"'{key}' must not be negative, got {value}")
    return value


def _optional_str_list(data: Mapping[str, Any], key: str) -> tuple[str, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class ConfigRecord:
    """One downloadable ticker-vector collection described by the catalog.

    Optional fields stay None when the manifest omits them; callers decide
    their own fallback (e.g. showing 0 for an unknown feature count).
    """

    path: str
    description: str | None = None
    features: int | None = None
    proto_notebook: str | None = None
    last_training_time: str | None = None
    vector_dimensions: int | None = None
    training_sequence_length: int | None = None
    training_data_sources: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not self.path:
            raise ValueError("'path' must be a non-empty string")
        for key in ("features", "vector_dimensions", "training_sequence_length"):
            _check_count(key, getattr(self, key))

    @classmethod
    def from_mapping(cls, data: Any) -> "ConfigRecord":
        """
        Build a record from one manifest table.

        Raises:
            ValueError: If the table is malformed. Unknown keys are ignored.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"record must be a table, got {type(data).__name__}")

        # The published manifest spells this key with three o's
        notebook_key = "proto_noteboook" if "proto_noteboook" in data else "proto_notebook"

        return cls(
            path=data.get("path"),  # validated in __post_init__
            description=_optional_str(data, "description"),
            features=_optional_count(data, "features"),
            proto_notebook=_optional_str(data, notebook_key),
            last_training_time=_optional_timestamp(data, "last_training_time"),
            vector_dimensions=_optional_count(data, "vector_dimensions"),
            training_sequence_length=_optional_count(data, "training_sequence_length"),
            training_data_sources=_optional_str_list(data, "training_data_sources"),
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the record as a plain dictionary."""
        record = asdict(self)
        if self.training_data_sources is not None:
            record["training_data_sources"] = list(self.training_data_sources)
        return record


# Read-only key -> record mapping (a types.MappingProxyType at runtime)
Catalog = Mapping[str, ConfigRecord]
