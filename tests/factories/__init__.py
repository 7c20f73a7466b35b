"""
Test Factories Module

Factory functions for manifests, records and temporary settings files.
"""

from .catalog_factories import (
    DEFAULT_PATH,
    LSTM_PATH,
    UNREACHABLE_URL,
    data_url,
    make_manifest,
    make_scenario_records,
    temp_manifest_file,
    temp_settings_file,
)

__all__ = [
    "DEFAULT_PATH",
    "LSTM_PATH",
    "UNREACHABLE_URL",
    "data_url",
    "make_manifest",
    "make_scenario_records",
    "temp_manifest_file",
    "temp_settings_file",
]
