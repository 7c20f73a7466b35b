# etf_matcher_vectors/config/config_loader.py

import logging
import os
from pathlib import Path
from typing import Any, ClassVar

import yaml

from etf_matcher_vectors.constants import CONFIG_PATH_ENV


def _get_default_config_path() -> Path:
    """Settings file shipped next to this module."""
    return Path(__file__).resolve().parent / "config.yaml"


class ConfigLoader:
    """
    Singleton class to load and provide access to loader settings.

    Observability:
        - Logs INFO on successful config load with path
        - Logs WARNING on missing config file (degraded mode)
        - Logs ERROR on YAML parse errors
        - Tracks config_status for health reporting
    """

    _config: ClassVar[dict[str, Any]] = {}
    _config_status: ClassVar[str] = "not_loaded"  # "ok", "degraded", "error"
    _config_path: ClassVar[str | None] = None

    @classmethod
    def load_config(cls, config_path: str | None = None) -> dict[str, Any]:
        """Load the settings from a YAML file if not already loaded.

        Args:
            config_path: Path to the settings file. If not provided, uses the
                ETF_MATCHER_CONFIG_PATH env var or the packaged config.yaml.

        Returns:
            Dict[str, Any]: Loaded settings dictionary. Empty when the file
            is missing or invalid; every consumer has defaults.
        """
        if cls._config_status == "not_loaded":
            # Resolve config path with priority: explicit arg > env var > default
            if config_path is None:
                config_path = os.environ.get(CONFIG_PATH_ENV)
                if config_path:
                    logging.info(
                        "Config path overridden via %s env: %s",
                        CONFIG_PATH_ENV,
                        config_path,
                    )

            if config_path is None:
                config_path = str(_get_default_config_path())

            cls._config_path = config_path

            try:
                with Path(config_path).open(encoding="utf-8") as file:
                    cls._config = yaml.safe_load(file) or {}

                # Ensure we have a dict to operate on
                if not isinstance(cls._config, dict):
                    logging.warning(
                        "Configuration file didn't contain a mapping; "
                        "using empty config."
                    )
                    cls._config = {}
                    cls._config_status = "degraded"
                else:
                    cls._config_status = "ok"
                    logging.info(
                        "Configuration loaded successfully from %s", config_path
                    )
                    cls._validate_logging_level()

            except FileNotFoundError:
                logging.warning(
                    "Configuration file not found at path: %s; "
                    "using default settings (degraded mode).",
                    config_path,
                )
                cls._config = {}
                cls._config_status = "degraded"
            except yaml.YAMLError as e:
                logging.error(
                    "Error parsing configuration YAML at %s: %s; "
                    "using default settings.",
                    config_path,
                    e,
                )
                cls._config = {}
                cls._config_status = "error"
            except UnicodeDecodeError as e:
                logging.error(
                    "Encoding error reading configuration at %s: %s; "
                    "using default settings.",
                    config_path,
                    e,
                )
                cls._config = {}
                cls._config_status = "error"
        return cls._config

    @classmethod
    def get_config_status(cls) -> dict[str, Any]:
        """Return config health status.

        Returns:
            Dict with config_status, config_path, and whether config is loaded.
        """
        return {
            "config_status": cls._config_status,
            "config_path": cls._config_path,
            "config_loaded": bool(cls._config),
        }

    @classmethod
    def _validate_logging_level(cls) -> None:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        logging_config = cls._config.get("logging")
        if not isinstance(logging_config, dict):
            logging_config = {}
        level = str(logging_config.get("level", "INFO")).upper()
        if level not in valid_levels:
            logging.warning(
                "Invalid logging level '%s' in config. Defaulting to 'INFO'.", level
            )
            level = "INFO"
        cls._config["logging"] = {**logging_config, "level": level}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Retrieves a top-level value from the loaded settings.

        Args:
            key (str): The key to retrieve.
            default (Any, optional): The default value if the key is not found.

        Returns:
            Any: The value associated with the key.
        """
        return cls._config.get(key, default)

    @classmethod
    def reset(cls) -> None:
        """Reset the config loader state (useful for testing)."""
        cls._config = {}
        cls._config_status = "not_loaded"
        cls._config_path = None


def get_section(config: dict[str, Any] | None, name: str) -> dict[str, Any]:
    """Return ``config[name]`` when it is a mapping, else an empty dict."""
    if not config or not isinstance(config, dict):
        return {}
    section = config.get(name)
    return section if isinstance(section, dict) else {}
