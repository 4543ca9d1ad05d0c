"""
Content-store configuration for mergetext.

Settings come from ~/.mergetext/config.yaml, with MERGETEXT_* environment
variables taking precedence and built-in defaults filling the gaps. The
file is only ever read; a missing or unreadable file means defaults.
"""

from __future__ import annotations

import codecs
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from mergetext.catalog import DEFAULT_CODEPAGE
from mergetext.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

ENV_STORE_ROOT = "MERGETEXT_STORE_ROOT"
ENV_LOCALE = "MERGETEXT_LOCALE"
ENV_CODEPAGE = "MERGETEXT_CODEPAGE"
ENV_DISABLE = "MERGETEXT_DISABLE"

_TRUTHY = ("1", "true", "yes")


class StoreConfig:
    """
    Resolves the settings the catalog importer needs.

    Resolution order for each setting:
    1. MERGETEXT_* environment variable
    2. Value in the config file
    3. Built-in default
    """

    def __init__(self, config_file: str | Path | None = None) -> None:
        """
        Initialize the configuration reader.

        Args:
            config_file: Explicit YAML file; defaults to ~/.mergetext/config.yaml
        """
        self.base_dir = Path.home() / ".mergetext"
        self.config_file = Path(config_file) if config_file else self.base_dir / "config.yaml"

    def _load_settings(self) -> dict[str, Any]:
        """Read the config file; malformed or non-mapping content yields {}."""
        try:
            data = yaml.safe_load(self.config_file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.debug(f"Could not read config file: {e}")
            return {}
        except yaml.YAMLError as e:
            logger.warning(f"Malformed YAML in config file: {e}. Using defaults.")
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(
                f"Config file contains invalid type: {type(data).__name__}, "
                "expected dict. Using defaults."
            )
            return {}
        return data

    def _resolve(self, key: str, env_var: str, default: str) -> tuple[str, str]:
        env_value = os.environ.get(env_var, "").strip()
        if env_value:
            return env_value, "environment"

        value = self._load_settings().get(key)
        if isinstance(value, str) and value.strip():
            return value.strip(), "config"
        if value is not None:
            logger.warning(f"Ignoring non-string '{key}' in {self.config_file}")

        return default, "default"

    def get_store_root(self) -> Path:
        """Get the content-store root directory."""
        value, _ = self._resolve("store_root", ENV_STORE_ROOT, str(self.base_dir / "localize"))
        return Path(value).expanduser()

    def get_locale(self) -> str:
        """Get the locale identifier catalogs are stored under."""
        value, _ = self._resolve("locale", ENV_LOCALE, DEFAULT_LOCALE)
        return value

    def get_codepage(self) -> str:
        """
        Get the codepage requested for bound domains.

        Raises:
            ConfigError: If the codepage is not a known codec
        """
        value, _ = self._resolve("codepage", ENV_CODEPAGE, DEFAULT_CODEPAGE)
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ConfigError("codepage", value, "unknown encoding") from e
        return value

    def is_enabled(self) -> bool:
        """Check whether native catalogs should be used at all."""
        if os.environ.get(ENV_DISABLE, "").lower() in _TRUTHY:
            return False
        enabled = self._load_settings().get("enabled", True)
        if not isinstance(enabled, bool):
            logger.warning(f"Ignoring non-boolean 'enabled' in {self.config_file}")
            return True
        return enabled

    def get_info(self) -> dict[str, Any]:
        """
        Get the effective configuration and where each value came from.

        Returns:
            Dictionary with store_root, locale, codepage, enabled and sources
        """
        store_root, store_source = self._resolve(
            "store_root", ENV_STORE_ROOT, str(self.base_dir / "localize")
        )
        locale_name, locale_source = self._resolve("locale", ENV_LOCALE, DEFAULT_LOCALE)
        codepage, codepage_source = self._resolve("codepage", ENV_CODEPAGE, DEFAULT_CODEPAGE)

        return {
            "store_root": str(Path(store_root).expanduser()),
            "locale": locale_name,
            "codepage": codepage,
            "enabled": self.is_enabled(),
            "config_file": str(self.config_file),
            "sources": {
                "store_root": store_source,
                "locale": locale_source,
                "codepage": codepage_source,
            },
        }
