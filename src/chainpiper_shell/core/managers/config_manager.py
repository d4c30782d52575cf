# src/chainpiper_shell/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Iterator, Optional, Tuple

from chainpiper_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def _cast_like(original: Any, value: Any) -> Any:
    """Converts a console string to the type of the value it replaces."""
    if not isinstance(value, str) or original is None:
        return value
    if isinstance(original, bool):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"not a boolean: {value}")
    if isinstance(original, (int, float)):
        return type(original)(value)
    return value


class ConfigManager:
    """
    Singleton holding the console configuration from settings.json.
    Changes made with `config set` live in memory until `config reset`.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._config = {}
            cls._instance.reset()
        return cls._instance

    def get_all(self) -> Dict[str, Any]:
        return self._config

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Yields (dotted key, value) for every leaf setting, sorted by key."""
        def _walk(prefix: str, node: Any) -> Iterator[Tuple[str, Any]]:
            if isinstance(node, dict):
                for key in sorted(node):
                    yield from _walk(f"{prefix}.{key}" if prefix else key, node[key])
            else:
                yield prefix, node

        yield from _walk("", self._config)

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value, e.g. 'shell.prompt'.
        Returns the default when any part of the path is missing.
        """
        value = self._config
        for key in key_path.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(key)
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> Any:
        """
        Sets a nested value in memory, casting it to the type of the value it
        replaces (bool, int, float). New keys are stored as given.

        Returns:
            Any: The stored value.

        Raises:
            ValueError: If the path runs through a non-dict value, or the cast fails.
        """
        keys = key_path.split('.')
        node = self._config
        for key in keys[:-1]:
            node = node.setdefault(key, {})
            if not isinstance(node, dict):
                raise ValueError(f"'{key}' in '{key_path}' is not a section")
        if isinstance(node.get(keys[-1]), dict):
            raise ValueError(f"'{key_path}' is a section, not a setting")

        stored = _cast_like(node.get(keys[-1]), value)
        node[keys[-1]] = stored
        logger.info("Configuration updated: %s = %r", key_path, stored)
        return stored

    def reset(self) -> None:
        """Reloads the configuration from settings.json, dropping in-memory changes."""
        config_path = PathUtils.get_shell_package_root() / "settings.json"
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", config_path)
            self._config = {}
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration has been (re)loaded from settings.json.")
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
