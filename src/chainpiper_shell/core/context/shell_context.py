# src/chainpiper_shell/core/context/shell_context.py
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from chainpiper_shell.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)


class ShellContext:
    """
    Holds the mutable console state (heat, cash, level, ...) between lines.
    The interpreter only ever sees a read-only snapshot of it.
    """

    def __init__(self, initial_state: Optional[Mapping[str, Any]] = None):
        if initial_state is None:
            initial_state = config_manager.get_nested("state", {})
        self._state: Dict[str, Any] = {str(k).lower(): v for k, v in initial_state.items()}

    def set(self, key: str, value: Any) -> None:
        """Sets a state field. Keys are stored lower-case."""
        self._state[key.lower()] = value
        logger.debug("State field '%s' set to %r", key.lower(), value)

    def get(self, key: str) -> Optional[Any]:
        """Retrieves a state field. Returns None if key does not exist."""
        return self._state.get(key.lower())

    def snapshot(self) -> Mapping[str, Any]:
        """Returns a read-only copy of the current state for one interpreter call."""
        return MappingProxyType(dict(self._state))

    def __repr__(self) -> str:
        return f"<ShellContext fields={len(self._state)}>"
