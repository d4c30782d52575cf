# src/chainpiper_shell/core/errors.py


class ChainError(Exception):
    """Base class for all errors raised by the chain interpreter."""


class ChainParseError(ChainError):
    """Raised when a line cannot be turned into a chain (or a conditional)."""
