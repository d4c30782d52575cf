# src/chainpiper_shell/core/command_registry.py
import inspect
import logging
import shlex
from typing import Any, Callable, Dict, Mapping, Optional

from chainpiper_shell.core.context.shell_context import ShellContext
from chainpiper_shell.core.discovery import discover_handlers

logger = logging.getLogger(__name__)

# The central registries, populated dynamically.
CommandRegistry: Dict[str, Callable[..., Any]] = {}
COMMAND_HELP_TEXTS: Dict[str, str] = {}


def register_command(name: str, handler: Callable[..., Any]) -> None:
    """Adds a command and its handler function to the registry."""
    CommandRegistry[name] = handler
    logger.debug("Registered command '%s'", name)


def register_all_commands() -> None:
    """Discovers all handlers and help texts, then registers them."""
    logger.debug("Discovering all command handlers and help texts...")
    discovered_handlers, discovered_help_texts = discover_handlers()

    for name, handler in discovered_handlers.items():
        if name not in CommandRegistry:
            register_command(name, handler)

    COMMAND_HELP_TEXTS.update(discovered_help_texts)
    logger.debug("Successfully registered %d handlers.", len(CommandRegistry))


def make_command_runner(ctx: ShellContext, registry: Optional[Mapping[str, Callable[..., Any]]] = None):
    """
    Builds the atomic command runner handed to the chain engine.

    The runner splits a single command into name and arguments and calls the
    matching handler as handler(args, ctx). Handlers answer with a mapping or
    CommandResult; the engine normalizes the shape.
    """
    commands = CommandRegistry if registry is None else registry

    async def run_command(command: str) -> Any:
        try:
            parts = shlex.split(command, posix=True)
        except ValueError:
            # Fallback for unbalanced quotes
            parts = command.split()
        if not parts:
            return {"success": False, "error": "Empty command"}

        name, args = parts[0], parts[1:]
        handler = commands.get(name)
        if handler is None:
            return {"success": False, "error": f"Unknown command: {name}"}

        result = handler(args, ctx)
        if inspect.isawaitable(result):
            result = await result
        return result

    return run_command
