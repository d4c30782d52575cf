# src/chainpiper_shell/core/handlers/config_handler.py
from typing import List

from chainpiper_shell.core.context.shell_context import ShellContext
from chainpiper_shell.core.managers.config_manager import config_manager
from chainpiper_shell.model import CommandResult

config_help_text = """
CONFIG:
  config show                 List all settings as 'key = value'.
  config get <key>            Show one setting, e.g. 'config get shell.prompt'.
  config set <key> <value>    Change a setting for this session.
  config reset                Reload settings.json, dropping session changes.
""".strip()


def handle_config(args: List[str], _ctx: ShellContext) -> CommandResult:
    """Handles 'config show|get|set|reset'."""
    if not args or args[0] == "show":
        lines = [f"{key} = {value!r}" for key, value in config_manager.items()]
        return CommandResult.ok("\n".join(lines) or "No settings loaded.")

    action, rest = args[0], args[1:]

    if action == "get" and len(rest) == 1:
        value = config_manager.get_nested(rest[0])
        if value is None:
            return CommandResult.fail(f"No such setting: {rest[0]}")
        return CommandResult.ok(f"{rest[0]} = {value!r}")

    if action == "set" and len(rest) >= 2:
        try:
            stored = config_manager.set_nested(rest[0], " ".join(rest[1:]))
        except ValueError as e:
            return CommandResult.fail(f"Cannot set {rest[0]}: {e}")
        return CommandResult.ok(f"{rest[0]} = {stored!r}")

    if action == "reset" and not rest:
        config_manager.reset()
        return CommandResult.ok("Configuration reloaded.")

    return CommandResult.fail("Usage: config [show | get <key> | set <key> <value> | reset]")
