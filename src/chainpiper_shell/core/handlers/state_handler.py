# src/chainpiper_shell/core/handlers/state_handler.py
import logging
from typing import List

from chainpiper_shell.core.context.shell_context import ShellContext
from chainpiper_shell.model import CommandResult

logger = logging.getLogger(__name__)

state_help_text = """
STATE:
  state                       Show all state fields (usable in if-conditions).
  set <field> <integer>       Change a state field, e.g. 'set heat 60'.
""".strip()


def handle_state(_args: List[str], ctx: ShellContext) -> CommandResult:
    """Lists every state field as 'name: value', sorted by name."""
    snapshot = ctx.snapshot()
    if not snapshot:
        return CommandResult.ok("No state fields set.")
    return CommandResult.ok("\n".join(f"{name}: {snapshot[name]}" for name in sorted(snapshot)))


def handle_set(args: List[str], ctx: ShellContext) -> CommandResult:
    if len(args) != 2:
        return CommandResult.fail("Usage: set <field> <integer>")

    field, raw_value = args
    try:
        value = int(raw_value)
    except ValueError:
        return CommandResult.fail(f"Not an integer: {raw_value}")

    previous = ctx.get(field)
    ctx.set(field, value)
    if previous is None:
        return CommandResult.ok(f"{field.lower()}: {value}")
    return CommandResult.ok(f"{field.lower()}: {previous} -> {value}")
