# src/chainpiper_shell/app.py
from __future__ import annotations

import logging
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory

from chainpiper_shell.core.command_registry import CommandRegistry, make_command_runner, register_all_commands
from chainpiper_shell.core.context.shell_context import ShellContext
from chainpiper_shell.core.core import execute, set_command_runner
from chainpiper_shell.core.filter_registry import FilterRegistry
from chainpiper_shell.core.loop_runner import ensure_background_loop, run_on_main_loop, stop_background_loop
from chainpiper_shell.core.managers.completion_manager import CompletionManager
from chainpiper_shell.core.managers.config_manager import config_manager
from chainpiper_shell.core.utils.configure_logging import configure_logger
from chainpiper_shell.core.utils.path_utils import PathUtils
from chainpiper_shell.model import CommandResult

# Initialize logging based on configuration
DEBUG_LEVEL = config_manager.get_nested("debug.level", "WARNING")
configure_logger(DEBUG_LEVEL, silenced_loggers={"asyncio": "WARNING"})
logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit"}


class PromptToolkitCompleter(Completer):
    """
    A wrapper that uses the CompletionManager to generate suggestions
    in a way that prompt_toolkit expects.
    """

    def __init__(self, manager: CompletionManager):
        self.manager = manager

    def get_completions(self, document: Document, complete_event):
        yield from self.manager.generate_completions(document)


def render_result(result: CommandResult) -> str:
    """Text shown to the user for one console line."""
    lines = [result.output] if result.output else []
    error_line = f"Error: {result.error}"
    # Chains already carry their error lines in the output
    if not result.success and result.error and not (lines and lines[-1].endswith(error_line)):
        lines.append(error_line)
    return "\n".join(lines)


def run_line(line: str, ctx: ShellContext) -> CommandResult:
    """Runs one console line on the background loop with a fresh state snapshot."""
    return run_on_main_loop(execute(line, ctx.snapshot()))


def start_shell() -> None:
    """Starts the interactive REPL for the street console."""
    register_all_commands()
    ensure_background_loop()
    logger.debug("Background asyncio event loop is running.")

    ctx = ShellContext()
    set_command_runner(make_command_runner(ctx))

    print(config_manager.get_nested("shell.banner", "Street Console"))

    history_path = PathUtils.get_shell_history_file()
    completer = None
    if config_manager.get_nested("autocomplete.enabled", True):
        completer = PromptToolkitCompleter(CompletionManager(CommandRegistry, FilterRegistry))

    session = PromptSession(
        history=FileHistory(str(history_path)),
        completer=completer,
        complete_while_typing=True,
    )
    logger.info("Shell startup; history file at: %s", history_path)
    try:
        while True:
            try:
                # Re-read so `config set shell.prompt` applies on the next line
                line = session.prompt(config_manager.get_nested("shell.prompt", "> ")).strip()
            except (EOFError, KeyboardInterrupt):
                break

            if not line:
                continue
            if line.lower() in QUIT_COMMANDS:
                break

            text = render_result(run_line(line, ctx))
            if text:
                print(text)
    finally:
        stop_background_loop()
        print("Bye!")


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running the shell from the command line."""
    start_shell()
    return 0


if __name__ == "__main__":
    sys.exit(main())
