# src/chainpiper_shell/core/handlers/core/echo_handler.py
from typing import Any, Dict, List

from chainpiper_shell.core.context.shell_context import ShellContext

echo_help_text = """
ECHO:
  echo <text...>              Display the specified text.
  echo --code <N> <text...>   Display the text and fail when N is not 0.
""".strip()


def handle_echo(args: List[str], _ctx: ShellContext) -> Dict[str, Any]:
    """
    Handles the 'echo' command.

    Returns the provided text; the --code flag turns a non-zero code into a
    failed result, which makes echo handy for trying out && and ||.

    Args:
        args (List[str]): Arguments passed to the echo command.
        _ctx (ShellContext): The shell context (unused in this handler).

    Returns:
        Dict[str, Any]: success/output/error for the command runner.
    """
    text_args = []
    exit_code = 0
    i = 0

    while i < len(args):
        arg = args[i]
        if arg == "--code" and i + 1 < len(args):
            try:
                exit_code = int(args[i + 1])
                i += 2
                continue
            except ValueError:
                # Not a number: keep '--code' as normal text
                pass
        text_args.append(arg)
        i += 1

    result: Dict[str, Any] = {"success": exit_code == 0, "output": " ".join(text_args)}
    if exit_code != 0:
        result["error"] = f"echo exited with code {exit_code}"
    return result
