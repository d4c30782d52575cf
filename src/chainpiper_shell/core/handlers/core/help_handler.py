# src/chainpiper_shell/core/handlers/core/help_handler.py
from chainpiper_shell.core.context.shell_context import ShellContext
from chainpiper_shell.core.utils.helptext import get_filter_help, get_help_text


def handle_help(_args, _ctx: ShellContext):
    return {"success": True, "message": get_help_text()}


def handle_filters(_args, _ctx: ShellContext):
    return {"success": True, "message": get_filter_help()}
