# tests/core/test_app.py
import logging

import pytest

from chainpiper_shell.app import render_result, run_line
from chainpiper_shell.core import core
from chainpiper_shell.core.command_registry import make_command_runner, register_all_commands
from chainpiper_shell.core.context.shell_context import ShellContext
from chainpiper_shell.core.utils.configure_logging import LogWithTqdm, configure_logger
from chainpiper_shell.model import CommandResult


@pytest.fixture
def shared_engine():
    """Attaches a registry runner to the shared engine and detaches it afterwards."""
    register_all_commands()
    ctx = ShellContext({"heat": 80})
    core.set_command_runner(make_command_runner(ctx))
    yield ctx
    core.set_command_runner(None)


def test_run_line_uses_shared_engine(shared_engine):
    result = run_line("if heat >= 80 then echo too hot | upper", shared_engine)
    assert result == CommandResult(success=True, output="TOO HOT")


def test_shared_engine_without_runner():
    result = run_line("echo hi", ShellContext({}))
    assert result.error == "No command executor set"


@pytest.mark.parametrize("result, expected", [
    (CommandResult.ok("hi"), "hi"),
    (CommandResult.ok(), ""),
    (CommandResult.fail("Empty command"), "Error: Empty command"),
    (CommandResult.fail("boom", output="partial"), "partial\nError: boom"),
    (CommandResult.fail("boom", output="ran map\nError: boom"), "ran map\nError: boom"),
])
def test_render_result(result, expected):
    assert render_result(result) == expected


def test_configure_logger_levels():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    try:
        configure_logger(
            "DEBUG",
            module_specific_levels={"chainpiper_shell.core.parser": "ERROR"},
            silenced_loggers={"asyncio": "CRITICAL"},
        )
        assert root.level == logging.DEBUG
        assert [type(h) for h in root.handlers] == [LogWithTqdm]
        assert logging.getLogger("chainpiper_shell.core.parser").level == logging.ERROR
        assert logging.getLogger("asyncio").level == logging.CRITICAL
    finally:
        root.setLevel(saved_level)
        root.handlers[:] = saved_handlers
        logging.getLogger("chainpiper_shell.core.parser").setLevel(logging.NOTSET)
        logging.getLogger("asyncio").setLevel(logging.NOTSET)
