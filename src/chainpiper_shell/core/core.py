# src/chainpiper_shell/core/core.py
from __future__ import annotations

import logging

from chainpiper_shell.core.conditions import ConditionEvaluator
from chainpiper_shell.core.filter_registry import FilterRegistry
from chainpiper_shell.core.parser import parse_line
from chainpiper_shell.core.tokenizer import has_chain_operators
from chainpiper_shell.core.xngine import ExecuteEngine

logger = logging.getLogger(__name__)


# The shared engine. The command runner is attached by the application
# (see app.py) once the command registry and shell context exist.
XNGINE = ExecuteEngine(
    filter_registry=FilterRegistry,
    condition_evaluator=ConditionEvaluator(),
    logger=logger,
)

# Export core functionality for use by the main application layer.
execute = XNGINE.execute
set_command_runner = XNGINE.set_command_runner

__all__ = ["XNGINE", "execute", "set_command_runner", "parse_line", "has_chain_operators"]
