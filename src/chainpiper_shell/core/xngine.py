from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping as MappingABC
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Union

from chainpiper_shell.core.conditions import ConditionEvaluator, is_conditional
from chainpiper_shell.core.errors import ChainParseError
from chainpiper_shell.core.filter_registry import FilterRegistry, apply_pipes
from chainpiper_shell.core.parser import parse_chain
from chainpiper_shell.core.tokenizer import tokenize
from chainpiper_shell.model import CommandResult, FilterSpec, Link, Operator

CommandRunner = Callable[[str], Union[Awaitable[Any], Any]]


def normalize_result(raw: Any) -> CommandResult:
    """
    Converts whatever a runner returned into a CommandResult.

    Runners may answer with a CommandResult, a mapping or any object with
    attributes, using either 'output' or 'message' for their text. Success is
    assumed unless the runner says success is False.
    """
    if isinstance(raw, CommandResult):
        return raw
    if raw is None:
        return CommandResult.ok()

    if isinstance(raw, MappingABC):
        get = raw.get
    else:
        def get(key: str, default: Any = None) -> Any:
            return getattr(raw, key, default)

    output = get("output") or get("message") or ""
    error = get("error")
    return CommandResult(
        success=get("success") is not False,
        output=str(output),
        error=str(error) if error else None,
    )


class ExecuteEngine:
    """
    Core engine that runs a console line: conditionals, chain operators
    (&&, ||, ;) and filter pipes. Atomic commands are delegated to an
    injected runner, awaited one at a time in source order.
    """

    def __init__(
            self,
            *,
            command_runner: Optional[CommandRunner] = None,
            filter_registry: Optional[Mapping[str, FilterSpec]] = None,
            condition_evaluator: Optional[ConditionEvaluator] = None,
            logger: Optional[logging.Logger] = None,
    ) -> None:
        self._runner = command_runner
        self._filters = filter_registry if filter_registry is not None else FilterRegistry
        self._conditions = condition_evaluator or ConditionEvaluator()
        self._log = logger or logging.getLogger(__name__)

    def set_command_runner(self, runner: Optional[CommandRunner]) -> None:
        self._runner = runner

    async def execute(self, line: str, state: Optional[Mapping[str, Any]] = None) -> CommandResult:
        """
        Parses and executes a full console line.

        Args:
            line (str): The raw input.
            state (Mapping[str, Any], optional): Read-only state snapshot for if-conditions.

        Returns:
            CommandResult: Never raises for bad input; failures are in the result.
        """
        if not line or not line.strip():
            return CommandResult.fail("Empty command")
        s = line.strip()

        if is_conditional(s):
            return await self.execute_conditional(s, state)

        try:
            chain = parse_chain(tokenize(s))
        except ChainParseError as e:
            self._log.debug("Parse error in %r: %s", s, e)
            return CommandResult.fail(str(e))

        if not chain:
            return CommandResult.fail("No commands to execute")

        # A lone command is handed over as-is
        if len(chain) == 1 and not chain[0].pipes:
            return await self.execute_single(chain[0].command)

        return await self.execute_chain(chain)

    async def execute_conditional(self, line: str, state: Optional[Mapping[str, Any]] = None) -> CommandResult:
        try:
            condition, then_command, else_command = self._conditions.parse_conditional(line)
        except ChainParseError as e:
            return CommandResult.fail(str(e))

        outcome = self._conditions.evaluate(condition, state)
        self._log.debug("Condition %r evaluated to %s", condition, outcome)

        # Branches go through the full pipeline again
        if outcome:
            return await self.execute(then_command, state)
        if else_command:
            return await self.execute(else_command, state)
        return CommandResult.ok()

    async def execute_chain(self, chain: List[Link]) -> CommandResult:
        """Executes links in order, applying short-circuit gating and pipes."""
        last_result = CommandResult.ok()
        all_output: List[str] = []

        for link in chain:
            # --- Operator Logic (&&, ||) ---
            if link.operator is Operator.AND and not last_result.success:
                self._log.debug("Skipping %r: previous command failed", link.command)
                continue
            if link.operator is Operator.OR and last_result.success:
                self._log.debug("Skipping %r: previous command succeeded", link.command)
                continue

            result = await self.execute_single(link.command)

            # --- Pipeline Handling ---
            if link.pipes and result.success:
                result = apply_pipes(result.output, link.pipes, self._filters)

            last_result = result
            if result.output:
                all_output.append(result.output)
            if result.error:
                all_output.append(f"Error: {result.error}")

        return CommandResult(
            success=last_result.success,
            output="\n".join(all_output),
            error=last_result.error,
        )

    async def execute_single(self, command: str) -> CommandResult:
        """Runs one atomic command through the runner and normalizes its answer."""
        if self._runner is None:
            return CommandResult.fail("No command executor set")

        self._log.debug("Running command %r", command)
        try:
            raw = self._runner(command)
            if inspect.isawaitable(raw):
                raw = await raw
            result = normalize_result(raw)
        except Exception as e:
            self._log.error("Command %r raised: %s", command, e, exc_info=True)
            return CommandResult.fail(str(e) or type(e).__name__)

        # A failure always carries a message so it shows up in the output log
        if not result.success and not result.error:
            result = result.model_copy(update={"error": f"{command} failed"})
        return result
