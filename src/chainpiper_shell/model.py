# src/chainpiper_shell/model.py
from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Operator(str, Enum):
    """Control operators that relate a link to the result of the previous link."""
    AND = "&&"
    OR = "||"
    SEQUENCE = ";"


class CommandResult(BaseModel):
    """
    The canonical result shape used throughout the interpreter.
    Runners, filters and the engine itself all speak this model.
    """
    success: bool
    output: str = ""
    error: Optional[str] = None

    @classmethod
    def ok(cls, output: str = "") -> "CommandResult":
        return cls(success=True, output=output)

    @classmethod
    def fail(cls, error: str, output: str = "") -> "CommandResult":
        return cls(success=False, output=output, error=error)


# Filters produce the exact same shape as commands.
FilterResult = CommandResult


class Link(BaseModel):
    """One atomic command, its filter pipeline and the operator before it."""
    command: str = Field(min_length=1, description="The command text handed to the runner.")
    pipes: List[str] = Field(default_factory=list, description="Filter invocations, applied left to right.")
    operator: Optional[Operator] = Field(default=None, description="Operator relating this link to the previous one.")


class FilterSpec(BaseModel):
    """A named, pure text transformation usable after a pipe."""
    model_config = ConfigDict(frozen=True)

    name: str
    usage: str
    description: str
    execute: Callable[[str, List[str]], CommandResult]


class ConditionClause(BaseModel):
    """A single `identifier comparator integer` comparison."""
    model_config = ConfigDict(frozen=True)

    identifier: str
    comparator: str
    value: int
