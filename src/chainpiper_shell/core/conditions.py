# src/chainpiper_shell/core/conditions.py
from __future__ import annotations

import logging
import operator
import re
from numbers import Real
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from chainpiper_shell.core.errors import ChainParseError
from chainpiper_shell.model import ConditionClause

logger = logging.getLogger(__name__)

CONDITIONAL_SYNTAX_ERROR = "Invalid conditional syntax. Use: if <condition> then <command> [else <command>]"

# if <condition> then <command> [else <command>]
CONDITIONAL_PATTERN = re.compile(r"^if\s+(.+?)\s+then\s+(.+?)(?:\s+else\s+(.+))?$", re.IGNORECASE)
# <identifier> <comparator> <integer>; two-character comparators come first
CONDITION_PATTERN = re.compile(r"^(\w+)\s*(>=|<=|==|!=|>|<)\s*(-?\d+)$")
_IF_PREFIX = re.compile(r"^if\s", re.IGNORECASE)

COMPARATORS: Mapping[str, Callable[[Any, Any], bool]] = MappingProxyType({
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
})


def is_conditional(line: str) -> bool:
    """True when the line starts with the 'if' keyword (any case)."""
    return bool(_IF_PREFIX.match((line or "").strip()))


class ConditionEvaluator:
    """
    Parses and evaluates `if <condition> then <command> [else <command>]` lines.

    Conditions are either the literals true/false or a single comparison of a
    state field against an integer. Anything that cannot be resolved evaluates
    to False instead of raising.
    """

    def parse_conditional(self, line: str) -> Tuple[str, str, Optional[str]]:
        """Splits an if-line into (condition, then-command, else-command or None)."""
        m = CONDITIONAL_PATTERN.match((line or "").strip())
        if not m:
            raise ChainParseError(CONDITIONAL_SYNTAX_ERROR)
        else_command = m.group(3).strip() if m.group(3) else None
        return m.group(1).strip(), m.group(2).strip(), else_command

    def parse_condition(self, condition: str) -> Union[bool, ConditionClause, None]:
        text = (condition or "").strip()
        if text.lower() == "true":
            return True
        if text.lower() == "false":
            return False

        m = CONDITION_PATTERN.match(text)
        if not m:
            return None
        identifier, comparator, value = m.groups()
        return ConditionClause(identifier=identifier.lower(), comparator=comparator, value=int(value))

    def evaluate(self, condition: str, state: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Evaluates a condition against a read-only state snapshot.

        Args:
            condition (str): e.g. 'heat > 50', 'true'.
            state (Mapping[str, Any], optional): Numeric fields such as heat or cash.

        Returns:
            bool: The outcome; False for anything unresolvable.
        """
        clause = self.parse_condition(condition)
        if isinstance(clause, bool):
            return clause
        if clause is None:
            logger.debug("Unparseable condition %r evaluates to False", condition)
            return False

        actual = (state or {}).get(clause.identifier)
        # bool is a Real subclass but is not a numeric state field
        if isinstance(actual, bool) or not isinstance(actual, Real):
            logger.debug("State field %r is missing or not numeric: %r", clause.identifier, actual)
            return False

        return COMPARATORS[clause.comparator](actual, clause.value)
