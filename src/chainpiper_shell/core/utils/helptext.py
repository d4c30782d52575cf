# src/chainpiper_shell/core/utils/helptext.py
from typing import Mapping, Optional

from chainpiper_shell.core.command_registry import COMMAND_HELP_TEXTS
from chainpiper_shell.core.filter_registry import get_available_filters
from chainpiper_shell.model import FilterSpec

# The static header part of the help text
HEADER_HELP_TEXT = """
Street Console - Help

Combine commands with pipes, chains and a single if-clause.

---
OPERATORS
---
  A ; B               Execute B after A, regardless of the outcome.
  A && B              Execute B only if A was successful.
  A || B              Execute B only if A failed.
  A | filter          Pass the output of A through a text filter.

---
CONDITIONALS
---
  if <field> <op> <n> then <command> [else <command>]
  Fields come from your current state (heat, cash, level, energy).
  Operators: >  <  >=  <=  ==  !=    Literals: true, false

---
COMMANDS
---
GENERAL:
  help                Show this help text.
  filters             List the available pipe filters.
  quit                Exit the console.
""".strip()

CHAIN_OPERATOR_LINES = (
    "Chain operators:",
    "  cmd1 | filter      - Pipe output to filter",
    "  cmd1 && cmd2       - Run cmd2 only if cmd1 succeeds",
    "  cmd1 ; cmd2        - Run both commands",
    "  cmd1 || cmd2       - Run cmd2 only if cmd1 fails",
)

CONDITIONAL_EXAMPLE_LINES = (
    "Conditionals:",
    "  if heat > 50 then hideout",
    "  if cash < 100 then crime else status",
)


def get_filter_help(registry: Optional[Mapping[str, FilterSpec]] = None) -> str:
    """Formats every registered filter's usage and description, plus operator and conditional examples."""
    lines = ["Available pipe filters:", ""]
    for entry in get_available_filters(registry):
        lines.append(f"  {entry['usage']:<20} - {entry['description']}")
    lines.append("")
    lines.extend(CHAIN_OPERATOR_LINES)
    lines.append("")
    lines.extend(CONDITIONAL_EXAMPLE_LINES)
    return "\n".join(lines)


def get_help_text() -> str:
    """
    Dynamically assembles the full help text from the header and all
    discovered help text fragments from the command handlers.
    """
    full_help_parts = [HEADER_HELP_TEXT]
    for command_name in sorted(COMMAND_HELP_TEXTS.keys()):
        full_help_parts.append(COMMAND_HELP_TEXTS[command_name])
    return "\n\n".join(full_help_parts)
