# src/chainpiper_shell/core/filters.py
from __future__ import annotations

import re
from types import MappingProxyType
from typing import List, Mapping

from chainpiper_shell.model import FilterResult, FilterSpec

DEFAULT_LINE_COUNT = 10
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _lines(text: str) -> List[str]:
    return text.split("\n")


def _join(lines: List[str]) -> FilterResult:
    return FilterResult.ok("\n".join(lines))


def _line_count(args: List[str]) -> int:
    """Reads the leading integer of the first argument; missing, junk or 0 mean the default."""
    if not args:
        return DEFAULT_LINE_COUNT
    m = _LEADING_INT.match(args[0])
    n = int(m.group(1)) if m else 0
    return n or DEFAULT_LINE_COUNT


def grep_filter(text: str, args: List[str]) -> FilterResult:
    if not args:
        return FilterResult.fail("grep requires a pattern")
    try:
        pattern = re.compile(args[0], re.IGNORECASE)
    except re.error as e:
        return FilterResult.fail(f"Invalid grep pattern '{args[0]}': {e}")
    return _join([line for line in _lines(text) if pattern.search(line)])


def head_filter(text: str, args: List[str]) -> FilterResult:
    return _join(_lines(text)[:_line_count(args)])


def tail_filter(text: str, args: List[str]) -> FilterResult:
    return _join(_lines(text)[-_line_count(args):])


def sort_filter(text: str, args: List[str]) -> FilterResult:
    return _join(sorted(_lines(text), reverse="-r" in args))


def uniq_filter(text: str, _args: List[str]) -> FilterResult:
    # dict keeps insertion order, so the first occurrence wins
    return _join(list(dict.fromkeys(_lines(text))))


def count_filter(text: str, _args: List[str]) -> FilterResult:
    non_blank = [line for line in _lines(text) if line.strip()]
    return FilterResult.ok(f"{len(non_blank)} lines")


def upper_filter(text: str, _args: List[str]) -> FilterResult:
    return FilterResult.ok(text.upper())


def lower_filter(text: str, _args: List[str]) -> FilterResult:
    return FilterResult.ok(text.lower())


def trim_filter(text: str, _args: List[str]) -> FilterResult:
    return _join([line.strip() for line in _lines(text)])


def reverse_filter(text: str, _args: List[str]) -> FilterResult:
    return _join(_lines(text)[::-1])


def number_filter(text: str, _args: List[str]) -> FilterResult:
    return _join([f"{i}: {line}" for i, line in enumerate(_lines(text), start=1)])


def first_filter(text: str, _args: List[str]) -> FilterResult:
    return _join([(line.split() or [""])[0] for line in _lines(text)])


def last_filter(text: str, _args: List[str]) -> FilterResult:
    return _join([(line.split() or [""])[-1] for line in _lines(text)])


_SPECS = (
    FilterSpec(name="grep", usage="grep <pattern>", description="Filter lines matching pattern", execute=grep_filter),
    FilterSpec(name="head", usage="head [n=10]", description="Show first n lines", execute=head_filter),
    FilterSpec(name="tail", usage="tail [n=10]", description="Show last n lines", execute=tail_filter),
    FilterSpec(name="sort", usage="sort [-r for reverse]", description="Sort lines alphabetically", execute=sort_filter),
    FilterSpec(name="uniq", usage="uniq", description="Remove duplicate lines", execute=uniq_filter),
    FilterSpec(name="count", usage="count", description="Count lines", execute=count_filter),
    FilterSpec(name="upper", usage="upper", description="Convert to uppercase", execute=upper_filter),
    FilterSpec(name="lower", usage="lower", description="Convert to lowercase", execute=lower_filter),
    FilterSpec(name="trim", usage="trim", description="Trim whitespace from lines", execute=trim_filter),
    FilterSpec(name="reverse", usage="reverse", description="Reverse line order", execute=reverse_filter),
    FilterSpec(name="number", usage="number", description="Add line numbers", execute=number_filter),
    FilterSpec(name="first", usage="first", description="Get first word of each line", execute=first_filter),
    FilterSpec(name="last", usage="last", description="Get last word of each line", execute=last_filter),
)

# The built-in filter table, created once and read-only afterwards.
BUILTIN_FILTERS: Mapping[str, FilterSpec] = MappingProxyType({spec.name: spec for spec in _SPECS})
