# src/chainpiper_shell/core/filter_registry.py
import logging
from typing import Dict, List, Mapping, Optional

from chainpiper_shell.core.errors import ChainError
from chainpiper_shell.core.filters import BUILTIN_FILTERS
from chainpiper_shell.model import FilterResult, FilterSpec

logger = logging.getLogger(__name__)

# The central registry of pipe filters: the built-ins plus anything registered later.
FilterRegistry: Dict[str, FilterSpec] = dict(BUILTIN_FILTERS)


def register_filter(spec: FilterSpec, registry: Optional[Dict[str, FilterSpec]] = None) -> None:
    """Adds an extra filter. Built-in filters cannot be replaced."""
    target = FilterRegistry if registry is None else registry
    if spec.name in BUILTIN_FILTERS:
        raise ChainError(f"Cannot replace built-in filter '{spec.name}'")
    target[spec.name] = spec
    logger.debug("Registered filter '%s'", spec.name)


def get_filter(name: str, registry: Optional[Mapping[str, FilterSpec]] = None) -> Optional[FilterSpec]:
    return (FilterRegistry if registry is None else registry).get(name)


def get_available_filters(registry: Optional[Mapping[str, FilterSpec]] = None) -> List[Dict[str, str]]:
    """Lists name, usage and description for every known filter."""
    source = FilterRegistry if registry is None else registry
    return [
        {"name": spec.name, "usage": spec.usage, "description": spec.description}
        for spec in source.values()
    ]


def apply_pipes(text: str, pipes: List[str], registry: Optional[Mapping[str, FilterSpec]] = None) -> FilterResult:
    """
    Runs text through a pipeline of filter invocations, left to right.

    Each invocation is split on whitespace into a filter name and its
    arguments. The first failing filter stops the pipeline and its failure
    becomes the result.

    Args:
        text (str): The output of the command before the first pipe.
        pipes (List[str]): Filter invocations such as 'grep cash' or 'head 3'.
        registry (Mapping[str, FilterSpec], optional): Filter table to use.

    Returns:
        FilterResult: The transformed text, or the first failure.
    """
    source = FilterRegistry if registry is None else registry
    output = text

    for pipe_str in pipes:
        parts = pipe_str.split()
        filter_name = parts[0] if parts else ""
        args = parts[1:]

        spec = source.get(filter_name)
        if spec is None:
            logger.warning("Unknown filter requested: %r", filter_name)
            return FilterResult.fail(f"Unknown filter: {filter_name}")

        result = spec.execute(output, args)
        if not result.success:
            logger.warning("Filter '%s' failed: %s", filter_name, result.error)
            return result
        output = result.output

    return FilterResult.ok(output)
