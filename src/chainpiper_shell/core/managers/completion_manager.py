# src/chainpiper_shell/core/managers/completion_manager.py
import logging
import re
from typing import Iterable, Mapping

from prompt_toolkit.completion import Completion
from prompt_toolkit.document import Document

logger = logging.getLogger(__name__)

# Two-character operators first so '||' is never read as a pipe
OPERATOR_PATTERN = re.compile(r"&&|\|\||;|\|")


class CompletionManager:
    """
    Generates completion suggestions for the segment after the last operator:
    filter names after a pipe, command names everywhere else.
    """

    def __init__(self, commands: Mapping[str, object], filters: Mapping[str, object]):
        self.commands = commands
        self.filters = filters

    def generate_completions(self, document: Document) -> Iterable[Completion]:
        text_before_cursor = document.text_before_cursor

        last_op_match = None
        for match in OPERATOR_PATTERN.finditer(text_before_cursor):
            last_op_match = match

        segment = text_before_cursor[last_op_match.end():] if last_op_match else text_before_cursor
        words_in_segment = segment.lstrip().split()

        # Only the first word of a segment is completed
        is_completing_first_word = (
            len(words_in_segment) == 0 or
            (len(words_in_segment) == 1 and not segment.endswith(" "))
        )
        if not is_completing_first_word:
            return

        word_before_cursor = words_in_segment[0] if words_in_segment else ""
        if last_op_match and last_op_match.group(0) == "|":
            yield from self._complete(self.filters, word_before_cursor, "Filter")
        else:
            yield from self._complete(self.commands, word_before_cursor, "Command")

    def _complete(self, names: Iterable[str], word_before_cursor: str, meta: str) -> Iterable[Completion]:
        start_pos = -len(word_before_cursor)
        for name in sorted(names):
            if name.startswith(word_before_cursor):
                yield Completion(name, start_position=start_pos, display_meta=meta)
