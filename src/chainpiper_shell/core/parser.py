# src/chainpiper_shell/core/parser.py
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

from chainpiper_shell.core.errors import ChainParseError
from chainpiper_shell.core.tokenizer import Token, TokenKind, tokenize
from chainpiper_shell.model import Link, Operator

logger = logging.getLogger(__name__)

# Token kinds that close the current link and open the next one.
_OPS: Mapping[TokenKind, Operator] = MappingProxyType({
    TokenKind.AND: Operator.AND,
    TokenKind.OR: Operator.OR,
    TokenKind.SEQUENCE: Operator.SEQUENCE,
})


def parse_chain(tokens: Sequence[Token]) -> List[Link]:
    """
    Builds the ordered list of links from a token sequence.

    A link is (command, pipes, operator), where the operator is the one that
    stood before the command. A pipe takes the next token whole as one filter
    invocation (e.g. 'grep cash').

    Args:
        tokens (Sequence[Token]): Output of the tokenizer.

    Returns:
        List[Link]: The parsed chain. An empty list means nothing to execute.

    Raises:
        ChainParseError: On a pipe without a command before it, or without a
            filter after it. No partial chain is returned.
    """
    out: List[Link] = []
    current_words: List[str] = []
    current_pipes: List[str] = []
    op_before: Optional[Operator] = None

    def _flush(next_op: Optional[Operator] = None) -> None:
        """Closes the current command into a link."""
        nonlocal current_words, current_pipes, op_before
        if current_words:
            # The first link has nothing before it to gate on
            operator = op_before if out else None
            out.append(Link(command=" ".join(current_words), pipes=current_pipes, operator=operator))
        current_words, current_pipes = [], []
        # The operator passed to flush belongs to the *next* command
        op_before = next_op

    i = 0
    while i < len(tokens):
        tok = tokens[i]

        if tok.kind is TokenKind.PIPE:
            if not current_words:
                raise ChainParseError("Pipe requires a command before it")
            i += 1
            if i >= len(tokens) or tokens[i].kind is not TokenKind.WORD:
                raise ChainParseError("Pipe requires a filter after it")
            current_pipes.append(tokens[i].text)
        elif tok.kind in _OPS:
            _flush(next_op=_OPS[tok.kind])
        else:
            current_words.append(tok.text)

        i += 1

    _flush()
    logger.debug("Parsed %d link(s): %r", len(out), out)
    return out


def parse_line(line: str) -> List[Link]:
    """Tokenizes and parses a raw line in one go."""
    return parse_chain(tokenize(line))
