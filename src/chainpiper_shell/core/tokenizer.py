# src/chainpiper_shell/core/tokenizer.py
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import List, NamedTuple, Optional

from chainpiper_shell.core.conditions import is_conditional

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')
# Characters that make a line worth routing through the chain interpreter.
_CHAIN_CHARS = re.compile(r"[|&;]")


class TokenKind(Enum):
    WORD = "word"
    PIPE = "|"
    AND = "&&"
    OR = "||"
    SEQUENCE = ";"


class Token(NamedTuple):
    kind: TokenKind
    text: Optional[str] = None

    def __repr__(self) -> str:
        if self.kind is TokenKind.WORD:
            return f"Word({self.text!r})"
        return self.kind.name.capitalize()


def Word(text: str) -> Token:
    """Builds a WORD token."""
    return Token(TokenKind.WORD, text)


PIPE = Token(TokenKind.PIPE)
AND = Token(TokenKind.AND)
OR = Token(TokenKind.OR)
SEQUENCE = Token(TokenKind.SEQUENCE)


def tokenize(line: str) -> List[Token]:
    """
    Splits a raw console line into WORD and operator tokens.

    Everything between two operators forms a single WORD, trimmed but otherwise
    verbatim. Quoted text is copied without its quote characters, so operators
    inside quotes are literal.
    Nested or escaped quotes are not supported.

    Args:
        line (str): The raw input line.

    Returns:
        List[Token]: The token sequence; empty for blank input.
    """
    s = (line or "").strip()
    tokens: List[Token] = []
    if not s:
        return tokens

    current: List[str] = []
    quote_char: Optional[str] = None

    def _flush() -> None:
        text = "".join(current).strip()
        if text:
            tokens.append(Word(text))
        current.clear()

    i = 0
    n = len(s)
    while i < n:
        char = s[i]
        next_char = s[i + 1] if i + 1 < n else ""

        # --- Quoted text ---
        if quote_char is not None:
            if char == quote_char:
                quote_char = None
            else:
                current.append(char)
            i += 1
            continue
        if char in _QUOTES:
            quote_char = char
            i += 1
            continue

        # --- Operators: two-character forms first ---
        if char == "&" and next_char == "&":
            _flush()
            tokens.append(AND)
            i += 2
        elif char == "|" and next_char == "|":
            _flush()
            tokens.append(OR)
            i += 2
        elif char == "|":
            _flush()
            tokens.append(PIPE)
            i += 1
        elif char == ";":
            _flush()
            tokens.append(SEQUENCE)
            i += 1
        else:
            current.append(char)
            i += 1

    _flush()
    logger.debug("Tokenized %r into %r", s, tokens)
    return tokens


def has_chain_operators(line: str) -> bool:
    """Returns True if the line uses pipes, chain operators or an if-clause."""
    s = (line or "").strip()
    return bool(_CHAIN_CHARS.search(s)) or is_conditional(s)
