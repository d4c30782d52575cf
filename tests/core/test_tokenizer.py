# tests/core/test_tokenizer.py
from chainpiper_shell.core.tokenizer import (
    AND, OR, PIPE, SEQUENCE, Word, has_chain_operators, tokenize,
)


def test_tokenize_pipe():
    """A pipe splits the line; the filter and its argument stay one word."""
    assert tokenize("status | grep cash") == [Word("status"), PIPE, Word("grep cash")]


def test_tokenize_two_char_operators_before_single():
    """'&&' and '||' are never read as two single-character operators."""
    assert tokenize("crime && status || hideout") == [
        Word("crime"), AND, Word("status"), OR, Word("hideout")
    ]


def test_tokenize_sequence():
    assert tokenize("a;b ; c") == [Word("a"), SEQUENCE, Word("b"), SEQUENCE, Word("c")]


def test_tokenize_quotes_strip_and_protect_operators():
    """Quoted text is literal: no operators, quote characters removed."""
    assert tokenize('echo "cash && heat" | upper') == [Word("echo cash && heat"), PIPE, Word("upper")]
    assert tokenize("msg 'a ; b'") == [Word("msg a ; b")]


def test_tokenize_keeps_inner_text_verbatim():
    assert tokenize("  bank deposit   100  ") == [Word("bank deposit   100")]
    assert tokenize('say "two  spaces"') == [Word("say two  spaces")]


def test_tokenize_single_ampersand_is_text():
    assert tokenize("a & b") == [Word("a & b")]


def test_tokenize_empty_and_whitespace_input():
    assert tokenize("") == []
    assert tokenize("   \t ") == []


def test_has_chain_operators():
    assert has_chain_operators("status | grep cash")
    assert has_chain_operators("a; b")
    assert has_chain_operators("IF heat > 5 then hideout")
    assert not has_chain_operators("status")
    assert not has_chain_operators("iffy command")
