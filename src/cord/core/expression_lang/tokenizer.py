"""
Tokenizer for the cord expression language.

Converts an expression string into a sequence of typed tokens.
"""

from __future__ import annotations

import logging
import re

from cord.core.errors import ErrorContext, LexError
from cord.core.expression_lang.floats import to_single
from cord.core.ir.tokens import FUNCTION_KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

# Number pattern: a digit followed by digits and dots (validated after matching)
_NUMBER_RE = re.compile(r"[0-9][0-9.]*")
# Identifier: a run of ASCII letters; digits end it, so "cos5" is cos 5
_IDENT_RE = re.compile(r"[A-Za-z]+")

_WHITESPACE = frozenset(" \r\n")

_SINGLE_MAP: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.POWER,
    "(": TokenKind.LPAREN,
    "[": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "]": TokenKind.RPAREN,
}


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Args:
        source: Expression text, e.g. ``"3 + sin(x) * 2"``

    Returns:
        Tokens in source order. Empty input gives an empty list.

    Raises:
        LexError: On an unrecognized character, a malformed number, or a
            multi-character identifier that is not a function name.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c in _WHITESPACE:
            i += 1
            continue

        if c in _SINGLE_MAP:
            tokens.append(Token(_SINGLE_MAP[c], c, i))
            i += 1
            continue

        m = _NUMBER_RE.match(source, i)
        if m:
            tokens.append(_read_number(source, m.group(0), i))
            i = m.end()
            continue

        m = _IDENT_RE.match(source, i)
        if m:
            tokens.append(_read_identifier(source, m.group(0), i))
            i = m.end()
            continue

        raise LexError(f"unrecognized character {c!r}", ErrorContext(source, i))

    logger.debug("Tokenized %d characters into %d tokens", n, len(tokens))
    return tokens


def _read_number(source: str, text: str, pos: int) -> Token:
    """Convert a matched numeric literal into a NUMBER token."""
    if text.count(".") > 1:
        raise LexError(f"malformed number literal {text!r}", ErrorContext(source, pos))
    try:
        value = float(text)
    except ValueError as e:
        raise LexError(f"malformed number literal {text!r}", ErrorContext(source, pos)) from e
    return Token.number(to_single(value), text, pos)


def _read_identifier(source: str, word: str, pos: int) -> Token:
    """Map a word to a function token or a single-letter VARIABLE."""
    kind = FUNCTION_KEYWORDS.get(word)
    if kind is not None:
        return Token(kind, word, pos)
    if len(word) > 1:
        raise LexError(
            f"variable identifier must be exactly one character, got {word!r}",
            ErrorContext(source, pos),
        )
    return Token(TokenKind.VARIABLE, word, pos)
