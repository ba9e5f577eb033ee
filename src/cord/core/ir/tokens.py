"""
Token types for the cord expression language.

Tokens are immutable values produced by the tokenizer and rewritten by the
variable resolver. The parser consumes them; only ``NUMBER`` tokens and
operator kinds survive into the expression tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    POWER = auto()

    # Grouping: "(" and "[" open, ")" and "]" close
    LPAREN = auto()
    RPAREN = auto()

    # Values
    NUMBER = auto()
    VARIABLE = auto()  # never seen by the parser

    # Named unary functions
    LN = auto()
    LOG = auto()
    SIN = auto()
    COS = auto()
    TAN = auto()


BINARY_OPERATORS = frozenset(
    {TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.POWER}
)

UNARY_OPERATORS = frozenset(
    {
        TokenKind.MINUS,
        TokenKind.PLUS,
        TokenKind.LN,
        TokenKind.LOG,
        TokenKind.SIN,
        TokenKind.COS,
        TokenKind.TAN,
    }
)

FUNCTION_KEYWORDS: dict[str, TokenKind] = {
    "ln": TokenKind.LN,
    "sin": TokenKind.SIN,
    "cos": TokenKind.COS,
    "tan": TokenKind.TAN,
    "log": TokenKind.LOG,
}

SYMBOLS: dict[TokenKind, str] = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.POWER: "^",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    **{kind: word for word, kind in FUNCTION_KEYWORDS.items()},
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single token.

    Attributes:
        kind: The token type
        text: Source text the token was read from
        pos: Offset of the first character in the source
        value: Numeric payload, set only for ``NUMBER`` tokens
    """

    kind: TokenKind
    text: str
    pos: int = 0
    value: float | None = None

    @property
    def end(self) -> int:
        """Offset just past the token."""
        return self.pos + len(self.text)

    @classmethod
    def number(cls, value: float, text: str | None = None, pos: int = 0) -> Token:
        """Build a ``NUMBER`` token."""
        return cls(TokenKind.NUMBER, text if text is not None else str(value), pos, value)

    def __str__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return _format_number(self.value)
        return SYMBOLS.get(self.kind, self.text)


def _format_number(value: float | None) -> str:
    if value is None:
        return "?"
    if value.is_integer():
        return str(int(value))
    return repr(value)
