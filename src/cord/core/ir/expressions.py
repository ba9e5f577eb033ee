"""
Expression tree types for the cord IR.

Three node shapes make up the tree:
- Binary: left op right, op one of + - * / ^
- Unary: op operand, op one of - + ln log sin cos tan
- Value: a NUMBER token

Brackets never appear in the tree; they only shape it during parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .tokens import SYMBOLS, Token, TokenKind

# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class ValueExpr(BaseModel):
    """A numeric leaf, wrapping the NUMBER token it was parsed from."""

    token: Token = Field(description="The NUMBER token")

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> float | None:
        return self.token.value

    def __str__(self) -> str:
        return str(self.token)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    left: Expr
    op: TokenKind
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return render(self)


class UnaryExpr(BaseModel):
    """
    Unary operation: op operand.

    Sign operators render as a prefix (``-3``), named functions as a call
    (``sin(3)``).
    """

    op: TokenKind
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return render(self)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = BinaryExpr | UnaryExpr | ValueExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()


def render(expr: Expr) -> str:
    """Render a tree as fully parenthesized text.

    Binary nodes print as ``(left op right)``, sign operators as a prefix and
    named functions as a call. Works on a stack of pending pieces, so chains
    of any length render without recursion.
    """
    parts: list[str] = []
    pending: list[Expr | str] = [expr]

    while pending:
        item = pending.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, BinaryExpr):
            symbol = SYMBOLS.get(item.op, item.op.value)
            # Pushed in reverse: popped as "(", left, op, right, ")"
            pending.extend([")", item.right, f" {symbol} ", item.left, "("])
        elif isinstance(item, UnaryExpr):
            symbol = SYMBOLS.get(item.op, item.op.value)
            if item.op in (TokenKind.MINUS, TokenKind.PLUS):
                pending.extend([item.operand, symbol])
            else:
                pending.extend([")", item.operand, f"{symbol}("])
        else:
            parts.append(str(item))

    return "".join(parts)
