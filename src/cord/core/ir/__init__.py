"""
cord Intermediate Representation (IR) types.

Tokens produced by the tokenizer and the expression tree built by the
parser. All types are re-exported from this package.
"""

from .expressions import BinaryExpr, Expr, UnaryExpr, ValueExpr, render
from .tokens import (
    BINARY_OPERATORS,
    FUNCTION_KEYWORDS,
    SYMBOLS,
    UNARY_OPERATORS,
    Token,
    TokenKind,
)

__all__ = [
    # Tokens
    "Token",
    "TokenKind",
    "BINARY_OPERATORS",
    "UNARY_OPERATORS",
    "FUNCTION_KEYWORDS",
    "SYMBOLS",
    # Expressions
    "Expr",
    "BinaryExpr",
    "UnaryExpr",
    "ValueExpr",
    "render",
]
