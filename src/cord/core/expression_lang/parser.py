"""
Recursive descent parser for the cord expression language.

Grammar (precedence low to high):
    expression  → term
    term        → factor (("+"|"-") factor)*
    factor      → power (("*"|"/") power)*
    power       → unary ("^" unary)*
    unary       → ("-"|"+"|"ln"|"log"|"sin"|"cos"|"tan") unary | primary
    primary     → NUMBER | "(" expression ")"

All binary levels are left-associative, including "^". Unary operators
stack right to left: "- - 3" is -(-(3)), "sin-cos5" is sin(-(cos(5))).
"""

from __future__ import annotations

from collections.abc import Sequence

from cord.core.config import DEFAULT_MAX_DEPTH
from cord.core.errors import ErrorContext, ParseError
from cord.core.ir.expressions import BinaryExpr, Expr, UnaryExpr, ValueExpr
from cord.core.ir.tokens import UNARY_OPERATORS, Token, TokenKind


class _Parser:
    """Recursive descent parser over a resolved token list."""

    def __init__(self, tokens: Sequence[Token], max_depth: int) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def match(self, *kinds: TokenKind) -> Token | None:
        tok = self.current
        if tok is not None and tok.kind in kinds:
            return self.advance()
        return None

    def error(self, message: str) -> ParseError:
        """Build a ParseError pointing at the current token (or end of input)."""
        tok = self.current
        if tok is not None:
            pos = tok.pos
        elif self.tokens:
            pos = self.tokens[-1].end
        else:
            pos = 0
        return ParseError(message, ErrorContext(source="", pos=pos))

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise self.error(f"expression nested too deeply (limit {self.max_depth})")

    def _leave(self) -> None:
        self.depth -= 1

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """Top-level: term."""
        return self.parse_term()

    def parse_term(self) -> Expr:
        """factor (('+' | '-') factor)*"""
        left = self.parse_factor()
        while op := self.match(TokenKind.PLUS, TokenKind.MINUS):
            right = self.parse_factor()
            left = BinaryExpr(left=left, op=op.kind, right=right)
        return left

    def parse_factor(self) -> Expr:
        """power (('*' | '/') power)*"""
        left = self.parse_power()
        while op := self.match(TokenKind.STAR, TokenKind.SLASH):
            right = self.parse_power()
            left = BinaryExpr(left=left, op=op.kind, right=right)
        return left

    def parse_power(self) -> Expr:
        """unary ('^' unary)*"""
        left = self.parse_unary()
        while op := self.match(TokenKind.POWER):
            right = self.parse_unary()
            left = BinaryExpr(left=left, op=op.kind, right=right)
        return left

    def parse_unary(self) -> Expr:
        """('-' | '+' | 'ln' | 'log' | 'sin' | 'cos' | 'tan') unary | primary"""
        op = self.match(*UNARY_OPERATORS)
        if op is None:
            return self.parse_primary()

        self._enter()
        try:
            operand = self.parse_unary()
        finally:
            self._leave()
        return UnaryExpr(op=op.kind, operand=operand)

    def parse_primary(self) -> Expr:
        """NUMBER | '(' expression ')'"""
        if tok := self.match(TokenKind.NUMBER):
            return ValueExpr(token=tok)

        if self.match(TokenKind.LPAREN):
            self._enter()
            try:
                expr = self.parse_expression()
            finally:
                self._leave()
            if not self.match(TokenKind.RPAREN):
                raise self.error("unclosed bracket")
            return expr

        raise self.error("parser failed")


def parse_tokens(
    tokens: Sequence[Token],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    allow_trailing: bool = False,
) -> Expr:
    """Parse a resolved token sequence into an expression tree.

    Args:
        tokens: Tokens with every VARIABLE already replaced by a NUMBER.
        max_depth: Deepest allowed nesting of brackets and unary operators.
        allow_trailing: Ignore tokens left over after a complete expression
            instead of rejecting them.

    Returns:
        Parsed expression AST.

    Raises:
        ParseError: If the tokens do not form an expression.
    """
    parser = _Parser(tokens, max_depth)
    try:
        expr = parser.parse_expression()
    except RecursionError:
        # max_depth was set beyond what the interpreter stack can hold
        raise parser.error("expression nested too deeply") from None

    # Ensure all tokens consumed
    if parser.current is not None and not allow_trailing:
        raise parser.error(f"unexpected trailing token {parser.current.text!r}")

    return expr
