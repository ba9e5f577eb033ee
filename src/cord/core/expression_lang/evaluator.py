"""
Expression evaluator for the cord expression language.

Walks the expression tree post-order, left before right, with an explicit
stack: long left-leaning chains such as ``1+1+...+1`` are as deep as they
are long and would exhaust Python's recursion limit otherwise.

Pure evaluation, no I/O. Non-finite results (``1/0``, ``ln 0``) are values,
not errors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from cord.core.errors import EvalError
from cord.core.expression_lang import floats
from cord.core.ir.expressions import BinaryExpr, Expr, UnaryExpr, ValueExpr
from cord.core.ir.tokens import TokenKind

logger = logging.getLogger(__name__)

_BIN_OPS: dict[TokenKind, Callable[[float, float], float]] = {
    TokenKind.PLUS: lambda a, b: a + b,
    TokenKind.MINUS: lambda a, b: a - b,
    TokenKind.STAR: lambda a, b: a * b,
    TokenKind.SLASH: floats.divide,
    TokenKind.POWER: floats.power,
}

_UNARY_OPS: dict[TokenKind, Callable[[float], float]] = {
    TokenKind.MINUS: lambda a: -a,
    TokenKind.PLUS: lambda a: a,
    TokenKind.SIN: floats.sin,
    TokenKind.COS: floats.cos,
    TokenKind.TAN: floats.tan,
    TokenKind.LN: floats.ln,
    TokenKind.LOG: floats.log10,
}


def evaluate(expr: Expr) -> float:
    """Evaluate an expression tree to a single-precision float.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value, rounded to single precision.

    Raises:
        EvalError: If the tree holds an operator or leaf the grammar never
            produces.
    """
    # Work items are (node, children_done). A node is pushed twice: once to
    # schedule its children, once more to combine their results.
    stack: list[tuple[Expr, bool]] = [(expr, False)]
    values: list[float] = []

    while stack:
        node, children_done = stack.pop()

        if isinstance(node, ValueExpr):
            values.append(_interpret_value(node))
            continue

        if isinstance(node, BinaryExpr):
            if children_done:
                right = values.pop()
                left = values.pop()
                values.append(_interpret_binary(node, left, right))
            else:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
            continue

        if isinstance(node, UnaryExpr):
            if children_done:
                values.append(_interpret_unary(node, values.pop()))
            else:
                stack.append((node, True))
                stack.append((node.operand, False))
            continue

        raise EvalError(f"Unknown expression type: {type(node).__name__}")

    result = values.pop()
    logger.debug("Evaluated expression to %r", result)
    return result


def _interpret_value(node: ValueExpr) -> float:
    """Unwrap a NUMBER leaf."""
    token = node.token
    if token.kind != TokenKind.NUMBER or token.value is None:
        raise EvalError(f"invalid value: {token.kind}")
    return token.value


def _interpret_binary(node: BinaryExpr, left: float, right: float) -> float:
    func = _BIN_OPS.get(node.op)
    if func is None:
        raise EvalError(f"invalid binary operand: {node.op}")
    return floats.to_single(func(left, right))


def _interpret_unary(node: UnaryExpr, operand: float) -> float:
    func = _UNARY_OPS.get(node.op)
    if func is None:
        raise EvalError(f"invalid unary operand: {node.op}")
    return floats.to_single(func(operand))
