"""
End-to-end evaluation of expression text.

tokenize → resolve_variables → parse_tokens → evaluate. Any stage failing
aborts the run; there is no partial result.
"""

from __future__ import annotations

import logging

from cord.core.config import CordConfig
from cord.core.errors import CordError, with_context
from cord.core.expression_lang.evaluator import evaluate
from cord.core.expression_lang.parser import parse_tokens
from cord.core.expression_lang.resolver import ValueProvider, resolve_variables
from cord.core.expression_lang.tokenizer import tokenize
from cord.core.ir.expressions import Expr

logger = logging.getLogger(__name__)


def parse_source(
    source: str,
    provider: ValueProvider | None = None,
    config: CordConfig | None = None,
) -> Expr:
    """Tokenize, resolve and parse expression text into a tree.

    Errors raised by the token-level stages are re-raised with the source
    text attached so they can point at the offending column.
    """
    config = config or CordConfig()
    try:
        tokens = tokenize(source)
        resolved = resolve_variables(tokens, provider)
        return parse_tokens(
            resolved,
            max_depth=config.max_depth,
            allow_trailing=config.allow_trailing,
        )
    except CordError as e:
        enriched = with_context(e, source)
        if enriched is e:
            raise
        raise enriched from e


def calculate(
    source: str,
    provider: ValueProvider | None = None,
    config: CordConfig | None = None,
) -> float:
    """Evaluate expression text.

    Args:
        source: The expression, e.g. ``"(3 * 4) + sin(x)"``.
        provider: Answers variable values. ``None`` when the expression
            must not use variables.
        config: Parser limits; defaults to ``CordConfig()``.

    Returns:
        The result as a single-precision float, possibly ``inf`` or ``nan``.

    Raises:
        LexError, ResolveError, ParseError, EvalError: From the failing stage.
    """
    expr = parse_source(source, provider, config)
    result = evaluate(expr)
    logger.debug("Calculated %r = %r", source, result)
    return result
