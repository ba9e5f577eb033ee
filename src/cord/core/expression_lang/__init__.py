"""
cord expression language.

Tokenizer, variable resolver, parser and evaluator for arithmetic
expressions with single-letter variables and the functions ln, log, sin,
cos and tan.

Usage:
    from cord.core.expression_lang import MappingValueProvider, calculate

    result = calculate("a * (2 + 3)", MappingValueProvider({"a": 4}))
    # result == 20.0
"""

from cord.core.expression_lang.calculator import calculate, parse_source
from cord.core.expression_lang.evaluator import evaluate
from cord.core.expression_lang.parser import parse_tokens
from cord.core.expression_lang.resolver import (
    MappingValueProvider,
    ValueProvider,
    resolve_variables,
)
from cord.core.expression_lang.tokenizer import tokenize

__all__ = [
    "MappingValueProvider",
    "ValueProvider",
    "calculate",
    "evaluate",
    "parse_source",
    "parse_tokens",
    "resolve_variables",
    "tokenize",
]
