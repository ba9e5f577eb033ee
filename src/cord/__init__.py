"""
cord - arithmetic expression evaluator.

Tokenizes, parses and evaluates expressions such as ``ln(x) + 2 ^ [y - 1]``,
asking for the value of each single-letter variable once.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import ConfigError, CordError, EvalError, LexError, ParseError, ResolveError
from .core.expression_lang import (
    MappingValueProvider,
    ValueProvider,
    calculate,
    evaluate,
    parse_tokens,
    resolve_variables,
    tokenize,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "CordError",
    "ConfigError",
    "LexError",
    "ResolveError",
    "ParseError",
    "EvalError",
    "MappingValueProvider",
    "ValueProvider",
    "calculate",
    "evaluate",
    "parse_tokens",
    "resolve_variables",
    "tokenize",
]
