"""Core cord functionality: IR, tokenizer, resolver, parser, evaluator, configuration."""

from . import ir
from .config import CordConfig, load_config
from .errors import (
    ConfigError,
    CordError,
    ErrorContext,
    EvalError,
    LexError,
    ParseError,
    ResolveError,
)
from .expression_lang import (
    MappingValueProvider,
    ValueProvider,
    calculate,
    evaluate,
    parse_source,
    parse_tokens,
    resolve_variables,
    tokenize,
)

__all__ = [
    "ir",
    # Errors
    "CordError",
    "ConfigError",
    "ErrorContext",
    "EvalError",
    "LexError",
    "ParseError",
    "ResolveError",
    # Configuration
    "CordConfig",
    "load_config",
    # Expression language
    "MappingValueProvider",
    "ValueProvider",
    "calculate",
    "evaluate",
    "parse_source",
    "parse_tokens",
    "resolve_variables",
    "tokenize",
]
