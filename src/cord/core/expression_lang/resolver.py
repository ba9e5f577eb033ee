"""
Variable resolution for the cord expression language.

Replaces VARIABLE tokens with NUMBER tokens before parsing. Values come from
an injected provider, asked at most once per identifier per call.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from cord.core.errors import ErrorContext, ResolveError
from cord.core.expression_lang.floats import to_single
from cord.core.ir.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Plain ASCII decimal or scientific notation, plus inf/infinity/nan
_ANSWER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)


@runtime_checkable
class ValueProvider(Protocol):
    """Source of variable values.

    ``request`` receives a one-character identifier and returns the user's
    answer as text; the resolver parses it.
    """

    def request(self, identifier: str) -> str: ...


class MappingValueProvider:
    """Answers variable requests from a fixed mapping.

    Every request is recorded in ``requests``, in order.
    """

    def __init__(self, values: Mapping[str, object]) -> None:
        self.values = dict(values)
        self.requests: list[str] = []

    def request(self, identifier: str) -> str:
        self.requests.append(identifier)
        if identifier not in self.values:
            raise ResolveError(f"no value provided for variable {identifier!r}")
        return str(self.values[identifier])


def resolve_variables(
    tokens: Iterable[Token],
    provider: ValueProvider | None,
) -> list[Token]:
    """Substitute every VARIABLE token with a NUMBER token.

    Args:
        tokens: Tokens from the tokenizer.
        provider: Asked for the value of each identifier the first time it
            appears. ``None`` when the expression must not use variables.

    Returns:
        The token sequence with no VARIABLE tokens left.

    Raises:
        ResolveError: If there is no provider, the provider fails to read
            input, or its answer is not a number.
    """
    bindings: dict[str, float] = {}
    resolved: list[Token] = []

    for token in tokens:
        if token.kind != TokenKind.VARIABLE:
            resolved.append(token)
            continue

        identifier = token.text
        if identifier in bindings:
            logger.debug("Reusing value of %r", identifier)
        else:
            bindings[identifier] = _request_value(provider, identifier, token.pos)
        resolved.append(Token.number(bindings[identifier], identifier, token.pos))

    return resolved


def _request_value(provider: ValueProvider | None, identifier: str, pos: int) -> float:
    """Ask the provider for one identifier and parse the answer."""
    context = ErrorContext(source="", pos=pos)
    if provider is None:
        raise ResolveError(f"no value provider for variable {identifier!r}", context)

    logger.debug("Requesting value for %r", identifier)
    try:
        answer = provider.request(identifier)
    except (OSError, EOFError) as e:
        raise ResolveError(f"failed to read value for {identifier!r}: {e}", context) from e

    text = answer.strip()
    if not _ANSWER_RE.fullmatch(text):
        raise ResolveError(f"value for {identifier!r} is not a number: {text!r}", context)
    return to_single(float(text))
