"""
Error types for cord tokenizing, variable resolution, parsing and evaluation.
"""

from dataclasses import dataclass
from typing import Optional


class CordError(Exception):
    """Base exception for all cord errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    @property
    def pos(self) -> int | None:
        """Offset into the source text, when known."""
        return self.context.pos if self.context else None


class LexError(CordError):
    """
    Raised when expression text cannot be split into tokens.

    Examples:
    - Unrecognized character
    - Malformed number literal
    - Multi-character identifier that is not a function name
    """

    pass


class ResolveError(CordError):
    """
    Raised when a variable cannot be given a value.

    Examples:
    - Provider answered with text that is not a number
    - Provider failed to read input
    - Expression uses a variable but no provider was given
    """

    pass


class ParseError(CordError):
    """
    Raised when a token sequence does not match the grammar.

    Examples:
    - Unclosed bracket
    - Empty input or a missing operand
    - Trailing tokens after a complete expression
    - Nesting deeper than the configured limit
    """

    pass


class EvalError(CordError):
    """
    Raised when an expression tree is structurally invalid.

    The parser never builds such trees; reaching this means a tree was
    constructed by hand or an internal invariant was broken.
    """

    pass


class ConfigError(CordError):
    """Raised when cord.toml or a CORD_* environment variable is invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        source: The full expression text
        pos: Offset (0-indexed) of the offending character or token
    """

    source: str
    pos: int

    @property
    def line(self) -> int:
        """Line number (1-indexed)."""
        return self.source.count("\n", 0, self.pos) + 1

    @property
    def column(self) -> int:
        """Column number (1-indexed)."""
        line_start = self.source.rfind("\n", 0, self.pos) + 1
        return self.pos - line_start + 1

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "1:5" followed by the offending line
        """
        if not self.source:
            return f"at offset {self.pos}"
        location = f"{self.line}:{self.column}"
        snippet = self._format_snippet()
        if snippet:
            return f"{location}\n{snippet}"
        return location

    def _format_snippet(self) -> str:
        """Format the offending line with its number and an error marker."""
        lines = self.source.split("\n")
        if not self.source.strip():
            return ""

        prefix = f"{self.line:4d} | "
        text = lines[self.line - 1].rstrip("\r")
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{text}\n{' ' * marker_pos}^^^"


def with_context(error: CordError, source: str) -> CordError:
    """
    Attach source context to an error raised with only a position.

    Stages raise errors carrying a bare offset (``ErrorContext`` with an
    empty source) because they only see tokens; the pipeline calls this to
    fill in the text once it is known.

    Args:
        error: The error to enrich
        source: The expression text

    Returns:
        A new error of the same type with full context, or ``error`` itself
        when it has no position or already carries the source.
    """
    if error.context is None or error.context.source:
        return error
    enriched = type(error)(error.message, ErrorContext(source=source, pos=error.context.pos))
    return enriched
