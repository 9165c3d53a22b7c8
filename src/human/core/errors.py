"""
Error types for Human source reading, IR building, and serialization.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class HumanError(Exception):
    """Base exception for all Human errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(HumanError):
    """
    Raised when source text cannot be turned into a statement tree.

    Examples:
    - Inconsistent indentation
    - A block header ("data User:") with no indented body
    - Unterminated string literal
    """

    pass


class BuildError(HumanError):
    """
    Raised when a statement tree is structurally unusable for the IR.

    Examples:
    - A named block without a name ("data:")
    - Duplicate field names within one data model

    Content the builder cannot classify is never an error; it is
    preserved as text on the owning node instead.
    """

    pass


class SerializationError(HumanError):
    """
    Raised when an encoded Application cannot be decoded.

    Examples:
    - Malformed JSON or YAML
    - Document that does not match the Application schema
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line showing the error location
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "app.human:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the source line with its number and an error marker."""
        if not self.snippet:
            return ""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^^^"
        return f"{prefix}{self.snippet}\n{marker}"


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return ParseError(message, context)


def make_build_error(
    message: str,
    file: Path | None = None,
    line: int | None = None,
) -> BuildError:
    """
    Helper to create a BuildError with optional context.

    Args:
        message: Error description
        file: Optional source file path
        line: Optional line number

    Returns:
        BuildError with context if location provided
    """
    if file and line:
        return BuildError(message, ErrorContext(file=file, line=line, column=1))
    return BuildError(message)
