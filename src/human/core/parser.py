"""
Statement reader for Human source text.

Turns raw text into a tree of statements. Each statement carries its
lowercase leading keyword ("kind"), its full text, and any indented body.
Indentation is Python-style: a line ending in ':' opens a block whose body
is the following more-indented lines.

This is deliberately shallow. Interpreting statements is the job of the
IR builder; the reader only guarantees a well-formed block structure.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ParseError, make_parse_error

logger = logging.getLogger(__name__)

SECTION_RULE_CHARS = "─-"
TAB_WIDTH = 4
_KIND_STRIP = ",:;.!?\"'()"


@dataclass
class Statement:
    """
    A single line of structured English, with its nested body.

    Attributes:
        kind: Lowercase leading keyword ("show", "check", "data", ...)
        text: Full statement text, without a trailing block colon
        line: Line number (1-indexed)
        body: Nested statements when this line opened a block
        is_block: True when the line ended with ':'
    """

    kind: str
    text: str
    line: int = 0
    body: list[Statement] = field(default_factory=list)
    is_block: bool = False

    @property
    def rest(self) -> str:
        """Text after the leading keyword."""
        parts = self.text.split(None, 1)
        return parts[1].strip() if len(parts) == 2 else ""

    def walk(self) -> Iterator[Statement]:
        """Yield this statement and every nested statement, depth-first."""
        yield self
        for child in self.body:
            yield from child.walk()

    def walk_body(self) -> Iterator[Statement]:
        """Yield every nested statement, excluding this one."""
        for child in self.body:
            yield from child.walk()


@dataclass
class Program:
    """
    Root of the statement tree.

    Attributes:
        statements: Top-level statements in document order
        sections: Section header names ("Frontend", "Backend", ...) in order
        file: Source path used for error reporting
    """

    statements: list[Statement] = field(default_factory=list)
    sections: list[str] = field(default_factory=list)
    file: Path = Path("<memory>")


def statement_kind(text: str) -> str:
    """Return the lowercase leading keyword of a statement."""
    parts = text.split(None, 1)
    if not parts:
        return ""
    return parts[0].strip(_KIND_STRIP).lower()


def make_statement(text: str, line: int = 0, body: list[Statement] | None = None) -> Statement:
    """Build a Statement from raw text, deriving its kind."""
    text = text.strip()
    is_block = body is not None or text.endswith(":")
    if text.endswith(":"):
        text = text[:-1].rstrip()
    return Statement(
        kind=statement_kind(text),
        text=text,
        line=line,
        body=list(body or []),
        is_block=is_block,
    )


class StatementReader:
    """
    Reader that converts source text into a Program.

    Tracks an indentation stack the same way an INDENT/DEDENT lexer does,
    but emits whole statements instead of tokens.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize reader.

        Args:
            text: Source text to read
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.program = Program(file=file)

    def read(self) -> Program:
        """
        Read the entire source text.

        Returns:
            Program with top-level statements and section names

        Raises:
            ParseError: If the block structure is malformed
        """
        # Each frame: (indent level, list receiving statements)
        stack: list[tuple[int, list[Statement]]] = [(0, self.program.statements)]
        pending: Statement | None = None

        for line_no, raw in enumerate(self.text.splitlines(), start=1):
            indent, content = self._measure(raw)
            if not content or content.startswith("#"):
                continue

            if self._is_section_header(content):
                name = content.strip(SECTION_RULE_CHARS + " \t")
                if name:
                    self.program.sections.append(name)
                continue

            self._check_quotes(content, raw, line_no)

            current_indent, current = stack[-1]
            if pending is not None:
                if indent <= current_indent:
                    raise self._unterminated(pending)
                stack.append((indent, pending.body))
                pending = None
            elif indent > current_indent:
                # Continuation lines nest under the previous statement
                if not current:
                    raise make_parse_error(
                        "Unexpected indentation",
                        self.file,
                        line_no,
                        indent + 1,
                        raw,
                    )
                stack.append((indent, current[-1].body))

            while indent < stack[-1][0]:
                stack.pop()
            if indent != stack[-1][0]:
                raise make_parse_error(
                    f"Inconsistent indentation (expected {stack[-1][0]} spaces, got {indent})",
                    self.file,
                    line_no,
                    1,
                    raw,
                )

            stmt = make_statement(content, line_no)
            stack[-1][1].append(stmt)
            if stmt.is_block:
                pending = stmt

        if pending is not None:
            raise self._unterminated(pending)

        logger.debug(
            "Read %d top-level statements from %s", len(self.program.statements), self.file
        )
        return self.program

    @staticmethod
    def _measure(raw: str) -> tuple[int, str]:
        """Return the indentation width and stripped content of a line."""
        indent = 0
        for ch in raw:
            if ch == " ":
                indent += 1
            elif ch == "\t":
                indent += TAB_WIDTH
            else:
                break
        return indent, raw.strip()

    @staticmethod
    def _is_section_header(content: str) -> bool:
        return content.startswith("─") or content.startswith("--")

    def _check_quotes(self, content: str, raw: str, line_no: int) -> None:
        if content.count('"') % 2:
            column = raw.rfind('"') + 1
            raise make_parse_error(
                "Unterminated string literal", self.file, line_no, column, raw
            )

    def _unterminated(self, stmt: Statement) -> ParseError:
        return make_parse_error(
            f"Unterminated block '{stmt.text}': expected an indented body",
            self.file,
            stmt.line,
            len(stmt.text) + 1,
        )


def parse_source(text: str, file: Path | None = None) -> Program:
    """
    Convenience function to read source text into a Program.

    Args:
        text: Source text
        file: Source file path (defaults to "<memory>")

    Returns:
        Program statement tree
    """
    return StatementReader(text, file or Path("<memory>")).read()


def parse_file(path: Path) -> Program:
    """Read and parse a .human file."""
    return parse_source(path.read_text(encoding="utf-8"), path)
