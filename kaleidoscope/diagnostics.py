"""
Diagnostic reporting for parse failures.

The parser raises; the reporter decides where failures go. It turns a
ParseError into a ParseResult with no node, keeps a record of the error and
writes the rendered diagnostic to an error stream that is kept apart from
normal output.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional, TextIO, TypeVar

from .lexer.errors import LexerWarning
from .parser.errors import ParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ParseResult:
    """Either a parsed node or the error that stopped parsing."""
    node: Optional[object] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


class DiagnosticReporter:
    """Collects parse errors and lexer warnings and prints them to an error stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Args:
            stream: Where rendered diagnostics go; defaults to sys.stderr,
                looked up at report time
        """
        self._stream = stream
        self.errors: List[ParseError] = []
        self.warnings: List[LexerWarning] = []

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def capture(self, parse_fn: Callable[[], T]) -> ParseResult:
        """
        Run a parser entry point, turning a ParseError into a failed result.

        Example:
            result = reporter.capture(parser.parse_definition)
        """
        try:
            node = parse_fn()
        except ParseError as e:
            self.report(e)
            return ParseResult(error=e)
        return ParseResult(node=node)

    def report(self, error: ParseError):
        """Record ``error`` and write its diagnostic."""
        self.errors.append(error)
        logger.info("parse error %s at %s: %s", error.code, error.location, error.message)
        self.stream.write(str(error))
        self.stream.flush()

    def warn(self, warning: LexerWarning):
        """Write a warning's diagnostic. Warnings are not counted as errors."""
        self.warnings.append(warning)
        logger.info("warning %s at %s", warning.code, warning.location)
        self.stream.write(str(warning))
        self.stream.flush()

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def clear(self):
        self.errors.clear()
        self.warnings.clear()
