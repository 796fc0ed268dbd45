"""
Interactive read loop around the parser.

Prints a prompt, dispatches on the current token and reports what it parsed.
After a failed statement the driver skips the offending token itself, since
the parser never resynchronizes.
"""

import logging
import sys
from typing import Mapping, Optional, TextIO, Union

from .diagnostics import DiagnosticReporter, ParseResult
from .lexer.tokens import TokenType
from .parser.ast_nodes import Prototype, dump_ast
from .parser.parser import Parser, DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "ready> "


class Driver:
    """Reads top-level constructs until end of input."""

    def __init__(
        self,
        source: Union[str, TextIO],
        output: Optional[TextIO] = None,
        errors: Optional[TextIO] = None,
        prompt: Optional[str] = DEFAULT_PROMPT,
        dump: bool = False,
        filename: str = "<stdin>",
        precedence: Optional[Mapping[str, int]] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.output = output if output is not None else sys.stdout
        self.errors = errors if errors is not None else sys.stderr
        self.prompt = prompt
        self.dump = dump
        self.parser = Parser(source, precedence=precedence, max_depth=max_depth, filename=filename)
        self.reporter = DiagnosticReporter(self.errors)
        self.parsed_count = 0

    def run(self) -> int:
        """Process the whole input. Returns the exit status (0 on end of input)."""
        self._show_prompt()
        self.parser.advance_token()

        while True:
            self._show_prompt()
            token = self.parser.current_token

            if token.type == TokenType.EOF:
                logger.info("end of input after %d constructs, %d errors",
                            self.parsed_count, self.reporter.error_count)
                return 0
            if token.is_char(';'):
                # ignore top-level semicolons
                self.parser.advance_token()
            elif token.type == TokenType.DEF:
                self.handle_definition()
            elif token.type == TokenType.EXTERN:
                self.handle_extern()
            else:
                self.handle_top_level_expression()

    def handle_definition(self) -> ParseResult:
        result = self.reporter.capture(self.parser.parse_definition)
        return self._finish(result, "Parsed a function definition.")

    def handle_extern(self) -> ParseResult:
        result = self.reporter.capture(self.parser.parse_extern)
        return self._finish(result, "Parsed an extern.")

    def handle_top_level_expression(self) -> ParseResult:
        result = self.reporter.capture(self.parser.parse_top_level_expr)
        return self._finish(result, "Parsed a top-level expr.")

    def _finish(self, result: ParseResult, message: str) -> ParseResult:
        self._report_warnings()
        if not result.ok:
            # Skip token for error recovery
            self.parser.advance_token()
            return result

        self.parsed_count += 1
        self.output.write(message + "\n")
        if self.dump:
            rendered = dump_ast(result.node)
            if isinstance(result.node, Prototype):
                rendered = f"(extern {rendered})"
            self.output.write(rendered + "\n")
        self.output.flush()
        return result

    def _report_warnings(self):
        for warning in self.parser.lexer.take_warnings():
            self.reporter.warn(warning)

    def _show_prompt(self):
        if self.prompt:
            self.errors.write(self.prompt)
            self.errors.flush()


def run_repl(source: Union[str, TextIO, None] = None, **options) -> int:
    """Run the read loop over ``source`` (stdin by default)."""
    if source is None:
        source = sys.stdin
    return Driver(source, **options).run()
