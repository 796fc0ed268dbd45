"""
Error handling for the Kaleidoscope parser.

Every syntax error aborts the top-level construct being parsed. The parser
does not resynchronize; the offending token is left as the current token for
the caller to skip.
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        self.token = token

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnexpectedTokenError(ParseError):
    """The current token cannot start or continue the construct being parsed."""
    pass


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P005": "Invalid expression",
    "P013": "Expression nested too deeply",
}


def describe_token(token: Token) -> str:
    """Human-readable description of a token for error messages."""
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type == TokenType.IDENTIFIER:
        return f"identifier '{token.value}'"
    if token.type == TokenType.NUMBER:
        return f"number {token.value!r}"
    if token.type == TokenType.CHAR and not token.value.isprintable():
        return f"character U+{ord(token.value):04X}"
    return f"'{token.lexeme}'"


def create_unexpected_token_error(expected: str, found: Token,
                                  context: Optional[str] = None) -> UnexpectedTokenError:
    """Create an error for an unexpected token."""
    where = f" {context}" if context else ""
    found_str = describe_token(found)

    suggestions = []
    if expected.startswith("')'") and found.type == TokenType.EOF:
        suggestions.append("Add a closing parenthesis ')'")

    return UnexpectedTokenError(
        message=f"Expected {expected}{where}, got {found_str} instead",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected to see {expected} at this position, but found {found_str}.",
        suggestions=suggestions or None
    )


def create_invalid_expression_error(found: Token) -> UnexpectedTokenError:
    """Create an error for a token that cannot start an expression."""
    found_str = describe_token(found)
    return UnexpectedTokenError(
        message=f"Expected expression, got {found_str} instead",
        location=found.location,
        token=found,
        code="P005",
        help_text="An expression starts with a number, an identifier or '('.",
    )


def create_nesting_too_deep_error(max_depth: int, found: Token) -> ParseError:
    """Create an error for input nested beyond the parser's depth limit."""
    return ParseError(
        message=f"Expression nested more than {max_depth} levels deep",
        location=found.location,
        token=found,
        code="P013",
        help_text="Split the expression up or raise the parser's max_depth.",
    )
