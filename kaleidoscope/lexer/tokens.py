"""
Token definitions for the Kaleidoscope lexer.

The language only has a handful of lexical categories:
- End of input
- The two command keywords, ``def`` and ``extern``
- Identifiers and floating-point numbers
- Any other single character (operators, parentheses, commas, ...)
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """Enumeration of all token types in Kaleidoscope."""

    EOF = auto()                    # End of input

    # Commands
    DEF = auto()                    # def
    EXTERN = auto()                 # extern

    # Primary
    IDENTIFIER = auto()             # foo, x1
    NUMBER = auto()                 # 1, 3.14, .5

    # Anything else, one character at a time: ( ) , + - * / < > ; ...
    CHAR = auto()


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source text.

    Used for error reporting and for the spans attached to AST nodes.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Kaleidoscope language.

    ``value`` holds the semantic payload: the name for identifiers, the float
    for numbers and the character itself for CHAR tokens.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any
    location: SourceLocation

    def __str__(self) -> str:
        if self.type == TokenType.NUMBER and self.lexeme != repr(self.value):
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_keyword(self) -> bool:
        return self.type in (TokenType.DEF, TokenType.EXTERN)

    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER

    @property
    def is_eof(self) -> bool:
        return self.type == TokenType.EOF

    def is_char(self, char: str) -> bool:
        """Check if this is the literal-character token for ``char``."""
        return self.type == TokenType.CHAR and self.value == char


KEYWORDS = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}

# C-locale character classes. Anything outside them (including non-ASCII
# letters) falls through to a CHAR token.
WHITESPACE_CHARS = frozenset(" \t\n\r\v\f")
LETTER_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
DIGIT_CHARS = frozenset("0123456789")
COMMENT_CHAR = "#"
LINE_TERMINATORS = frozenset("\n\r")
