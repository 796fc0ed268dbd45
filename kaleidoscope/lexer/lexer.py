"""
Kaleidoscope Lexer - turns a character stream into tokens on demand.

The lexer is pull based: the parser asks for one token at a time and the
lexer reads only as many characters as it needs, keeping a single character
of lookahead. On interactive input a read only blocks when the parser needs
another token; finishing an expression still pulls the token after it, so
the parser can see whether an operator follows.
"""

import io
import logging
import re
from typing import List, Optional, TextIO, Union

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, WHITESPACE_CHARS, LETTER_CHARS,
    DIGIT_CHARS, COMMENT_CHAR, LINE_TERMINATORS
)
from .errors import LexerWarning, create_truncated_number_warning

logger = logging.getLogger(__name__)

# Longest prefix strtod() would accept from a run of digits and dots
_NUMBER_PREFIX = re.compile(r'\d+\.?\d*|\.\d+')


def parse_number_prefix(text: str) -> float:
    """
    Parse the leading numeric part of ``text``.

    Mirrors C's strtod() on strings made of digits and dots: the parse stops
    at the first character that cannot extend the number, so ``"1.2.3"``
    gives ``1.2``. A string with no numeric prefix (``"."``) gives ``0.0``.
    """
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(0))


class Lexer:
    """
    Kaleidoscope lexical analyzer.

    Reads characters from a string or a text stream and produces tokens via
    :meth:`next_token`. All cursor state lives on the instance, so several
    lexers can run side by side.
    """

    def __init__(self, source: Union[str, TextIO], filename: str = "<stdin>"):
        """
        Initialize the lexer.

        Args:
            source: Source text, or a readable text stream such as sys.stdin
            filename: Name of the source for error reporting
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        self.stream = source
        self.filename = filename
        self.warnings: List[LexerWarning] = []
        self._reset_state()

    def _reset_state(self):
        self.pos = 0
        self.line = 1
        self.column = 1
        self.warnings.clear()
        # Lookahead character; '' once the stream is exhausted, None before
        # the first read so constructing a lexer never blocks.
        self._current: Optional[str] = None

    def reset(self):
        """
        Rewind to the start of the source.

        Only possible for seekable sources (strings, files); interactive
        streams cannot be replayed.
        """
        if not self.stream.seekable():
            raise ValueError(f"Cannot rewind non-seekable source {self.filename!r}")
        self.stream.seek(0)
        self._reset_state()

    def next_token(self) -> Token:
        """Read and return the next token, advancing the cursor."""
        if self._current is None:
            self._current = self.stream.read(1)

        self._skip_whitespace_and_comments()

        location = self._location()
        char = self._current

        if char in LETTER_CHARS:
            return self._tokenize_identifier_or_keyword(location)

        if char in DIGIT_CHARS or char == '.':
            return self._tokenize_number(location)

        if not char:
            return Token(TokenType.EOF, "", None, location)

        # Unknown characters are handed to the parser as-is
        self._advance()
        return Token(TokenType.CHAR, char, char, location)

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the input.

        Returns:
            List of tokens ending with the EOF token
        """
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and '#' line comments."""
        while True:
            while self._current in WHITESPACE_CHARS:
                self._advance()

            if self._current != COMMENT_CHAR:
                return

            # The line terminator itself is skipped as whitespace next round
            while self._current and self._current not in LINE_TERMINATORS:
                self._advance()

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        chars = [self._current]
        self._advance()
        while self._current in LETTER_CHARS or self._current in DIGIT_CHARS:
            chars.append(self._current)
            self._advance()

        lexeme = ''.join(chars)
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None
        return Token(token_type, lexeme, value, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        chars = []
        while self._current in DIGIT_CHARS or self._current == '.':
            chars.append(self._current)
            self._advance()

        lexeme = ''.join(chars)
        value = parse_number_prefix(lexeme)

        # Lenient on purpose: "1.2.3" is the number 1.2, not an error.
        match = _NUMBER_PREFIX.match(lexeme)
        if match is None or match.end() != len(lexeme):
            warning = create_truncated_number_warning(lexeme, value, location)
            self.warnings.append(warning)
            logger.debug("truncated numeric literal %r to %r at %s", lexeme, value, location)

        return Token(TokenType.NUMBER, lexeme, value, location)

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def _advance(self):
        """Move past the lookahead character, updating line/column."""
        if not self._current:
            return
        if self._current == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        self._current = self.stream.read(1)

    def has_warnings(self) -> bool:
        """Check if lexer recorded any warnings."""
        return len(self.warnings) > 0

    def take_warnings(self) -> List[LexerWarning]:
        """Return the recorded warnings and forget them."""
        warnings = list(self.warnings)
        self.warnings.clear()
        return warnings


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens including the final EOF token
    """
    return Lexer(source, filename).tokenize()
