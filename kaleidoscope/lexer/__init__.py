"""
Kaleidoscope Lexer Package

Pull-based tokenizer for the Kaleidoscope language: keywords, identifiers,
floating-point numbers, '#' comments and single-character tokens.
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string, parse_number_prefix
from .errors import Diagnostic, LexerWarning

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LexerWarning",
    "tokenize_string",
    "parse_number_prefix",
]
