"""
Test suite for the Kaleidoscope lexer.

Tests cover:
- Keywords, identifiers, numbers and single-character tokens
- Lenient numeric literals
- Comments and whitespace
- Source locations and re-tokenization
"""

import io
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from kaleidoscope.lexer.lexer import Lexer, tokenize_string, parse_number_prefix
from kaleidoscope.lexer.tokens import Token, TokenType, SourceLocation


class _UnseekableStream(io.StringIO):
    def seekable(self):
        return False


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def _types(self, source: str):
        return [token.type for token in tokenize_string(source)]

    def test_number(self):
        """A decimal literal is a single NUMBER token."""
        tokens = tokenize_string("3.14")

        self.assertEqual(len(tokens), 2)
        self.assertEqual(tokens[0].type, TokenType.NUMBER)
        self.assertEqual(tokens[0].value, 3.14)
        self.assertEqual(tokens[1].type, TokenType.EOF)

    def test_number_forms(self):
        """Integers, trailing dots and leading dots are all numbers."""
        values = [token.value for token in tokenize_string("42 1. .5")[:-1]]
        self.assertEqual(values, [42.0, 1.0, 0.5])

    def test_identifier(self):
        """Letters followed by letters or digits form one identifier."""
        tokens = tokenize_string("foo123")

        self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)
        self.assertEqual(tokens[0].value, "foo123")
        self.assertTrue(tokens[0].is_identifier)

    def test_keywords(self):
        """def and extern are keywords, longer words are not."""
        self.assertEqual(self._types("def"), [TokenType.DEF, TokenType.EOF])
        self.assertEqual(self._types("extern"), [TokenType.EXTERN, TokenType.EOF])
        self.assertEqual(self._types("define externs"),
                         [TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.EOF])
        self.assertTrue(tokenize_string("def")[0].is_keyword)

    def test_identifier_cannot_start_with_digit(self):
        """A digit run ends where letters begin."""
        tokens = tokenize_string("12ab")

        self.assertEqual(tokens[0].type, TokenType.NUMBER)
        self.assertEqual(tokens[0].value, 12.0)
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertEqual(tokens[1].value, "ab")

    def test_single_characters(self):
        """Anything else comes through one character at a time."""
        tokens = tokenize_string("(+),;_")
        chars = [token.value for token in tokens[:-1]]

        self.assertEqual(chars, ["(", "+", ")", ",", ";", "_"])
        self.assertTrue(all(token.type == TokenType.CHAR for token in tokens[:-1]))
        self.assertTrue(tokens[0].is_char("("))
        self.assertFalse(tokens[0].is_char(")"))

    def test_non_ascii_letter_is_a_char_token(self):
        """Only ASCII letters start identifiers."""
        tokens = tokenize_string("é")
        self.assertEqual(tokens[0].type, TokenType.CHAR)
        self.assertEqual(tokens[0].value, "é")

    def test_malformed_number_is_truncated(self):
        """'1.2.3' is one NUMBER with the value of its numeric prefix."""
        lexer = Lexer("1.2.3")
        tokens = lexer.tokenize()

        self.assertEqual([t.type for t in tokens], [TokenType.NUMBER, TokenType.EOF])
        self.assertEqual(tokens[0].value, 1.2)
        self.assertEqual(tokens[0].lexeme, "1.2.3")

        self.assertTrue(lexer.has_warnings())
        self.assertEqual(len(lexer.warnings), 1)
        self.assertEqual(lexer.warnings[0].code, "L003")
        self.assertIn("1.2.3", str(lexer.warnings[0]))

    def test_lone_dot_is_zero(self):
        """A dot with no digits parses as 0.0, like strtod."""
        lexer = Lexer(".")
        token = lexer.next_token()

        self.assertEqual(token.type, TokenType.NUMBER)
        self.assertEqual(token.value, 0.0)
        self.assertEqual(len(lexer.warnings), 1)

    def test_well_formed_numbers_do_not_warn(self):
        lexer = Lexer("1 2.5 .25 3.")
        lexer.tokenize()
        self.assertFalse(lexer.has_warnings())

    def test_parse_number_prefix(self):
        self.assertEqual(parse_number_prefix("1.2.3"), 1.2)
        self.assertEqual(parse_number_prefix("..5"), 0.0)
        self.assertEqual(parse_number_prefix("007"), 7.0)
        self.assertEqual(parse_number_prefix(".5."), 0.5)

    def test_comments_are_skipped(self):
        """'#' comments run to the end of the line and produce no tokens."""
        tokens = tokenize_string("# a comment\n42 # trailing\n# another\r\nx")

        self.assertEqual([t.type for t in tokens],
                         [TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(tokens[1].value, "x")

    def test_comment_at_end_of_input(self):
        self.assertEqual(self._types("# nothing else"), [TokenType.EOF])
        self.assertEqual(self._types("x # nothing else"), [TokenType.IDENTIFIER, TokenType.EOF])

    def test_whitespace_only(self):
        self.assertEqual(self._types(" \t\n\r\v\f "), [TokenType.EOF])
        self.assertEqual(self._types(""), [TokenType.EOF])

    def test_eof_repeats(self):
        """Asking past the end keeps returning EOF."""
        lexer = Lexer("x")
        lexer.next_token()

        self.assertEqual(lexer.next_token().type, TokenType.EOF)
        self.assertEqual(lexer.next_token().type, TokenType.EOF)

    def test_source_locations(self):
        """Tokens record line, column and offset of their first character."""
        tokens = tokenize_string("a\n  bc + 1", filename="test.kal")

        self.assertEqual(tokens[0].location, SourceLocation("test.kal", 1, 1, 0))
        self.assertEqual(tokens[1].location, SourceLocation("test.kal", 2, 3, 4))
        self.assertEqual(tokens[2].location, SourceLocation("test.kal", 2, 6, 7))
        self.assertEqual(tokens[3].location, SourceLocation("test.kal", 2, 8, 9))
        self.assertEqual(str(tokens[1].location), "test.kal:2:3")

    def test_stream_source(self):
        """The lexer reads from text streams as well as strings."""
        lexer = Lexer(io.StringIO("extern sin(x)"), "stream")
        types = [t.type for t in lexer.tokenize()]

        self.assertEqual(types, [
            TokenType.EXTERN, TokenType.IDENTIFIER, TokenType.CHAR,
            TokenType.IDENTIFIER, TokenType.CHAR, TokenType.EOF,
        ])

    def test_reads_one_character_past_a_token(self):
        """Only the lookahead character beyond a token is taken from the stream."""
        stream = io.StringIO("ab cd\nef")
        lexer = Lexer(stream)
        self.assertEqual(stream.tell(), 0)

        lexer.next_token()
        self.assertEqual(stream.tell(), 3)
        lexer.next_token()
        self.assertEqual(stream.tell(), 6)

    def test_take_warnings_drains(self):
        lexer = Lexer("1.2.3 4..5")
        lexer.tokenize()

        warnings = lexer.take_warnings()
        self.assertEqual([w.code for w in warnings], ["L003", "L003"])
        self.assertFalse(lexer.has_warnings())
        self.assertEqual(lexer.take_warnings(), [])

    def test_retokenizing_is_repeatable(self):
        """Re-reading the same input from the start gives the same tokens."""
        source = "def foo(x y) x+y*2.5 # comment\n1.2.3"
        lexer = Lexer(source)
        first = lexer.tokenize()

        lexer.reset()
        second = lexer.tokenize()

        self.assertEqual(first, second)
        self.assertEqual(first, Lexer(source).tokenize())
        self.assertEqual(len(lexer.warnings), 1)

    def test_reset_requires_seekable_source(self):
        lexer = Lexer(_UnseekableStream("1 2"))
        lexer.next_token()

        with self.assertRaises(ValueError):
            lexer.reset()

    def test_independent_lexers(self):
        """Two lexers interleaved do not share state."""
        first = Lexer("a b c")
        second = Lexer("1 2 3")

        self.assertEqual(first.next_token().value, "a")
        self.assertEqual(second.next_token().value, 1.0)
        self.assertEqual(first.next_token().value, "b")
        self.assertEqual(second.next_token().value, 2.0)

    def test_token_str(self):
        location = SourceLocation("<string>", 1, 1, 0)
        self.assertEqual(str(Token(TokenType.IDENTIFIER, "x", "x", location)), "IDENTIFIER('x')")
        self.assertEqual(str(Token(TokenType.NUMBER, "1", 1.0, location)), "NUMBER('1' -> 1.0)")


if __name__ == '__main__':
    unittest.main()
