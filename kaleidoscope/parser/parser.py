"""
Kaleidoscope Parser

Recursive descent for primaries and declarations, operator precedence
climbing for binary expressions. The parser pulls tokens from a Lexer one at
a time and keeps exactly one token of lookahead (``current_token``).

Failures raise ParseError and abort the whole top-level construct; the
offending token stays current, and skipping it is up to the caller.
"""

import logging
import sys
from typing import List, Mapping, Optional, TextIO, Tuple, Union

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType
from .ast_nodes import (
    SourceSpan, NumberLiteral, VariableRef, BinaryOp, Call, Prototype, Function,
    Expression, ASTNode
)
from .errors import (
    create_unexpected_token_error, create_invalid_expression_error,
    create_nesting_too_deep_error
)
from .precedence import build_precedence_table, get_token_precedence

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 128

# Python frames per nesting level: parse_expression, parse_binop_rhs,
# parse_primary and parse_paren_expr or parse_identifier_expr
FRAMES_PER_LEVEL = 4
# Frames left for callers above the parser and the lexer below it
RECURSION_HEADROOM = 200


def max_safe_depth() -> int:
    """Deepest nesting the interpreter stack can take at the current recursion limit."""
    return max(1, (sys.getrecursionlimit() - RECURSION_HEADROOM) // FRAMES_PER_LEVEL)


class Parser:
    """
    Kaleidoscope parser.

    One instance is one parsing session: it owns the lexer, the current
    token and the nesting counter, so independent parsers never interfere.
    """

    def __init__(
        self,
        source: Union[Lexer, str, TextIO],
        precedence: Optional[Mapping[str, int]] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        filename: str = "<stdin>",
    ):
        """
        Initialize the parser.

        Args:
            source: A Lexer, or source text / text stream to lex
            precedence: Extra or re-ranked binary operators, merged over the
                default table
            max_depth: Maximum nesting of parenthesised expressions and call
                arguments; capped at :func:`max_safe_depth`
            filename: Source name for diagnostics when ``source`` is not a Lexer
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        safe_depth = max_safe_depth()
        if max_depth > safe_depth:
            logger.warning("max_depth %d is deeper than the interpreter stack allows, using %d",
                           max_depth, safe_depth)
            max_depth = safe_depth
        if isinstance(source, Lexer):
            self.lexer = source
        else:
            self.lexer = Lexer(source, filename)

        self.binop_precedence = build_precedence_table(precedence)
        self.max_depth = max_depth
        self._depth = 0
        self._current: Optional[Token] = None
        self._previous: Optional[Token] = None

    # Token stream control

    @property
    def current_token(self) -> Token:
        """The token being looked at; the first one is read on demand."""
        if self._current is None:
            self.advance_token()
        return self._current

    @property
    def current_type(self) -> TokenType:
        return self.current_token.type

    def advance_token(self) -> Token:
        """Read the next token from the lexer and make it current."""
        self._previous = self._current
        self._current = self.lexer.next_token()
        return self._current

    def at_end(self) -> bool:
        return self.current_token.type == TokenType.EOF

    def token_precedence(self) -> int:
        """Precedence of the current token as a binary operator, or -1."""
        return get_token_precedence(self.current_token, self.binop_precedence)

    # Primary expressions

    def parse_number_expr(self) -> NumberLiteral:
        """numberexpr ::= number"""
        token = self.current_token
        self.advance_token()
        return NumberLiteral(token.value, SourceSpan(token.location, token.location))

    def parse_paren_expr(self) -> Expression:
        """parenexpr ::= '(' expression ')'"""
        self.advance_token()  # consume '('
        expr = self.parse_expression()

        if not self.current_token.is_char(')'):
            raise create_unexpected_token_error("')'", self.current_token)
        self.advance_token()  # consume ')'
        return expr

    def parse_identifier_expr(self) -> Expression:
        """
        identifierexpr
          ::= identifier
          ::= identifier '(' expression* ')'
        """
        name_token = self.current_token
        self.advance_token()  # consume identifier

        if not self.current_token.is_char('('):
            return VariableRef(name_token.value, SourceSpan(name_token.location, name_token.location))

        self.advance_token()  # consume '('
        arguments: List[Expression] = []
        if not self.current_token.is_char(')'):
            while True:
                arguments.append(self.parse_expression())

                if self.current_token.is_char(')'):
                    break
                if not self.current_token.is_char(','):
                    raise create_unexpected_token_error(
                        "')' or ','", self.current_token, "in argument list"
                    )
                self.advance_token()  # consume ','

        end_token = self.current_token
        self.advance_token()  # consume ')'
        return Call(name_token.value, tuple(arguments),
                    SourceSpan(name_token.location, end_token.location))

    def parse_primary(self) -> Expression:
        """
        primary
          ::= identifierexpr
          ::= numberexpr
          ::= parenexpr
        """
        token = self.current_token
        if token.type == TokenType.IDENTIFIER:
            return self.parse_identifier_expr()
        if token.type == TokenType.NUMBER:
            return self.parse_number_expr()
        if token.is_char('('):
            return self.parse_paren_expr()
        raise create_invalid_expression_error(token)

    # Binary expressions

    def parse_binop_rhs(self, min_precedence: int, left: Expression) -> Expression:
        """
        binoprhs ::= (binop primary)*

        Folds operators binding at least as tightly as ``min_precedence``
        onto ``left``. Equal precedence associates to the left.

        Pending operators are kept on an explicit stack, so a chain of ever
        tighter operators costs no Python recursion.
        """
        operands: List[Expression] = [left]
        operators: List[Tuple[str, int]] = []

        while True:
            token_precedence = self.token_precedence()

            # Not an operator (-1) or one that binds too loosely: done
            if token_precedence < min_precedence:
                break

            # Pending operators that bind at least as tightly take their right side now
            while operators and operators[-1][1] >= token_precedence:
                _reduce(operands, operators)

            operators.append((self.current_token.value, token_precedence))
            self.advance_token()  # consume operator

            operands.append(self.parse_primary())

        while operators:
            _reduce(operands, operators)
        return operands[0]

    def parse_expression(self) -> Expression:
        """expression ::= primary binoprhs"""
        if self._depth >= self.max_depth:
            raise create_nesting_too_deep_error(self.max_depth, self.current_token)

        self._depth += 1
        try:
            left = self.parse_primary()
            return self.parse_binop_rhs(0, left)
        finally:
            self._depth -= 1

    # Declarations

    def parse_prototype(self) -> Prototype:
        """prototype ::= id '(' id* ')'"""
        name_token = self.current_token
        if name_token.type != TokenType.IDENTIFIER:
            raise create_unexpected_token_error("function name", name_token, "in prototype")
        self.advance_token()

        if not self.current_token.is_char('('):
            raise create_unexpected_token_error("'('", self.current_token, "in prototype")

        # Parameter names are whitespace separated, no commas
        parameters: List[str] = []
        while self.advance_token().type == TokenType.IDENTIFIER:
            parameters.append(self.current_token.value)

        if not self.current_token.is_char(')'):
            raise create_unexpected_token_error("')'", self.current_token, "in prototype")

        end_token = self.current_token
        self.advance_token()  # consume ')'
        return Prototype(name_token.value, tuple(parameters),
                         SourceSpan(name_token.location, end_token.location))

    def parse_definition(self) -> Function:
        """definition ::= 'def' prototype expression"""
        start = self.current_token.location
        self.advance_token()  # consume 'def'
        prototype = self.parse_prototype()
        body = self.parse_expression()

        logger.debug("parsed definition of %r", prototype.name)
        return Function(prototype, body, SourceSpan(start, _span_end(body, start)))

    def parse_extern(self) -> Prototype:
        """external ::= 'extern' prototype"""
        self.advance_token()  # consume 'extern'
        prototype = self.parse_prototype()

        logger.debug("parsed extern %r", prototype.name)
        return prototype

    def parse_top_level_expr(self) -> Function:
        """toplevelexpr ::= expression"""
        start = self.current_token.location
        body = self.parse_expression()

        # Anonymous prototype marks a bare expression
        prototype = Prototype("", (), SourceSpan(start, start))
        logger.debug("parsed top-level expression")
        return Function(prototype, body, SourceSpan(start, _span_end(body, start)))

    def parse_top_level_item(self) -> Union[Function, Prototype]:
        """
        Parse whichever top-level construct starts at the current token.

        The caller handles end of input and stray ';' separators.
        """
        token_type = self.current_type
        if token_type == TokenType.DEF:
            return self.parse_definition()
        if token_type == TokenType.EXTERN:
            return self.parse_extern()
        return self.parse_top_level_expr()


def _span_end(node: ASTNode, default):
    return node.span.end if node.span is not None else default


def _join_spans(left: Expression, right: Expression) -> Optional[SourceSpan]:
    if left.span is None or right.span is None:
        return None
    return SourceSpan(left.span.start, right.span.end)


def _reduce(operands: List[Expression], operators: List[Tuple[str, int]]):
    """Pop the top operator and its two operands, push the BinaryOp."""
    operator, _ = operators.pop()
    right = operands.pop()
    left = operands.pop()
    operands.append(BinaryOp(operator, left, right, _join_spans(left, right)))


def parse_program(source: Union[str, TextIO], filename: str = "<string>",
                  **parser_options) -> List[Union[Function, Prototype]]:
    """
    Convenience function to parse every top-level construct in a source.

    Top-level ';' separators are skipped.

    Args:
        source: Source code string or text stream
        filename: Filename for error reporting
        **parser_options: Passed through to :class:`Parser`

    Returns:
        Definitions and anonymous expressions as Function nodes, externs as
        Prototype nodes, in source order

    Raises:
        ParseError: On the first syntax error
    """
    parser = Parser(source, filename=filename, **parser_options)
    items = []
    while not parser.at_end():
        if parser.current_token.is_char(';'):
            parser.advance_token()
            continue
        items.append(parser.parse_top_level_item())
    return items


def parse_expression_string(source: str, filename: str = "<string>",
                            **parser_options) -> Expression:
    """
    Convenience function to parse a single expression.

    Raises:
        ParseError: If the source does not start with a valid expression
    """
    return Parser(source, filename=filename, **parser_options).parse_expression()
