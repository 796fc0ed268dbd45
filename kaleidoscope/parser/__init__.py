"""
Kaleidoscope Parser Package

Recursive descent parser with operator precedence climbing for binary
expressions. Produces immutable AST nodes with source spans.
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, Expression, SourceSpan,
    NumberLiteral, VariableRef, BinaryOp, Call, Prototype, Function,
    dump_ast, walk,
)
from .parser import Parser, parse_program, parse_expression_string, DEFAULT_MAX_DEPTH
from .precedence import DEFAULT_BINOP_PRECEDENCE, get_token_precedence
from .errors import ParseError, UnexpectedTokenError, describe_token

__all__ = [
    # Core parser
    "Parser", "parse_program", "parse_expression_string", "DEFAULT_MAX_DEPTH",
    "DEFAULT_BINOP_PRECEDENCE", "get_token_precedence",

    # AST nodes
    "ASTNode", "ASTNodeType", "Expression", "SourceSpan",
    "NumberLiteral", "VariableRef", "BinaryOp", "Call", "Prototype", "Function",
    "dump_ast", "walk",

    # Error handling
    "ParseError", "UnexpectedTokenError", "describe_token",
]
