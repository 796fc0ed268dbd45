"""
Binary operator precedence table.

Higher numbers bind tighter. Only CHAR tokens can be binary operators.
"""

from typing import Dict, Mapping, Optional

from ..lexer.tokens import Token, TokenType

# Returned for anything that is not a binary operator
NO_PRECEDENCE = -1

DEFAULT_BINOP_PRECEDENCE: Dict[str, int] = {
    '<': 10,
    '>': 10,
    '+': 20,
    '-': 20,
    '*': 40,
    '/': 40,
}


def get_token_precedence(token: Token, table: Optional[Mapping[str, int]] = None) -> int:
    """Get the precedence of ``token`` as a binary operator, or -1."""
    if table is None:
        table = DEFAULT_BINOP_PRECEDENCE

    if token.type != TokenType.CHAR or not token.value.isascii():
        return NO_PRECEDENCE

    precedence = table.get(token.value, 0)
    if precedence <= 0:
        return NO_PRECEDENCE
    return precedence


def build_precedence_table(overrides: Optional[Mapping[str, int]] = None) -> Dict[str, int]:
    """
    Build a private copy of the precedence table.

    Args:
        overrides: Operators to add or re-rank; a non-positive value disables
            an operator

    Raises:
        ValueError: If an operator is not a single ASCII character
    """
    table = dict(DEFAULT_BINOP_PRECEDENCE)
    if overrides:
        for operator, precedence in overrides.items():
            if len(operator) != 1 or not operator.isascii():
                raise ValueError(f"Binary operators must be a single ASCII character, got {operator!r}")
            table[operator] = int(precedence)
    return table
