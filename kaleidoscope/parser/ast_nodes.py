"""
Abstract Syntax Tree node definitions for Kaleidoscope.

The node set is closed: four expression variants plus the prototype and
function definitions that appear at top level. Nodes are immutable and own
their children outright, so a parsed tree never shares or revisits a node.

Each node carries an optional source span. Spans are left out of equality,
so two trees compare equal when they have the same structure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple, Union

from ..lexer.tokens import SourceLocation


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Expressions
    NUMBER_LITERAL = "NumberLiteral"
    VARIABLE_REF = "VariableRef"
    BINARY_OP = "BinaryOp"
    CALL = "Call"

    # Top-level
    PROTOTYPE = "Prototype"
    FUNCTION = "Function"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


def _span_field():
    return field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class NumberLiteral:
    """Numeric literal like ``1.0``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.NUMBER_LITERAL

    value: float
    span: Optional[SourceSpan] = _span_field()

    def children(self) -> List['ASTNode']:
        return []


@dataclass(frozen=True)
class VariableRef:
    """Reference to a variable, like ``x``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.VARIABLE_REF

    name: str
    span: Optional[SourceSpan] = _span_field()

    def children(self) -> List['ASTNode']:
        return []


@dataclass(frozen=True)
class BinaryOp:
    """Binary operator application; ``operator`` is a single character."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.BINARY_OP

    operator: str
    left: 'Expression'
    right: 'Expression'
    span: Optional[SourceSpan] = _span_field()

    def children(self) -> List['ASTNode']:
        return [self.left, self.right]


@dataclass(frozen=True)
class Call:
    """Function call, like ``foo(1, x)``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.CALL

    callee: str
    arguments: Tuple['Expression', ...] = ()
    span: Optional[SourceSpan] = _span_field()

    def children(self) -> List['ASTNode']:
        return list(self.arguments)


@dataclass(frozen=True)
class Prototype:
    """
    Function signature: a name and its parameter names.

    Parameter order follows the declaration. Duplicate names are kept as
    written; nothing at this level checks them.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PROTOTYPE

    name: str
    parameters: Tuple[str, ...] = ()
    span: Optional[SourceSpan] = _span_field()

    @property
    def is_anonymous(self) -> bool:
        return self.name == ""

    def children(self) -> List['ASTNode']:
        return []


@dataclass(frozen=True)
class Function:
    """
    Function definition.

    A bare top-level expression is wrapped in a Function whose prototype has
    an empty name and no parameters.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.FUNCTION

    prototype: Prototype
    body: 'Expression'
    span: Optional[SourceSpan] = _span_field()

    @property
    def name(self) -> str:
        return self.prototype.name

    @property
    def is_anonymous(self) -> bool:
        return self.prototype.is_anonymous

    def children(self) -> List['ASTNode']:
        return [self.prototype, self.body]


Expression = Union[NumberLiteral, VariableRef, BinaryOp, Call]
ASTNode = Union[NumberLiteral, VariableRef, BinaryOp, Call, Prototype, Function]

EXPRESSION_TYPES = (NumberLiteral, VariableRef, BinaryOp, Call)


def _format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def dump_ast(node: ASTNode) -> str:
    """
    Render a node in a compact parenthesised prefix form.

    ``1+2*3`` becomes ``(+ 1 (* 2 3))`` and ``def foo(x y) x+y`` becomes
    ``(def (foo x y) (+ x y))``.
    """
    if isinstance(node, NumberLiteral):
        return _format_number(node.value)
    if isinstance(node, VariableRef):
        return node.name
    if isinstance(node, BinaryOp):
        return f"({node.operator} {dump_ast(node.left)} {dump_ast(node.right)})"
    if isinstance(node, Call):
        parts = ["call", node.callee] + [dump_ast(arg) for arg in node.arguments]
        return "(" + " ".join(parts) + ")"
    if isinstance(node, Prototype):
        return "(" + " ".join((node.name,) + tuple(node.parameters)) + ")"
    if isinstance(node, Function):
        if node.is_anonymous:
            return f"(toplevel {dump_ast(node.body)})"
        return f"(def {dump_ast(node.prototype)} {dump_ast(node.body)})"
    raise TypeError(f"Not an AST node: {node!r}")


def walk(node: ASTNode):
    """Yield ``node`` and all of its descendants, depth first."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))
