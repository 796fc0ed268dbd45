"""
Kaleidoscope Front End Package

Lexer and parser for the Kaleidoscope toy language: numbers, variables,
binary operators, calls, ``def`` function definitions and ``extern``
declarations, turned into an abstract syntax tree.

Architecture:
    kaleidoscope/
    ├── lexer/           # Tokenization
    ├── parser/          # Precedence climbing parser and AST
    ├── diagnostics.py   # Error reporting for parse failures
    └── driver.py        # The 'ready>' read loop
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer
from .parser import Parser
from .diagnostics import DiagnosticReporter, ParseResult

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "DiagnosticReporter",
    "ParseResult",

    # Version info
    "__version__",
    "__license__",
]
