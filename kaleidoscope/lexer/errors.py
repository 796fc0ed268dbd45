"""
Diagnostics for the Kaleidoscope lexer.

The lexer itself never fails: every character maps to some token. It does
record warnings for input it accepts leniently, such as numeric literals with
more than one decimal point.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerWarning:
    """
    Represents a lexer warning that doesn't stop parsing.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common warning codes for categorization
ERROR_CODES = {
    "L003": "Numeric literal truncated to its numeric prefix",
}


def create_truncated_number_warning(lexeme: str, value: float,
                                    location: SourceLocation) -> LexerWarning:
    """Create a warning for a numeric literal that only partly parsed."""
    return LexerWarning(
        message=f"Numeric literal '{lexeme}' truncated to {value!r}",
        location=location,
        code="L003",
        help_text="Only the leading digits and first decimal point form the number; "
                  "the rest of the literal is ignored.",
    )
