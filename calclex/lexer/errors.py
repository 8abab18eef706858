"""
Error handling for the calclex scanner.

Provides error reporting with the offending position, recovery
suggestions for look-alike characters, and warnings for spans the
scanner drops in its default lenient mode.
"""

from typing import Optional, List
from dataclasses import dataclass


# Common error codes for categorization
EMPTY_FORMULA = "L001"
INVALID_NUMBER = "L002"
UNEXPECTED_CHARACTER = "L003"

ERROR_CODES = {
    EMPTY_FORMULA: "Empty formula",
    INVALID_NUMBER: "Invalid numeric literal",
    UNEXPECTED_CHARACTER: "Unexpected character",
}


@dataclass
class Diagnostic:
    """Base class for scanner diagnostics (errors, warnings)."""
    message: str
    position: int
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        code = f"[{self.code}] " if self.code else ""
        result = f"{severity_prefix}: {code}{self.message}\n"
        result += f"  --> position {self.position}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the scanner cannot produce a token sequence.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        position: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            position=position,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def position(self) -> int:
        return self.diagnostic.position

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class InputError(LexerError, ValueError):
    """Raised before scanning when the formula is None or empty."""


class MalformedNumberError(LexerError):
    """Raised in strict mode for a numeric buffer that is neither int nor float."""

    def __init__(self, lexeme: str, position: int, **kwargs):
        super().__init__(f"{ERROR_CODES[INVALID_NUMBER]}: '{lexeme}'", position, code=INVALID_NUMBER, **kwargs)
        self.lexeme = lexeme


class UnexpectedCharacterError(LexerError):
    """Raised in strict mode for a character no classifier accepts."""

    def __init__(self, character: str, position: int, **kwargs):
        super().__init__(f"{ERROR_CODES[UNEXPECTED_CHARACTER]}: '{character}'", position, code=UNEXPECTED_CHARACTER, **kwargs)
        self.character = character


class ConfigurationError(ValueError):
    """Raised for an unusable scanner configuration."""


class LexerWarning:
    """
    Represents a span the scanner dropped without stopping the scan.
    """

    def __init__(
        self,
        message: str,
        position: int,
        lexeme: str,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.lexeme = lexeme
        self.diagnostic = Diagnostic(
            message=message,
            position=position,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def position(self) -> int:
        return self.diagnostic.position

    @property
    def length(self) -> int:
        return len(self.lexeme)

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"LexerWarning({self.code}, {self.lexeme!r}, {self.position})"


class ErrorRecovery:
    """
    Utilities for explaining dropped spans.

    Provides the suggestions and help text attached to diagnostics so the
    caller can tell the user how to fix the formula.
    """

    # Characters commonly pasted into formulas in place of a supported symbol
    LOOKALIKES = {
        '×': ['*'],
        '·': ['*'],
        '⋅': ['*'],
        '∗': ['*'],
        '÷': ['/'],
        '∕': ['/'],
        '−': ['-'],
        '–': ['-'],
        '—': ['-'],
        '＋': ['+'],
        '[': ['('],
        '{': ['('],
        ']': [')'],
        '}': [')'],
    }

    @staticmethod
    def suggest_replacements(char: str, decimal_separator: str) -> List[str]:
        """Suggest supported symbols for a character that was not recognised."""
        suggestions = list(ErrorRecovery.LOOKALIKES.get(char, []))
        if char in '.,' and char != decimal_separator:
            suggestions.append(decimal_separator)
        return suggestions

    @staticmethod
    def explain_malformed_number(lexeme: str, decimal_separator: str) -> str:
        """Describe why a numeric buffer could not be parsed."""
        if lexeme.count(decimal_separator) > 1:
            return f"A number can contain at most one decimal separator ('{decimal_separator}')."
        if not any(c.isdigit() for c in lexeme):
            return "A decimal separator must be next to at least one digit."
        return "The text is neither an integer nor a floating-point number."


# Helper functions for creating common errors and warnings
def create_input_error() -> InputError:
    """Create the error raised for a None or empty formula."""
    return InputError(
        message="Formula must be a non-empty string",
        position=0,
        code=EMPTY_FORMULA,
        help_text="Pass the expression text to scan, e.g. '1 + 2'."
    )


def create_invalid_number_error(lexeme: str, position: int, decimal_separator: str) -> MalformedNumberError:
    """Create an error for an invalid numeric literal."""
    return MalformedNumberError(
        lexeme,
        position,
        help_text=ErrorRecovery.explain_malformed_number(lexeme, decimal_separator),
    )


def create_unexpected_character_error(char: str, position: int, decimal_separator: str) -> UnexpectedCharacterError:
    """Create an error for a character the scanner does not recognise."""
    suggestions = ErrorRecovery.suggest_replacements(char, decimal_separator)

    if suggestions:
        help_text = f"Did you mean: {', '.join(suggestions)}?"
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in a formula."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return UnexpectedCharacterError(
        char,
        position,
        help_text=help_text,
        suggestions=suggestions
    )


def create_invalid_number_warning(lexeme: str, position: int, decimal_separator: str) -> LexerWarning:
    """Create the warning recorded when a malformed number is dropped."""
    return LexerWarning(
        message=f"Dropped {ERROR_CODES[INVALID_NUMBER].lower()}: '{lexeme}'",
        position=position,
        lexeme=lexeme,
        code=INVALID_NUMBER,
        help_text=ErrorRecovery.explain_malformed_number(lexeme, decimal_separator),
    )


def create_unexpected_character_warning(char: str, position: int, decimal_separator: str) -> LexerWarning:
    """Create the warning recorded when an unrecognised character is dropped."""
    return LexerWarning(
        message=f"Dropped {ERROR_CODES[UNEXPECTED_CHARACTER].lower()}: '{char}'",
        position=position,
        lexeme=char,
        code=UNEXPECTED_CHARACTER,
        suggestions=ErrorRecovery.suggest_replacements(char, decimal_separator) or None,
    )
