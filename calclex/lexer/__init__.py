"""
calclex Lexer Package

Implements the formula scanner that feeds the expression parser.

Key Features:
- Single linear pass, no backtracking
- Unary minus folded into the literal that follows it
- Integer vs floating-point literals with a configurable decimal separator
- Lenient mode that drops bad spans (with warnings) or strict typed errors
- Start offset and length on every token for error reporting
"""

from .tokens import Token, TokenType
from .config import ScannerConfig
from .lexer import Scanner, ScanResult, ScanState, tokenize_string
from .errors import (
    LexerError, LexerWarning, InputError, MalformedNumberError,
    UnexpectedCharacterError, ConfigurationError
)

__all__ = [
    "Scanner",
    "ScannerConfig",
    "ScanResult",
    "ScanState",
    "Token",
    "TokenType",
    "tokenize_string",
    "LexerError",
    "LexerWarning",
    "InputError",
    "MalformedNumberError",
    "UnexpectedCharacterError",
    "ConfigurationError",
]
