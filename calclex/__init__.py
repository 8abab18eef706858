"""
calclex Package

Lexical scanner for arithmetic formulas. Produces the token stream
consumed by an expression parser / evaluator.

Architecture:
    calclex/
    └── lexer/           # Tokens, configuration, errors and the scanner

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import (
    Scanner,
    ScannerConfig,
    ScanResult,
    ScanState,
    Token,
    TokenType,
    tokenize_string,
    LexerError,
    LexerWarning,
    InputError,
    MalformedNumberError,
    UnexpectedCharacterError,
    ConfigurationError,
)

__all__ = [
    # Core classes
    "Scanner",
    "ScannerConfig",
    "ScanResult",
    "ScanState",
    "Token",
    "TokenType",
    "tokenize_string",

    # Errors
    "LexerError",
    "LexerWarning",
    "InputError",
    "MalformedNumberError",
    "UnexpectedCharacterError",
    "ConfigurationError",

    # Version info
    "__version__",
    "__license__",
]
