"""
Token definitions for the calclex formula scanner.

This module defines the token types a formula can be broken into:
- Literals (integers, floating-point numbers)
- Identifiers (variable and function names)
- Operators (the six arithmetic symbols)
- Brackets

Every token carries its semantic value as a payload whose Python type is
fixed by the token type, so consumers can dispatch on ``token.type`` alone.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Tuple, Union


# Signed 64-bit range accepted for INTEGER payloads
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
INT64_DIGITS = len(str(INT64_MAX))     # 19


class TokenType(Enum):
    """
    Enumeration of all token types produced by the scanner.
    """

    # Literals
    INTEGER = auto()                # 42, -3
    FLOATING_POINT = auto()         # 2.5, .5, 5.  (separator is configurable)

    # Names
    IDENTIFIER = auto()             # x, x1, sin

    # Operators
    OPERATOR = auto()               # + - * / ^ %

    # Brackets
    LEFT_BRACKET = auto()           # (
    RIGHT_BRACKET = auto()          # )


TokenValue = Union[int, float, str]


# Payload type for each token type
VALUE_TYPES: Dict[TokenType, type] = {
    TokenType.INTEGER: int,
    TokenType.FLOATING_POINT: float,
    TokenType.IDENTIFIER: str,
    TokenType.OPERATOR: str,
    TokenType.LEFT_BRACKET: str,
    TokenType.RIGHT_BRACKET: str,
}

# Token types whose payload is the single symbol character
SYMBOL_TYPES = frozenset({
    TokenType.OPERATOR,
    TokenType.LEFT_BRACKET,
    TokenType.RIGHT_BRACKET,
})


@dataclass(frozen=True)
class Token:
    """
    Represents a classified, positioned span of a formula.

    Contains the token type, lexeme (raw text), semantic value and the
    span it was read from.
    """
    type: TokenType
    lexeme: str                     # Raw text from the formula
    value: TokenValue               # int, float, name or symbol depending on type
    start_position: int             # Zero-based offset into the formula
    length: int                     # Number of characters consumed

    def __post_init__(self):
        expected = VALUE_TYPES[self.type]
        # bool is an int subclass but never a valid payload
        if isinstance(self.value, bool) or not isinstance(self.value, expected):
            raise TypeError(
                f"{self.type.name} token needs a {expected.__name__} value, "
                f"got {type(self.value).__name__}"
            )
        if self.type is TokenType.INTEGER and not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"Integer value {self.value} does not fit in 64 bits")
        if self.type in SYMBOL_TYPES and len(self.value) != 1:
            raise ValueError(f"{self.type.name} token value must be one character")
        if self.start_position < 0:
            raise ValueError("start_position cannot be negative")
        if self.length < 1:
            raise ValueError("length must be positive")

    def __str__(self) -> str:
        if self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.start_position}, {self.length})")

    @property
    def end_position(self) -> int:
        """Offset just past the last character of this token."""
        return self.start_position + self.length

    @property
    def span(self) -> Tuple[int, int]:
        return self.start_position, self.end_position

    @property
    def is_literal(self) -> bool:
        """Check if this token is a numeric literal."""
        return self.type in (TokenType.INTEGER, TokenType.FLOATING_POINT)

    @property
    def is_operand(self) -> bool:
        """Check if this token produces a value (number or identifier)."""
        return self.is_literal or self.type == TokenType.IDENTIFIER

    @property
    def is_operator(self) -> bool:
        return self.type == TokenType.OPERATOR

    @property
    def is_bracket(self) -> bool:
        return self.type in (TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET)


# Lookup tables used by the scanner for single-character recognition

OPERATOR_SYMBOLS = frozenset("+-*/^%")

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    **{symbol: TokenType.OPERATOR for symbol in OPERATOR_SYMBOLS},
    "(": TokenType.LEFT_BRACKET,
    ")": TokenType.RIGHT_BRACKET,
}

ASCII_DIGITS = frozenset("0123456789")
ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
