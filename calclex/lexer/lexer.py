"""
calclex Scanner - turns a formula string into tokens

One linear pass over the text. At every position three classifiers get a
look, always in the same order: numeric literal, identifier, single
character. A classifier that does not match leaves the index alone, so a
literal can run straight into a name ("2x") or a bracket ("2)") without
whitespace in between.

The only state carried from token to token is whether an operand is
expected next. That is what decides if a '-' is glued onto the number
after it ("-3*4") or stands on its own as an operator ("3-4").
"""

import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

from .tokens import (
    Token, TokenType, SINGLE_CHAR_TOKENS, ASCII_DIGITS, ASCII_LETTERS,
    INT64_MIN, INT64_MAX, INT64_DIGITS
)
from .config import ScannerConfig
from .errors import (
    LexerWarning, create_input_error, create_invalid_number_error,
    create_unexpected_character_error, create_invalid_number_warning,
    create_unexpected_character_warning
)

logger = logging.getLogger(__name__)


class ScanState(Enum):
    """What the scanner expects to read next."""
    EXPECT_OPERAND = auto()         # start of input, after an operator or '('
    EXPECT_OPERATOR = auto()        # after a number, identifier or ')'


# State the scanner moves to after emitting a token of each type
NEXT_STATE: Dict[TokenType, ScanState] = {
    TokenType.INTEGER: ScanState.EXPECT_OPERATOR,
    TokenType.FLOATING_POINT: ScanState.EXPECT_OPERATOR,
    TokenType.IDENTIFIER: ScanState.EXPECT_OPERATOR,
    TokenType.RIGHT_BRACKET: ScanState.EXPECT_OPERATOR,
    TokenType.OPERATOR: ScanState.EXPECT_OPERAND,
    TokenType.LEFT_BRACKET: ScanState.EXPECT_OPERAND,
}


@dataclass
class ScanResult:
    """Tokens of one scan plus the spans that were dropped along the way."""
    tokens: List[Token] = field(default_factory=list)
    warnings: List[LexerWarning] = field(default_factory=list)

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def skipped_positions(self) -> List[int]:
        """Offsets of every character that did not end up in a token."""
        positions = []
        for warning in self.warnings:
            positions.extend(range(warning.position, warning.position + warning.length))
        return positions


class Scanner:
    """
    Formula scanner.

    Converts an arithmetic expression into a list of tokens for the
    expression parser. The scanner only holds its configuration, so a
    single instance can be reused for any number of scans, including
    concurrent ones.
    """

    def __init__(
        self,
        config: Optional[ScannerConfig] = None,
        *,
        decimal_separator: Optional[str] = None,
        strict: Optional[bool] = None
    ):
        """
        Initialize the scanner.

        Args:
            config: Scanner configuration. Defaults to the decimal point of
                the current locale, read once here.
            decimal_separator: Overrides the config's decimal separator
            strict: Overrides the config's strict flag
        """
        if config is None:
            config = ScannerConfig.from_locale() if decimal_separator is None else ScannerConfig()

        overrides = {}
        if decimal_separator is not None:
            overrides["decimal_separator"] = decimal_separator
        if strict is not None:
            overrides["strict"] = strict
        if overrides:
            config = replace(config, **overrides)

        self.config = config

        # Precompile regex patterns for the configured separator
        self._compile_patterns()

    def _compile_patterns(self):
        """Compile the patterns used to parse numeric buffers."""
        sep = re.escape(self.config.decimal_separator)

        # Integer: optional sign, ASCII digits only
        self.integer_pattern = re.compile(r'-?[0-9]+')

        # Float: at most one separator and at least one digit (2.5, .5, 5.)
        self.float_pattern = re.compile(
            r'-?(?:[0-9]+(?:' + sep + r'[0-9]*)?|' + sep + r'[0-9]+)'
        )

    @property
    def decimal_separator(self) -> str:
        return self.config.decimal_separator

    @property
    def strict(self) -> bool:
        return self.config.strict

    def __repr__(self) -> str:
        return f"Scanner(decimal_separator={self.decimal_separator!r}, strict={self.strict})"

    def scan(self, formula: str) -> List[Token]:
        """
        Read the formula and convert it into a list of tokens.

        Args:
            formula: The expression text

        Returns:
            List of tokens in input order

        Raises:
            InputError: If the formula is None or empty
            MalformedNumberError: In strict mode, for an unparseable number
            UnexpectedCharacterError: In strict mode, for an unknown character
        """
        return self.scan_with_diagnostics(formula).tokens

    def scan_with_diagnostics(self, formula: str) -> ScanResult:
        """Scan the formula and also report every span that was dropped."""
        self._check_input(formula)

        result = ScanResult()
        state = ScanState.EXPECT_OPERAND
        index = 0
        length = len(formula)

        while index < length:
            index, state = self._read_number(formula, index, state, result)
            if index >= length:
                break

            index, state = self._read_identifier(formula, index, state, result)
            if index >= length:
                break

            state = self._read_symbol(formula, index, state, result)
            index += 1

        return result

    def _check_input(self, formula):
        if formula is None or formula == "":
            raise create_input_error()
        if not isinstance(formula, str):
            raise TypeError(f"Formula must be a string, got {type(formula).__name__}")

    def _read_number(
        self, formula: str, index: int, state: ScanState, result: ScanResult
    ) -> Tuple[int, ScanState]:
        """Numeric classifier. Returns the index after the literal and the new state."""
        if not self._is_number_start(formula[index], state):
            return index, state

        start = index
        index += 1
        while index < len(formula) and self._is_number_part(formula[index]):
            index += 1

        lexeme = formula[start:index]
        token = self._parse_number(lexeme, start)
        if token is not None:
            return index, self._emit(token, result)

        if lexeme == "-":
            # Not a number after all, just a minus in operand position
            return index, self._emit(Token(TokenType.OPERATOR, "-", "-", start, 1), result)

        if self.strict:
            raise create_invalid_number_error(lexeme, start, self.decimal_separator)
        self._skip(create_invalid_number_warning(lexeme, start, self.decimal_separator), result)
        return index, state

    def _parse_number(self, lexeme: str, start: int) -> Optional[Token]:
        """Parse a numeric buffer as an integer, then as a float."""
        if self.integer_pattern.fullmatch(lexeme):
            value = self._parse_int64(lexeme)
            if value is not None:
                return Token(TokenType.INTEGER, lexeme, value, start, len(lexeme))

        # Integers too wide for 64 bits end up here as well; float() has no digit limit
        if self.float_pattern.fullmatch(lexeme):
            value = float(lexeme.replace(self.decimal_separator, "."))
            return Token(TokenType.FLOATING_POINT, lexeme, value, start, len(lexeme))

        return None

    @staticmethod
    def _parse_int64(lexeme: str) -> Optional[int]:
        """Value of a signed digit run, or None if it does not fit in 64 bits."""
        digits = lexeme.lstrip("-").lstrip("0") or "0"
        # int() limits how many digits it converts, leading zeros included
        if len(digits) > INT64_DIGITS:
            return None
        value = -int(digits) if lexeme.startswith("-") else int(digits)
        if INT64_MIN <= value <= INT64_MAX:
            return value
        return None

    def _read_identifier(
        self, formula: str, index: int, state: ScanState, result: ScanResult
    ) -> Tuple[int, ScanState]:
        """Identifier classifier: an ASCII letter followed by letters or digits."""
        if formula[index] not in ASCII_LETTERS:
            return index, state

        start = index
        index += 1
        while index < len(formula) and (formula[index] in ASCII_LETTERS or formula[index] in ASCII_DIGITS):
            index += 1

        name = formula[start:index]
        return index, self._emit(Token(TokenType.IDENTIFIER, name, name, start, len(name)), result)

    def _read_symbol(
        self, formula: str, index: int, state: ScanState, result: ScanResult
    ) -> ScanState:
        """Single-character classifier for whitespace, operators and brackets."""
        char = formula[index]
        if char.isspace():
            return state

        token_type = SINGLE_CHAR_TOKENS.get(char)
        if token_type is None:
            if self.strict:
                raise create_unexpected_character_error(char, index, self.decimal_separator)
            self._skip(create_unexpected_character_warning(char, index, self.decimal_separator), result)
            return state

        return self._emit(Token(token_type, char, char, index, 1), result)

    def _is_number_start(self, char: str, state: ScanState) -> bool:
        """A leading '-' only counts while an operand is expected."""
        return (char in ASCII_DIGITS or char == self.decimal_separator or
                (char == "-" and state is ScanState.EXPECT_OPERAND))

    def _is_number_part(self, char: str) -> bool:
        return char in ASCII_DIGITS or char == self.decimal_separator

    def _emit(self, token: Token, result: ScanResult) -> ScanState:
        result.tokens.append(token)
        return NEXT_STATE[token.type]

    def _skip(self, warning: LexerWarning, result: ScanResult):
        logger.debug("Skipping %r at position %d (%s)", warning.lexeme, warning.position, warning.code)
        result.warnings.append(warning)


def tokenize_string(formula: str, decimal_separator: str = ".", strict: bool = False) -> List[Token]:
    """
    Convenience function to scan a formula with an explicit separator.

    Args:
        formula: Expression text
        decimal_separator: Decimal separator of floating-point literals
        strict: Raise on malformed numbers and unknown characters

    Returns:
        List of tokens

    Raises:
        InputError: If the formula is None or empty
    """
    scanner = Scanner(ScannerConfig(decimal_separator=decimal_separator, strict=strict))
    return scanner.scan(formula)
