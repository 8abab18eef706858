"""Scanner configuration."""

import locale
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from .tokens import ASCII_DIGITS, ASCII_LETTERS, SINGLE_CHAR_TOKENS
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Serializes the temporary LC_NUMERIC switch in from_locale
_locale_lock = threading.Lock()


@dataclass(frozen=True)
class ScannerConfig:
    """Immutable scanner configuration.

    Fixed when a Scanner is built and never read from ambient state
    afterwards, so one config can back any number of concurrent scans.
    """

    decimal_separator: str = "."
    strict: bool = False          # raise typed errors instead of dropping spans

    def __post_init__(self):
        sep = self.decimal_separator
        if not isinstance(sep, str) or len(sep) != 1:
            raise ConfigurationError(
                f"Decimal separator must be a single character, got {sep!r}"
            )
        if sep in ASCII_DIGITS or sep in ASCII_LETTERS or sep.isspace() or sep in SINGLE_CHAR_TOKENS:
            raise ConfigurationError(
                f"Decimal separator {sep!r} clashes with another token"
            )

    @classmethod
    def from_locale(cls, locale_name: Optional[str] = None, strict: bool = False) -> "ScannerConfig":
        """
        Build a config using the decimal point of a locale.

        A named locale is read by switching the process-wide LC_NUMERIC
        setting and restoring it afterwards. calclex serializes its own
        switches, but setlocale is not thread-safe, so other threads that
        format or parse numbers may see the named locale meanwhile. Call
        it at startup, before such threads run. Scanners built from the
        result never touch locale state again.

        Args:
            locale_name: Locale to read, e.g. "de_DE.UTF-8". None uses the
                process's current LC_NUMERIC setting.
            strict: Passed through to the config

        Raises:
            ConfigurationError: If the locale is not available
        """
        if locale_name is None:
            decimal_point = locale.localeconv()["decimal_point"]
        else:
            with _locale_lock:
                previous = locale.setlocale(locale.LC_NUMERIC)
                try:
                    locale.setlocale(locale.LC_NUMERIC, locale_name)
                except locale.Error as e:
                    raise ConfigurationError(f"Locale {locale_name!r} is not available") from e
                try:
                    decimal_point = locale.localeconv()["decimal_point"]
                finally:
                    locale.setlocale(locale.LC_NUMERIC, previous)

        # Only the first character is significant
        separator = decimal_point[:1] or "."
        logger.debug("Resolved decimal separator %r from locale %r", separator, locale_name)
        return cls(decimal_separator=separator, strict=strict)
