"""Locale models for the i18n system.

Defines the closed set of supported languages, text direction, and the
``LocalePair`` that governs a visitor's UI language and routing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TextDirection(str, Enum):
    """Writing direction of a language."""

    LTR = "ltr"
    RTL = "rtl"


class LanguageCode(str, Enum):
    """Supported UI languages (lowercase ISO 639-1)."""

    EN = "en"
    TR = "tr"
    DE = "de"
    FR = "fr"
    ES = "es"
    IT = "it"
    PT = "pt"
    RU = "ru"
    JA = "ja"
    KO = "ko"
    ZH = "zh"
    AR = "ar"
    HI = "hi"
    NL = "nl"
    SV = "sv"
    NO = "no"
    DA = "da"
    FI = "fi"
    PL = "pl"
    EL = "el"

    @classmethod
    def from_string(cls, code: str) -> "LanguageCode":
        """Convert a string to a LanguageCode.

        Surrounding whitespace and case are ignored.

        Args:
            code: Language code string (e.g., "fr", "DE").

        Returns:
            Matching LanguageCode.

        Raises:
            ValueError: If the code is not a supported language.
        """
        try:
            return cls(code.strip().lower())
        except (AttributeError, ValueError) as e:
            raise ValueError(f"Unsupported language: {code}") from e

    @classmethod
    def parse(cls, code: Optional[str]) -> Optional["LanguageCode"]:
        """Like ``from_string`` but returns None for unsupported input."""
        if not code:
            return None
        try:
            return cls.from_string(code)
        except ValueError:
            return None

    @property
    def direction(self) -> TextDirection:
        """Writing direction for this language."""
        return TextDirection.RTL if self in RTL_LANGUAGES else TextDirection.LTR


RTL_LANGUAGES = frozenset({LanguageCode.AR})

DEFAULT_COUNTRY = "US"
DEFAULT_LANGUAGE = LanguageCode.EN


def normalize_country_code(code: str) -> str:
    """Normalize and validate an ISO 3166-1 alpha-2 country code.

    Args:
        code: Country code in any case (e.g., "tr", " DE ").

    Returns:
        Uppercase two-letter code.

    Raises:
        ValueError: If the value is not two ASCII letters.
    """
    if not isinstance(code, str):
        raise ValueError(f"Invalid country code: {code!r}")
    value = code.strip().upper()
    if len(value) != 2 or not value.isascii() or not value.isalpha():
        raise ValueError(f"Invalid country code: {code!r}")
    return value


def parse_country_code(code: Optional[str]) -> Optional[str]:
    """Like ``normalize_country_code`` but returns None for invalid input."""
    if not code:
        return None
    try:
        return normalize_country_code(code)
    except ValueError:
        return None


@dataclass(frozen=True)
class LocalePair:
    """The resolved (country, language) pair for one visitor session.

    ``language`` is always a supported language. ``country`` is informational
    and only needs to be a well-formed two-letter code.

    Attributes:
        country: ISO 3166-1 alpha-2 code, uppercase.
        language: Supported LanguageCode.
    """

    country: str
    language: LanguageCode

    def __post_init__(self) -> None:
        object.__setattr__(self, "country", normalize_country_code(self.country))
        if not isinstance(self.language, LanguageCode):
            object.__setattr__(self, "language", LanguageCode.from_string(self.language))

    @property
    def direction(self) -> TextDirection:
        return self.language.direction

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the profile record field names."""
        return {"country_code": self.country, "language_code": self.language.value}


DEFAULT_PAIR = LocalePair(country=DEFAULT_COUNTRY, language=DEFAULT_LANGUAGE)

SUPPORTED_LANGUAGE_CODES = frozenset(language.value for language in LanguageCode)
