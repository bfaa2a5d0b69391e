"""i18n system - locale tables and browser language negotiation.

Main components:
- models: LanguageCode, LocalePair, TextDirection
- tables: country/language mappings and English country names
- resolvers: LanguageNegotiator for Accept-Language headers
"""

from infrastructure.i18n.models import (
    DEFAULT_COUNTRY,
    DEFAULT_LANGUAGE,
    DEFAULT_PAIR,
    SUPPORTED_LANGUAGE_CODES,
    LanguageCode,
    LocalePair,
    TextDirection,
    normalize_country_code,
    parse_country_code,
)
from infrastructure.i18n.resolvers import LanguageNegotiator
from infrastructure.i18n.tables import (
    country_for_language,
    country_name,
    default_country_for_language_tag,
    is_rtl,
    is_supported_language,
    language_for_country,
    supported_countries,
    text_direction,
)

__all__ = [
    "DEFAULT_COUNTRY",
    "DEFAULT_LANGUAGE",
    "DEFAULT_PAIR",
    "SUPPORTED_LANGUAGE_CODES",
    "LanguageCode",
    "LocalePair",
    "TextDirection",
    "normalize_country_code",
    "parse_country_code",
    "LanguageNegotiator",
    "country_for_language",
    "country_name",
    "default_country_for_language_tag",
    "is_rtl",
    "is_supported_language",
    "language_for_country",
    "supported_countries",
    "text_direction",
]
