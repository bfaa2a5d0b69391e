"""Static locale lookup tables.

Country -> language (many to one), language -> representative country (one
to one), the browser-language default regions used by geolocation fallback,
and English country names. All lookups are total: unmapped input resolves to
the default country or language, never to None.
"""

import unicodedata
from typing import Dict, Mapping, Optional

from infrastructure.i18n.models import (
    DEFAULT_COUNTRY,
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGE_CODES,
    LanguageCode,
    TextDirection,
    parse_country_code,
)

L = LanguageCode


def _group(language: LanguageCode, *countries: str) -> Dict[str, LanguageCode]:
    return {country: language for country in countries}


COUNTRY_LANGUAGE: Mapping[str, LanguageCode] = {
    **_group(
        L.EN,
        "US", "GB", "CA", "AU", "NZ", "IE", "ZA", "SG", "PH", "MY", "HK", "PK",
        "NG", "KE", "GH", "ZW", "UG", "TZ",
    ),
    **_group(L.TR, "TR"),
    **_group(L.DE, "DE", "AT", "CH", "LI"),
    **_group(
        L.FR,
        "FR", "BE", "LU", "MC", "CD", "CI", "CM", "SN", "ML", "NE", "BF", "MG",
        "BJ", "TG", "GN", "RW", "BI", "HT", "GA", "CG",
    ),
    **_group(
        L.ES,
        "ES", "MX", "AR", "CL", "CO", "PE", "VE", "UY", "EC", "BO", "PY", "GT",
        "DO", "HN", "SV", "NI", "CR", "PA", "CU", "PR", "GQ",
    ),
    **_group(L.IT, "IT", "SM", "VA"),
    **_group(L.PT, "PT", "BR", "AO", "MZ", "CV", "GW", "ST", "TL"),
    **_group(L.NL, "NL", "SR"),
    **_group(
        L.RU,
        "RU", "BY", "KZ", "KG", "TJ", "UZ", "TM", "MD", "UA", "AM", "AZ", "GE",
    ),
    **_group(L.PL, "PL"),
    **_group(L.EL, "GR", "CY"),
    **_group(L.JA, "JP"),
    **_group(L.KO, "KR", "KP"),
    **_group(L.ZH, "CN", "TW", "MO"),
    **_group(L.HI, "IN", "NP"),
    **_group(
        L.AR,
        "AE", "SA", "EG", "DZ", "BH", "TD", "KM", "DJ", "IQ", "JO", "KW", "LB",
        "LY", "MR", "MA", "OM", "PS", "QA", "SD", "SO", "SY", "TN", "YE",
    ),
    **_group(L.SV, "SE", "AX"),
    **_group(L.NO, "NO", "BV", "SJ"),
    **_group(L.DA, "DK", "FO", "GL"),
    **_group(L.FI, "FI"),
    # No translation for these markets yet; English UI
    **_group(
        L.EN,
        "CZ", "SK", "HU", "RO", "HR", "SI", "BG", "LT", "LV", "EE", "IS", "MT",
        "TH", "VN", "ID", "IL",
    ),
}

LANGUAGE_COUNTRY: Mapping[LanguageCode, str] = {
    L.EN: "US",
    L.TR: "TR",
    L.DE: "DE",
    L.FR: "FR",
    L.ES: "ES",
    L.IT: "IT",
    L.PT: "PT",
    L.RU: "RU",
    L.JA: "JP",
    L.KO: "KR",
    L.ZH: "CN",
    L.AR: "SA",
    L.HI: "IN",
    L.NL: "NL",
    L.SV: "SE",
    L.NO: "NO",
    L.DA: "DK",
    L.FI: "FI",
    L.PL: "PL",
    L.EL: "GR",
}

# Region assumed for a bare browser language tag ("pt" -> most visitors are in BR)
LANGUAGE_DEFAULT_REGION: Mapping[str, str] = {
    **{language.value: country for language, country in LANGUAGE_COUNTRY.items()},
    "pt": "BR",
}

COUNTRY_NAMES: Mapping[str, str] = {
    "AE": "United Arab Emirates",
    "AM": "Armenia",
    "AO": "Angola",
    "AR": "Argentina",
    "AT": "Austria",
    "AU": "Australia",
    "AX": "Åland Islands",
    "AZ": "Azerbaijan",
    "BE": "Belgium",
    "BF": "Burkina Faso",
    "BG": "Bulgaria",
    "BH": "Bahrain",
    "BI": "Burundi",
    "BJ": "Benin",
    "BO": "Bolivia",
    "BR": "Brazil",
    "BV": "Bouvet Island",
    "BY": "Belarus",
    "CA": "Canada",
    "CD": "Democratic Republic of the Congo",
    "CG": "Republic of the Congo",
    "CH": "Switzerland",
    "CI": "Côte d'Ivoire",
    "CL": "Chile",
    "CM": "Cameroon",
    "CN": "China",
    "CO": "Colombia",
    "CR": "Costa Rica",
    "CU": "Cuba",
    "CV": "Cape Verde",
    "CY": "Cyprus",
    "CZ": "Czech Republic",
    "DE": "Germany",
    "DJ": "Djibouti",
    "DK": "Denmark",
    "DO": "Dominican Republic",
    "DZ": "Algeria",
    "EC": "Ecuador",
    "EE": "Estonia",
    "EG": "Egypt",
    "ES": "Spain",
    "FI": "Finland",
    "FO": "Faroe Islands",
    "FR": "France",
    "GA": "Gabon",
    "GB": "United Kingdom",
    "GE": "Georgia",
    "GH": "Ghana",
    "GL": "Greenland",
    "GN": "Guinea",
    "GQ": "Equatorial Guinea",
    "GR": "Greece",
    "GT": "Guatemala",
    "GW": "Guinea-Bissau",
    "HK": "Hong Kong",
    "HN": "Honduras",
    "HR": "Croatia",
    "HT": "Haiti",
    "HU": "Hungary",
    "ID": "Indonesia",
    "IE": "Ireland",
    "IL": "Israel",
    "IN": "India",
    "IQ": "Iraq",
    "IS": "Iceland",
    "IT": "Italy",
    "JO": "Jordan",
    "JP": "Japan",
    "KE": "Kenya",
    "KG": "Kyrgyzstan",
    "KM": "Comoros",
    "KP": "North Korea",
    "KR": "South Korea",
    "KW": "Kuwait",
    "KZ": "Kazakhstan",
    "LB": "Lebanon",
    "LI": "Liechtenstein",
    "LT": "Lithuania",
    "LU": "Luxembourg",
    "LV": "Latvia",
    "LY": "Libya",
    "MA": "Morocco",
    "MC": "Monaco",
    "MD": "Moldova",
    "MG": "Madagascar",
    "ML": "Mali",
    "MO": "Macao",
    "MR": "Mauritania",
    "MT": "Malta",
    "MX": "Mexico",
    "MY": "Malaysia",
    "MZ": "Mozambique",
    "NE": "Niger",
    "NG": "Nigeria",
    "NI": "Nicaragua",
    "NL": "Netherlands",
    "NO": "Norway",
    "NP": "Nepal",
    "NZ": "New Zealand",
    "OM": "Oman",
    "PA": "Panama",
    "PE": "Peru",
    "PH": "Philippines",
    "PK": "Pakistan",
    "PL": "Poland",
    "PR": "Puerto Rico",
    "PS": "Palestine",
    "PT": "Portugal",
    "PY": "Paraguay",
    "QA": "Qatar",
    "RO": "Romania",
    "RU": "Russia",
    "RW": "Rwanda",
    "SA": "Saudi Arabia",
    "SD": "Sudan",
    "SE": "Sweden",
    "SG": "Singapore",
    "SI": "Slovenia",
    "SJ": "Svalbard and Jan Mayen",
    "SK": "Slovakia",
    "SM": "San Marino",
    "SN": "Senegal",
    "SO": "Somalia",
    "SR": "Suriname",
    "ST": "São Tomé and Príncipe",
    "SV": "El Salvador",
    "SY": "Syria",
    "TD": "Chad",
    "TG": "Togo",
    "TH": "Thailand",
    "TJ": "Tajikistan",
    "TL": "Timor-Leste",
    "TM": "Turkmenistan",
    "TN": "Tunisia",
    "TR": "Turkey",
    "TW": "Taiwan",
    "TZ": "Tanzania",
    "UA": "Ukraine",
    "UG": "Uganda",
    "US": "United States",
    "UY": "Uruguay",
    "UZ": "Uzbekistan",
    "VA": "Vatican City",
    "VE": "Venezuela",
    "VN": "Vietnam",
    "YE": "Yemen",
    "ZA": "South Africa",
    "ZW": "Zimbabwe",
}


def language_for_country(country: Optional[str]) -> LanguageCode:
    """UI language for a country; unmapped or malformed codes get the default."""
    code = parse_country_code(country)
    if code is None:
        return DEFAULT_LANGUAGE
    return COUNTRY_LANGUAGE.get(code, DEFAULT_LANGUAGE)


def country_for_language(language: LanguageCode) -> str:
    """Representative country for a supported language."""
    return LANGUAGE_COUNTRY.get(LanguageCode(language), DEFAULT_COUNTRY)


def is_supported_language(code: Optional[str]) -> bool:
    """True if ``code`` is exactly one of the supported lowercase codes."""
    return isinstance(code, str) and code in SUPPORTED_LANGUAGE_CODES


def is_rtl(language: LanguageCode) -> bool:
    return text_direction(language) is TextDirection.RTL


def text_direction(language: LanguageCode) -> TextDirection:
    return LanguageCode(language).direction


def default_country_for_language_tag(base_language: Optional[str]) -> Optional[str]:
    """Region assumed for a bare browser language (``"pt"`` -> ``"BR"``)."""
    if not base_language:
        return None
    return LANGUAGE_DEFAULT_REGION.get(base_language.strip().lower())


def country_name(code: str) -> str:
    """English display name for a country code, or the code itself."""
    normalized = parse_country_code(code)
    if normalized is None:
        return code
    return COUNTRY_NAMES.get(normalized, normalized)


def supported_countries() -> Dict[str, str]:
    """All named countries, ordered alphabetically by English name."""
    return dict(sorted(COUNTRY_NAMES.items(), key=lambda item: _sort_key(item[1])))


def _sort_key(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
