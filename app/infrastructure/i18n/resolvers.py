"""Browser language negotiation.

Parses the HTTP Accept-Language header, which is how a server learns the
visitor's browser-reported language, and maps it onto the supported set.
"""

from typing import List, Optional, Tuple

import structlog

from infrastructure.i18n.models import DEFAULT_LANGUAGE, LanguageCode
from infrastructure.i18n.tables import default_country_for_language_tag

logger = structlog.get_logger().bind(component="i18n.negotiation")


class LanguageNegotiator:
    """Reads language preferences out of an Accept-Language header."""

    def __init__(self):
        self.log = logger.bind(default_language=DEFAULT_LANGUAGE.value)

    @staticmethod
    def parse_header(accept_language: Optional[str]) -> List[str]:
        """Language ranges ordered by descending quality.

        ``"fr-CA,fr;q=0.9,en;q=0.8"`` -> ``["fr-CA", "fr", "en"]``. Ranges with
        ``q=0`` or the ``*`` wildcard are dropped; equal qualities keep header
        order.

        Args:
            accept_language: Raw header value.

        Returns:
            Language tags, best first.
        """
        if not accept_language:
            return []

        preferences: List[Tuple[str, float]] = []
        for part in accept_language.split(","):
            pieces = part.split(";")
            lang_range = pieces[0].strip()
            if not lang_range or lang_range == "*":
                continue

            quality = 1.0
            for param in pieces[1:]:
                name, _, value = param.strip().partition("=")
                if name.strip().lower() == "q":
                    try:
                        quality = float(value)
                    except ValueError:
                        quality = 1.0

            if quality > 0:
                preferences.append((lang_range, quality))

        return [tag for tag, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]

    def primary_tag(self, accept_language: Optional[str]) -> Optional[str]:
        """The browser's most preferred language tag, if any."""
        tags = self.parse_header(accept_language)
        return tags[0] if tags else None

    def negotiate_language(self, accept_language: Optional[str]) -> LanguageCode:
        """First supported base language in preference order, else the default."""
        for tag in self.parse_header(accept_language):
            language = LanguageCode.parse(tag.split("-")[0])
            if language is not None:
                self.log.debug("language_negotiated", tag=tag, language=language.value)
                return language

        self.log.debug("no_supported_language_in_header")
        return DEFAULT_LANGUAGE

    def country_from_tag(self, tag: Optional[str]) -> Optional[str]:
        """Country implied by a single language tag.

        ``"pt-BR"`` -> ``"BR"`` (region subtag), ``"de"`` -> ``"DE"`` (default
        region table). Returns None when the tag implies nothing.
        """
        if not tag:
            return None

        parts = tag.replace("_", "-").split("-")
        if len(parts) > 1 and len(parts[1]) == 2 and parts[1].isalpha():
            return parts[1].upper()

        return default_country_for_language_tag(parts[0])
