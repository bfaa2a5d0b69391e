"""Fixtures for i18n tests."""

import pytest

from infrastructure.i18n import LanguageNegotiator


@pytest.fixture
def negotiator():
    """Negotiator with the default (English) fallback."""
    return LanguageNegotiator()
