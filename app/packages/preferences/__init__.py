"""Preferences package - per-visitor locale resolution and synchronization."""

from packages.preferences.routes import pages_router
from packages.preferences.routes import router as preferences_router
from packages.preferences.session import LocaleSession

__all__ = [
    "preferences_router",
    "pages_router",
    "LocaleSession",
]
