"""Preference change notifications.

``preferences.changed`` is broadcast after an explicit change has been
applied and its persistence scheduled. ``preferences.persist_failed`` is the
error channel for profile writes that did not land.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from infrastructure.events import Event, dispatch_event
from infrastructure.i18n import LanguageCode, LocalePair
from infrastructure.operations import OperationResult

PREFERENCES_CHANGED = "preferences.changed"
PERSIST_FAILED = "preferences.persist_failed"


@dataclass(frozen=True)
class PreferencesChange:
    """What an explicit change did to the active pair."""

    country_changed: bool
    language_changed: bool
    new_country: str
    new_language: LanguageCode

    @classmethod
    def between(cls, before: LocalePair, after: LocalePair) -> "PreferencesChange":
        return cls(
            country_changed=before.country != after.country,
            language_changed=before.language != after.language,
            new_country=after.country,
            new_language=after.language,
        )

    @property
    def changed(self) -> bool:
        return self.country_changed or self.language_changed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "country_changed": self.country_changed,
            "language_changed": self.language_changed,
            "new_country": self.new_country,
            "new_language": self.new_language.value,
        }


def publish_change(change: PreferencesChange, user_id: Optional[str] = None) -> Event:
    """Broadcast a preferences change to every registered listener."""
    event = Event(
        event_type=PREFERENCES_CHANGED,
        user_id=user_id,
        metadata=change.to_dict(),
    )
    dispatch_event(event)
    return event


def publish_persist_failure(
    user_id: str, pair: LocalePair, result: OperationResult
) -> Event:
    """Report a profile write that did not succeed."""
    event = Event(
        event_type=PERSIST_FAILED,
        user_id=user_id,
        metadata={"pair": pair.to_dict(), "result": result.to_dict()},
    )
    dispatch_event(event)
    return event
