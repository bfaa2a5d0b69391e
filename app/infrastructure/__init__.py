"""Shared building blocks of the locale preferences service.

``i18n`` holds the locale tables, ``clients.geolocation`` the IP provider
chain, ``persistence`` and ``identity`` the signed-in visitor's profile, and
``configuration``/``logging``/``events``/``operations``/``services`` the
plumbing the feature packages are built on.
"""

from infrastructure.operations import OperationResult, OperationStatus
from infrastructure.services import SettingsDep, get_settings

__all__ = ["OperationResult", "OperationStatus", "SettingsDep", "get_settings"]
