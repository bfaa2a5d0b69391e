"""Visitor identity for locale preferences.

Usage:
    from infrastructure.services import SessionIdentityResolverDep

    identity = resolver.resolve(request)
    if identity.is_authenticated:
        ...
"""

from infrastructure.identity.models import IdentityKind, SessionIdentity
from infrastructure.identity.resolver import ACCESS_COOKIE, SessionIdentityResolver

__all__ = [
    "ACCESS_COOKIE",
    "IdentityKind",
    "SessionIdentity",
    "SessionIdentityResolver",
]
