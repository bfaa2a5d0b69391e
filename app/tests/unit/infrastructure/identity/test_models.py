"""Tests for infrastructure.identity.models module."""

import pytest
from pydantic import ValidationError

from infrastructure.identity import IdentityKind, SessionIdentity


@pytest.mark.unit
class TestSessionIdentity:
    """Tests for SessionIdentity."""

    def test_anonymous(self):
        identity = SessionIdentity.anonymous()

        assert identity.kind == IdentityKind.ANONYMOUS
        assert identity.user_id is None
        assert not identity.is_authenticated

    def test_authenticated(self):
        identity = SessionIdentity.authenticated("user-1")

        assert identity.is_authenticated
        assert identity.user_id == "user-1"

    def test_authenticated_requires_user_id(self):
        with pytest.raises(ValueError):
            SessionIdentity.authenticated("")

    def test_frozen(self):
        identity = SessionIdentity.anonymous()

        with pytest.raises(ValidationError):
            identity.user_id = "user-1"

    def test_equality(self):
        assert SessionIdentity.authenticated("a") == SessionIdentity.authenticated("a")
        assert SessionIdentity.authenticated("a") != SessionIdentity.anonymous()
