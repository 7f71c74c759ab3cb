"""Tests for the throttled login gate."""

from unittest.mock import MagicMock

import pytest

from campaign_access.auth.login import LoginGate
from campaign_access.auth.rate_limit import LoginAttemptGuard
from campaign_access.core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    InvalidCredentialsError,
)
from campaign_access.utils.logging import AuditLogger

USERS = {"alice": "correct-horse"}


def verify(login_id: str, password: str):
    if USERS.get(login_id) == password:
        return {"login_id": login_id}
    return None


@pytest.fixture
def guard(clock) -> LoginAttemptGuard:
    return LoginAttemptGuard(clock=clock)


@pytest.fixture
def audit() -> MagicMock:
    return MagicMock(spec=AuditLogger)


@pytest.fixture
def gate(guard, audit) -> LoginGate:
    return LoginGate(guard, verify, audit=audit)


def audit_events(audit):
    return [c.args[0] for c in audit.log_auth_event.call_args_list]


class TestLoginGate:
    """Test authentication outcomes."""

    def test_success(self, gate, audit):
        """Correct credentials should return the actor."""
        assert gate.authenticate("alice", "correct-horse") == {"login_id": "alice"}
        assert audit_events(audit) == ["login_success"]

    def test_failure_reports_remaining_attempts(self, gate):
        """A wrong password should report attempts left."""
        with pytest.raises(InvalidCredentialsError) as e:
            gate.authenticate("alice", "wrong")
        assert e.value.remaining_attempts == 4

    def test_unknown_user_counts_as_failure(self, gate, guard):
        """Unknown identities should be throttled like known ones."""
        with pytest.raises(InvalidCredentialsError):
            gate.authenticate("mallory", "guess")
        assert guard.remaining_attempts("mallory") == 4

    def test_fifth_failure_locks(self, gate, audit):
        """The failure reaching the threshold should raise a lock error."""
        for _ in range(4):
            with pytest.raises(InvalidCredentialsError):
                gate.authenticate("alice", "wrong")

        with pytest.raises(AccountLockedError) as e:
            gate.authenticate("alice", "wrong")
        assert e.value.remaining_seconds == 900
        assert audit_events(audit)[-1] == "account_locked"

    def test_locked_identity_skips_verification(self, guard, audit):
        """While locked, the verifier should not be called."""
        verifier = MagicMock(return_value=None)
        gate = LoginGate(guard, verifier, audit=audit)
        for _ in range(5):
            guard.record_failure("alice")

        with pytest.raises(AccountLockedError):
            gate.authenticate("alice", "correct-horse")
        verifier.assert_not_called()

    def test_success_resets_counter(self, gate, guard):
        """A successful login should forget earlier failures."""
        with pytest.raises(InvalidCredentialsError):
            gate.authenticate("alice", "wrong")
        gate.authenticate("alice", "correct-horse")
        assert guard.remaining_attempts("alice") == 5

    def test_lock_expires(self, gate, clock):
        """After the lockout the correct password should work again."""
        for _ in range(5):
            with pytest.raises(AuthenticationError):
                gate.authenticate("alice", "wrong")
        clock.advance(minutes=16)
        assert gate.authenticate("alice", "correct-horse") == {"login_id": "alice"}
