"""Login gate: throttled credential verification."""

from __future__ import annotations

import math
from typing import Callable, Generic, TypeVar

import structlog

from campaign_access.auth.rate_limit import LoginAttemptGuard
from campaign_access.core.exceptions import AccountLockedError, InvalidCredentialsError
from campaign_access.utils.logging import AuditLogger, audit_logger

logger = structlog.get_logger()

A = TypeVar("A")


class LoginGate(Generic[A]):
    """
    Runs credential verification behind the login attempt guard.

    Features:
    - Rejects locked identities before any credential check
    - Records failures and resets the counter on success
    - Audit logging of every outcome
    """

    def __init__(
        self,
        guard: LoginAttemptGuard,
        verifier: Callable[[str, str], A | None],
        audit: AuditLogger | None = None,
    ) -> None:
        self.guard = guard
        self.verifier = verifier
        self.audit = audit or audit_logger
        self.logger = logger.bind(component="login_gate")

    def _locked(self, login_id: str, remaining_seconds: int) -> AccountLockedError:
        self.audit.log_auth_event(
            "account_locked",
            login_id=login_id,
            success=False,
            details={
                "remaining_seconds": remaining_seconds,
                "remaining_minutes": math.ceil(remaining_seconds / 60),
            },
        )
        return AccountLockedError(
            "Account temporarily locked",
            remaining_seconds=remaining_seconds,
            details={"login_id": login_id},
        )

    def authenticate(self, login_id: str, password: str) -> A:
        """
        Authenticate a login identity.

        Args:
            login_id: Login identity
            password: Password to verify

        Returns:
            The actor returned by the verifier

        Raises:
            AccountLockedError: If the identity is locked (before or as a
                result of this attempt)
            InvalidCredentialsError: If verification fails
        """
        remaining_seconds = self.guard.is_locked(login_id)
        if remaining_seconds is not None:
            raise self._locked(login_id, remaining_seconds)

        actor = self.verifier(login_id, password)

        if actor is None:
            self.guard.record_failure(login_id)
            remaining = self.guard.remaining_attempts(login_id)
            self.audit.log_auth_event(
                "login_failure",
                login_id=login_id,
                success=False,
                details={"remaining_attempts": remaining},
            )

            remaining_seconds = self.guard.is_locked(login_id)
            if remaining_seconds is not None:
                raise self._locked(login_id, remaining_seconds)

            raise InvalidCredentialsError(
                "Invalid credentials",
                remaining_attempts=remaining,
                details={"login_id": login_id},
            )

        self.guard.reset_attempts(login_id)
        self.audit.log_auth_event("login_success", login_id=login_id)
        self.logger.info("Login succeeded", login_id=login_id)
        return actor
