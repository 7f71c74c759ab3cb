"""Login attempt rate limiting.

Tracks failed logins per identity and issues time-boxed lockouts to slow
down brute-force attacks. State lives behind an ``AttemptStore`` so the
in-memory default can be replaced by a shared store without touching the
state machine.
"""

from __future__ import annotations

import math
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable

import structlog

from campaign_access.auth.models import LoginAttemptState
from campaign_access.core.config import Settings
from campaign_access.core.exceptions import ConfigurationError
from campaign_access.core.utils import utc_now

logger = structlog.get_logger()

MAX_ATTEMPTS = 5
LOCKOUT_DURATION = timedelta(minutes=15)
ATTEMPT_WINDOW = timedelta(hours=1)
SWEEP_INTERVAL = timedelta(minutes=5)

StateUpdate = Callable[[LoginAttemptState | None], LoginAttemptState | None]


class AttemptStore(ABC):
    """Key-value store for login attempt state."""

    @abstractmethod
    def get(self, key: str) -> LoginAttemptState | None:
        """Return the state for a key, if any."""

    @abstractmethod
    def update(self, key: str, fn: StateUpdate) -> LoginAttemptState | None:
        """
        Atomically replace the state for a key.

        ``fn`` receives the current state (or None) and returns the new
        state; returning None deletes the key. Returns the new state.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key unconditionally."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Snapshot of the stored keys."""


class InMemoryAttemptStore(AttemptStore):
    """Process-local store; updates are serialised by a single lock."""

    def __init__(self) -> None:
        self._states: dict[str, LoginAttemptState] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> LoginAttemptState | None:
        with self._lock:
            return self._states.get(key)

    def update(self, key: str, fn: StateUpdate) -> LoginAttemptState | None:
        with self._lock:
            new_state = fn(self._states.get(key))
            if new_state is None:
                self._states.pop(key, None)
            else:
                self._states[key] = new_state
            return new_state

    def delete(self, key: str) -> None:
        with self._lock:
            self._states.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._states)

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)


class LoginAttemptGuard:
    """
    Per-identity login throttle.

    States:
    - Clean: no record
    - Accumulating: failures counted inside the attempt window, not locked
    - Locked: ``locked_until`` is in the future

    The lockout is shorter than the attempt window, so failures counted
    before a lockout still count after it expires within the same window.
    """

    def __init__(
        self,
        store: AttemptStore | None = None,
        max_attempts: int = MAX_ATTEMPTS,
        lockout_duration: timedelta = LOCKOUT_DURATION,
        attempt_window: timedelta = ATTEMPT_WINDOW,
        sweep_interval: timedelta = SWEEP_INTERVAL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the guard.

        Args:
            store: Attempt state store (in-memory by default)
            max_attempts: Failures within the window that trigger a lockout
            lockout_duration: How long a lockout lasts
            attempt_window: Span over which failures are counted
            sweep_interval: Minimum gap between stale-record sweeps
            clock: Source of the current time
        """
        if lockout_duration >= attempt_window:
            raise ConfigurationError(
                "lockout_duration must be shorter than attempt_window",
                details={
                    "lockout_seconds": lockout_duration.total_seconds(),
                    "window_seconds": attempt_window.total_seconds(),
                },
            )

        self.store = store if store is not None else InMemoryAttemptStore()
        self.max_attempts = max_attempts
        self.lockout_duration = lockout_duration
        self.attempt_window = attempt_window
        self.sweep_interval = sweep_interval
        self.clock = clock
        self._last_sweep = clock()
        self._sweep_lock = threading.Lock()
        self.logger = logger.bind(component="login_guard")

    @classmethod
    def from_settings(cls, settings: Settings, store: AttemptStore | None = None) -> "LoginAttemptGuard":
        """Create a guard from the ``login_guard`` settings section."""
        config = settings.login_guard
        return cls(
            store=store,
            max_attempts=config.max_attempts,
            lockout_duration=config.lockout_duration,
            attempt_window=config.attempt_window,
            sweep_interval=config.sweep_interval,
        )

    def _window_expired(self, state: LoginAttemptState, now: datetime) -> bool:
        return now - state.first_attempt_at > self.attempt_window

    def _after_lock_expiry(
        self,
        state: LoginAttemptState | None,
        now: datetime,
    ) -> LoginAttemptState | None:
        """Transition for a record whose lockout may have run out."""
        if state is None or state.locked_until is None or state.is_locked_at(now):
            return state
        if self._window_expired(state, now):
            return None
        return LoginAttemptState(count=state.count, first_attempt_at=state.first_attempt_at)

    def _remaining_seconds(self, state: LoginAttemptState | None, now: datetime) -> int | None:
        if state is None or not state.is_locked_at(now):
            return None
        return math.ceil((state.locked_until - now).total_seconds())

    def record_failure(self, login_id: str) -> None:
        """Record a failed login and lock the identity at the threshold."""
        now = self.clock()
        locked_now = False

        def apply(state: LoginAttemptState | None) -> LoginAttemptState | None:
            nonlocal locked_now
            if state is None or self._window_expired(state, now):
                return LoginAttemptState(count=1, first_attempt_at=now)

            # Already locked: neither count nor extend
            if state.is_locked_at(now):
                return state

            count = state.count + 1
            locked_until = None
            if count >= self.max_attempts:
                locked_until = now + self.lockout_duration
                locked_now = True
            return LoginAttemptState(
                count=count,
                first_attempt_at=state.first_attempt_at,
                locked_until=locked_until,
            )

        new_state = self.store.update(login_id, apply)

        if locked_now:
            self.logger.warning(
                "Login identity locked",
                login_id=login_id,
                attempts=new_state.count,
                locked_until=new_state.locked_until.isoformat(),
            )
        else:
            self.logger.debug(
                "Login failure recorded",
                login_id=login_id,
                attempts=new_state.count if new_state else 0,
            )

        self._maybe_sweep(now)

    def lock_status(self, login_id: str) -> int | None:
        """Remaining lockout in whole seconds, without changing any state."""
        return self._remaining_seconds(self.store.get(login_id), self.clock())

    def is_locked(self, login_id: str) -> int | None:
        """
        Check whether an identity is locked.

        Returns the remaining lockout in whole seconds (rounded up), or None.
        An expired lockout is cleared here: the record is dropped when the
        attempt window has also passed, otherwise the failure count is kept.
        """
        now = self.clock()
        remaining: int | None = None

        def apply(state: LoginAttemptState | None) -> LoginAttemptState | None:
            nonlocal remaining
            remaining = self._remaining_seconds(state, now)
            return self._after_lock_expiry(state, now)

        self.store.update(login_id, apply)
        return remaining

    def reset_attempts(self, login_id: str) -> None:
        """Forget all failures for an identity after a successful login."""
        self.store.delete(login_id)

    def remaining_attempts(self, login_id: str) -> int:
        """Failures left before the identity is locked."""
        state = self.store.get(login_id)
        if state is None or self._window_expired(state, self.clock()):
            return self.max_attempts

        return max(0, self.max_attempts - state.count)

    def sweep(self) -> int:
        """
        Remove stale records.

        A record is stale when it has no active lockout and its attempt
        window has passed.

        Returns:
            Number of records removed
        """
        now = self.clock()
        removed = 0

        def apply(state: LoginAttemptState | None) -> LoginAttemptState | None:
            nonlocal removed
            if state is None:
                return None
            if not state.is_locked_at(now) and self._window_expired(state, now):
                removed += 1
                return None
            return state

        for key in self.store.keys():
            self.store.update(key, apply)

        with self._sweep_lock:
            self._last_sweep = now

        if removed:
            self.logger.info("Swept stale login attempt records", removed=removed)
        return removed

    def _maybe_sweep(self, now: datetime) -> None:
        with self._sweep_lock:
            due = now - self._last_sweep >= self.sweep_interval
        if due:
            self.sweep()
