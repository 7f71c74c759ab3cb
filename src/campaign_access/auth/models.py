"""Access profile models for Campaign Access."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable

from campaign_access.core.exceptions import ProfileValidationError


class Role(str, Enum):
    """User roles. Admin bypasses every column and row check."""

    ADMIN = "admin"
    USER = "user"


class ColumnKey(str, Enum):
    """Business-data columns subject to per-user read permission."""

    CAMPAIGN = "campaign"
    CREATIVE = "creative"
    CHANNEL = "channel"
    SCHEDULE = "schedule"
    SPEND = "spend"
    BUDGET_ACCOUNT = "budget_account"
    DEPARTMENT = "department"
    AGENCY = "agency"


COLUMN_KEYS: tuple[ColumnKey, ...] = tuple(ColumnKey)

# Record fields governed by each column key. The schedule column covers
# the campaign period fields.
COLUMN_FIELDS: Mapping[ColumnKey, tuple[str, ...]] = MappingProxyType({
    ColumnKey.CAMPAIGN: ("campaign",),
    ColumnKey.CREATIVE: ("creative",),
    ColumnKey.CHANNEL: ("channel",),
    ColumnKey.SCHEDULE: ("schedule", "start_date", "end_date"),
    ColumnKey.SPEND: ("spend",),
    ColumnKey.BUDGET_ACCOUNT: ("budget_account",),
    ColumnKey.DEPARTMENT: ("department",),
    ColumnKey.AGENCY: ("agency",),
})

# Fields masked to None instead of the textual placeholder
NON_TEXT_FIELDS = frozenset({"spend", "start_date", "end_date"})


@runtime_checkable
class ScopedEntity(Protocol):
    """Minimal shape a record needs for row-scope filtering."""

    department: str
    agency: str


@dataclass(frozen=True)
class DataScope:
    """
    Row-level scope for a standard user.

    An empty set means the dimension is unrestricted; a non-empty set is an
    allow-list.
    """
    departments: frozenset[str] = frozenset()
    agencies: frozenset[str] = frozenset()

    @property
    def is_unrestricted(self) -> bool:
        return not self.departments and not self.agencies

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "departments": sorted(self.departments),
            "agencies": sorted(self.agencies),
        }


@dataclass(frozen=True)
class UserAccessProfile:
    """
    Per-session data access profile.

    Built once per authenticated session and never mutated; a changed
    configuration produces a new profile.
    """
    role: Role
    column_permissions: Mapping[ColumnKey, bool]
    scope: DataScope = field(default_factory=DataScope)

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", Role(self.role))

        permissions = {ColumnKey(key): value for key, value in self.column_permissions.items()}
        missing = [key.value for key in COLUMN_KEYS if key not in permissions]
        if missing:
            raise ProfileValidationError(
                "Column permission map is not total",
                details={"missing": missing},
            )
        mistyped = [key.value for key, value in permissions.items() if not isinstance(value, bool)]
        if mistyped:
            raise ProfileValidationError(
                "Column permissions must be booleans",
                details={"mistyped": mistyped},
            )

        # Freeze the permission map so the profile stays immutable
        object.__setattr__(self, "column_permissions", MappingProxyType(permissions))

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "role": self.role.value,
            "column_permissions": {
                key.value: self.column_permissions[key] for key in COLUMN_KEYS
            },
            "scope": self.scope.to_dict(),
        }


@dataclass(frozen=True)
class LoginAttemptState:
    """Failed-login bookkeeping for one login identity."""
    count: int
    first_attempt_at: datetime
    locked_until: datetime | None = None

    def is_locked_at(self, now: datetime) -> bool:
        return self.locked_until is not None and self.locked_until > now
