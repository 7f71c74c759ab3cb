"""Access profile construction and ingress validation."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

import structlog
from pydantic import ValidationError

from campaign_access.auth.models import (
    COLUMN_KEYS,
    ColumnKey,
    DataScope,
    Role,
    UserAccessProfile,
)
from campaign_access.auth.schemas import UserAccessProfileSchema
from campaign_access.core.exceptions import ProfileValidationError
from campaign_access.utils.logging import audit_logger

logger = structlog.get_logger().bind(component="access_profile")


def create_column_permission_map(allowed_columns: Iterable[ColumnKey | str]) -> dict[ColumnKey, bool]:
    """Build a total permission map granting only ``allowed_columns``."""
    allowed = {ColumnKey(column) for column in allowed_columns}
    return {column: column in allowed for column in COLUMN_KEYS}


def empty_column_permission_map() -> dict[ColumnKey, bool]:
    return create_column_permission_map([])


def create_default_profile(role: Role | str = Role.USER) -> UserAccessProfile:
    """
    Create the fallback profile used when no configuration exists yet.

    Every column is denied. The scope is empty, which leaves rows
    unrestricted, so a new account sees rows with no readable columns.
    """
    return UserAccessProfile(
        role=Role(role),
        column_permissions=empty_column_permission_map(),
        scope=DataScope(),
    )


def validate_profile(candidate: Mapping[str, Any] | UserAccessProfile) -> UserAccessProfile:
    """
    Validate a raw profile and return the immutable profile.

    Args:
        candidate: Mapping with ``role``, ``column_permissions`` (or
            ``columnPermissions``) and ``scope`` keys

    Returns:
        Validated UserAccessProfile

    Raises:
        ProfileValidationError: If any key is missing, unknown or mistyped
    """
    if isinstance(candidate, UserAccessProfile):
        candidate = candidate.to_dict()

    try:
        parsed = UserAccessProfileSchema.model_validate(candidate)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_input=False, include_context=False)
        raise ProfileValidationError(
            "Invalid access profile",
            errors=errors,
            details={"error_count": len(errors)},
        ) from e

    return UserAccessProfile(
        role=parsed.role,
        column_permissions=parsed.column_permissions.to_map(),
        scope=DataScope(
            departments=frozenset(parsed.scope.departments),
            agencies=frozenset(parsed.scope.agencies),
        ),
    )


def profile_from_user_config(
    role: Role | str,
    column_permissions: Mapping[str, Any] | None = None,
    departments: Iterable[str] | None = None,
    agencies: Iterable[str] | None = None,
) -> UserAccessProfile:
    """
    Build a profile from persisted per-user configuration.

    A user without a stored permission map gets every column denied; missing
    scope lists mean unrestricted rows. The assembled profile still goes
    through ``validate_profile``.
    """
    if column_permissions is None:
        column_permissions = {key.value: False for key in COLUMN_KEYS}

    return validate_profile({
        "role": role.value if isinstance(role, Role) else role,
        "column_permissions": dict(column_permissions),
        "scope": {
            "departments": list(departments or []),
            "agencies": list(agencies or []),
        },
    })


def resolve_profile(
    candidate: Mapping[str, Any],
    user_id: str | None = None,
) -> UserAccessProfile:
    """
    Validate a raw profile, failing closed to the default user profile.

    A rejected profile never yields admin access: the fallback is always a
    standard user with every column denied.
    """
    try:
        return validate_profile(candidate)
    except ProfileValidationError as e:
        logger.warning(
            "Rejected access profile, falling back to default",
            user_id=user_id,
            errors=e.errors,
        )
        audit_logger.log_access_event(
            resource="access_profile",
            action="profile_rejected",
            user_id=user_id,
            granted=False,
            details={"error_count": len(e.errors)},
        )
        return create_default_profile(Role.USER)
