"""Access control and login throttling for Campaign Access."""

from campaign_access.auth.models import (
    Role,
    ColumnKey,
    COLUMN_KEYS,
    DataScope,
    UserAccessProfile,
    ScopedEntity,
    LoginAttemptState,
)
from campaign_access.auth.profile import (
    create_column_permission_map,
    empty_column_permission_map,
    create_default_profile,
    validate_profile,
    profile_from_user_config,
    resolve_profile,
)
from campaign_access.auth.permissions import (
    has_column_access,
    visible_columns,
    is_row_visible,
    filter_rows_by_scope,
    mask_columns,
    record_fields,
    build_column_access,
    ColumnProjection,
    MANAGEMENT_COLUMNS,
    REPORT_COLUMNS,
    SCHEDULE_COLUMNS,
)
from campaign_access.auth.rate_limit import (
    AttemptStore,
    InMemoryAttemptStore,
    LoginAttemptGuard,
)
from campaign_access.auth.login import LoginGate

__all__ = [
    # Models
    "Role",
    "ColumnKey",
    "COLUMN_KEYS",
    "DataScope",
    "UserAccessProfile",
    "ScopedEntity",
    "LoginAttemptState",
    # Profiles
    "create_column_permission_map",
    "empty_column_permission_map",
    "create_default_profile",
    "validate_profile",
    "profile_from_user_config",
    "resolve_profile",
    # Evaluation
    "has_column_access",
    "visible_columns",
    "is_row_visible",
    "filter_rows_by_scope",
    "mask_columns",
    "record_fields",
    "build_column_access",
    "ColumnProjection",
    "MANAGEMENT_COLUMNS",
    "REPORT_COLUMNS",
    "SCHEDULE_COLUMNS",
    # Login throttling
    "AttemptStore",
    "InMemoryAttemptStore",
    "LoginAttemptGuard",
    "LoginGate",
]
