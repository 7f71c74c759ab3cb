"""
Campaign Access - data access control for advertising campaign records.

Decides, per authenticated actor, which business columns and which rows of
campaign data are visible, computes summaries that respect those decisions,
and throttles login attempts per identity.
"""

__version__ = "0.1.0"

from campaign_access.core.config import Settings, get_settings
from campaign_access.core.exceptions import (
    CampaignAccessError,
    ConfigurationError,
    ProfileValidationError,
    AuthenticationError,
    AccountLockedError,
    InvalidCredentialsError,
)
from campaign_access.auth import (
    Role,
    ColumnKey,
    DataScope,
    UserAccessProfile,
    create_default_profile,
    validate_profile,
    resolve_profile,
    has_column_access,
    visible_columns,
    is_row_visible,
    filter_rows_by_scope,
    mask_columns,
    LoginAttemptGuard,
    LoginGate,
)


# Lazy imports for modules that pull in polars
def __getattr__(name: str):
    """Lazy import for heavy modules."""
    if name == "generate_dashboard_data":
        from campaign_access.dashboard import generate_dashboard_data
        return generate_dashboard_data
    elif name == "build_report_summary":
        from campaign_access.dashboard import build_report_summary
        return build_report_summary
    elif name == "CampaignRecord":
        from campaign_access.dashboard import CampaignRecord
        return CampaignRecord
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Access control
    "Role",
    "ColumnKey",
    "DataScope",
    "UserAccessProfile",
    "create_default_profile",
    "validate_profile",
    "resolve_profile",
    "has_column_access",
    "visible_columns",
    "is_row_visible",
    "filter_rows_by_scope",
    "mask_columns",
    # Login throttling
    "LoginAttemptGuard",
    "LoginGate",
    # Dashboard (lazy)
    "generate_dashboard_data",
    "build_report_summary",
    "CampaignRecord",
    # Exceptions
    "CampaignAccessError",
    "ConfigurationError",
    "ProfileValidationError",
    "AuthenticationError",
    "AccountLockedError",
    "InvalidCredentialsError",
]
