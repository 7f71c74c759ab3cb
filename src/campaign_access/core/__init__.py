"""Core module for Campaign Access."""

from campaign_access.core.config import Settings, get_settings
from campaign_access.core.exceptions import (
    CampaignAccessError,
    ConfigurationError,
    ProfileValidationError,
    AuthenticationError,
    AccountLockedError,
    InvalidCredentialsError,
)

__all__ = [
    "Settings",
    "get_settings",
    "CampaignAccessError",
    "ConfigurationError",
    "ProfileValidationError",
    "AuthenticationError",
    "AccountLockedError",
    "InvalidCredentialsError",
]
