"""Custom exceptions for Campaign Access."""

from typing import Any


class CampaignAccessError(Exception):
    """Base exception for all Campaign Access errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(CampaignAccessError):
    """Raised when there's a configuration error."""

    pass


class ProfileValidationError(CampaignAccessError):
    """Raised when a raw access profile fails ingress validation."""

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.errors = errors or []
        super().__init__(message, details)


class AuthenticationError(CampaignAccessError):
    """Raised when a login attempt is rejected."""

    pass


class AccountLockedError(AuthenticationError):
    """Raised when the login identity is temporarily locked."""

    def __init__(
        self,
        message: str,
        remaining_seconds: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.remaining_seconds = remaining_seconds
        super().__init__(message, details)


class InvalidCredentialsError(AuthenticationError):
    """Raised when credential verification fails."""

    def __init__(
        self,
        message: str,
        remaining_attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.remaining_attempts = remaining_attempts
        super().__init__(message, details)
