"""Utility modules for Campaign Access."""

from campaign_access.utils.logging import (
    setup_logging,
    get_logger,
    AuditLogger,
    audit_logger,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "AuditLogger",
    "audit_logger",
]
