"""Strict ingress schemas for raw access profiles.

Raw profiles arrive from persisted per-user configuration. They are parsed
without coercion: a missing column key, an unknown key or a non-boolean flag
is rejected rather than defaulted.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictStr

from campaign_access.auth.models import ColumnKey, Role


class ColumnPermissionsSchema(BaseModel):
    """Total column permission map. Every key is required."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    campaign: StrictBool
    creative: StrictBool
    channel: StrictBool
    schedule: StrictBool
    spend: StrictBool
    budget_account: StrictBool = Field(
        validation_alias=AliasChoices("budget_account", "budgetAccount"),
    )
    department: StrictBool
    agency: StrictBool

    def to_map(self) -> dict[ColumnKey, bool]:
        return {key: getattr(self, key.value) for key in ColumnKey}


class DataScopeSchema(BaseModel):
    """Row scope. Both dimensions must be present; empty means unrestricted."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Accepts list, tuple, set or frozenset of strings; a bare string is rejected
    departments: frozenset[StrictStr]
    agencies: frozenset[StrictStr]


class UserAccessProfileSchema(BaseModel):
    """Raw access profile as supplied by the session collaborator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    role: Role
    column_permissions: ColumnPermissionsSchema = Field(
        validation_alias=AliasChoices("column_permissions", "columnPermissions"),
    )
    scope: DataScopeSchema
