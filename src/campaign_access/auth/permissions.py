"""
Column and row access decisions for Campaign Access.

This module is the single place that applies the admin override:
- Column access evaluation and feature projections
- Row scope filtering
- Column masking of outgoing records
"""

from __future__ import annotations

import copy
import dataclasses
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, TypeVar

from campaign_access.auth.models import (
    COLUMN_FIELDS,
    COLUMN_KEYS,
    NON_TEXT_FIELDS,
    ColumnKey,
    ScopedEntity,
    UserAccessProfile,
)

R = TypeVar("R")

DEFAULT_DENIED_LABEL = "권한 없음"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


# ============================================================================
# Column Access Evaluator
# ============================================================================

def has_column_access(profile: UserAccessProfile, column: ColumnKey | str) -> bool:
    """Check whether the profile may read a column."""
    if profile.is_admin:
        return True

    return profile.column_permissions[ColumnKey(column)]


def visible_columns(profile: UserAccessProfile) -> frozenset[ColumnKey]:
    """Return the columns the profile may read."""
    if profile.is_admin:
        return frozenset(COLUMN_KEYS)

    return frozenset(column for column in COLUMN_KEYS if profile.column_permissions[column])


@dataclass(frozen=True)
class ColumnProjection:
    """A read-only selection of column keys used by one feature view."""
    name: str
    columns: tuple[ColumnKey, ...]

    def __contains__(self, column: object) -> bool:
        return column in self.columns


MANAGEMENT_COLUMNS = ColumnProjection("management", COLUMN_KEYS)
REPORT_COLUMNS = ColumnProjection("report", COLUMN_KEYS)
SCHEDULE_COLUMNS = ColumnProjection(
    "schedule",
    (
        ColumnKey.CAMPAIGN,
        ColumnKey.CREATIVE,
        ColumnKey.CHANNEL,
        ColumnKey.SCHEDULE,
        ColumnKey.DEPARTMENT,
        ColumnKey.AGENCY,
    ),
)


def build_column_access(
    profile: UserAccessProfile,
    projection: ColumnProjection,
) -> Mapping[ColumnKey, bool]:
    """Evaluate column access for every key of a feature projection."""
    return MappingProxyType({
        column: has_column_access(profile, column) for column in projection.columns
    })


# ============================================================================
# Row Scope Filter
# ============================================================================

def _entity_value(entity: ScopedEntity | Mapping[str, Any], name: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


def is_row_visible(profile: UserAccessProfile, entity: ScopedEntity | Mapping[str, Any]) -> bool:
    """
    Check whether a row falls inside the profile's scope.

    Both dimensions must match; an empty allow-list matches everything.
    """
    if profile.is_admin:
        return True

    scope = profile.scope
    matches_department = (
        not scope.departments or _entity_value(entity, "department") in scope.departments
    )
    matches_agency = (
        not scope.agencies or _entity_value(entity, "agency") in scope.agencies
    )

    return matches_department and matches_agency


def filter_rows_by_scope(rows: Iterable[R], profile: UserAccessProfile) -> list[R]:
    """Keep only rows visible to the profile, preserving order."""
    if profile.is_admin:
        return list(rows)

    return [row for row in rows if is_row_visible(profile, row)]


# ============================================================================
# Column Masking Transform
# ============================================================================

def denied_fields(profile: UserAccessProfile) -> frozenset[str]:
    """Record fields that must be masked for the profile."""
    if profile.is_admin:
        return frozenset()

    return frozenset(
        field_name
        for column in COLUMN_KEYS
        if not has_column_access(profile, column)
        for field_name in COLUMN_FIELDS[column]
    )


def placeholder_for(field_name: str, denied_label: str = DEFAULT_DENIED_LABEL) -> Any:
    """Default placeholder for a denied field."""
    if field_name in NON_TEXT_FIELDS:
        return None
    return denied_label


def _is_namedtuple(record: Any) -> bool:
    return isinstance(record, tuple) and hasattr(record, "_fields")


def record_fields(record: Any) -> set[str]:
    """Governed field names present on a record of any supported shape."""
    governed = {name for names in COLUMN_FIELDS.values() for name in names}

    if isinstance(record, Mapping):
        return governed & set(record.keys())
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return governed & {f.name for f in dataclasses.fields(record)}
    if _is_namedtuple(record):
        return governed & set(record._fields)
    return {name for name in governed if hasattr(record, name)}


def mask_columns(
    record: R,
    profile: UserAccessProfile,
    mask_value: Any = UNSET,
    denied_label: str = DEFAULT_DENIED_LABEL,
) -> R:
    """
    Replace every denied column of a record with a placeholder.

    Mappings come back as a new dict, dataclasses and namedtuples as a
    replaced copy. Any other object is shallow-copied and its governed
    attributes overwritten; if the object refuses attribute assignment a
    dict of its governed attributes is returned instead. Fields absent from
    the record are skipped.

    Args:
        record: Record to mask
        profile: Access profile of the reader
        mask_value: Value written into every denied field; when omitted
            textual fields get ``denied_label`` and numeric/date fields None
        denied_label: Placeholder for denied textual fields

    Returns:
        The masked record, or the record itself for admins
    """
    if profile.is_admin:
        return record

    present = record_fields(record)
    changes = {
        field_name: placeholder_for(field_name, denied_label) if mask_value is UNSET else mask_value
        for field_name in denied_fields(profile)
        if field_name in present
    }

    if isinstance(record, Mapping):
        return {**record, **changes}  # type: ignore[return-value]

    if not changes:
        return record

    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.replace(record, **changes)

    if _is_namedtuple(record):
        return record._replace(**changes)

    try:
        masked = copy.copy(record)
        for field_name, value in changes.items():
            setattr(masked, field_name, value)
    except (AttributeError, TypeError):
        data = {name: getattr(record, name) for name in present}
        if hasattr(record, "id"):
            data["id"] = record.id
        return {**data, **changes}  # type: ignore[return-value]
    return masked
