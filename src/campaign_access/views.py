"""Feature read paths for campaign records.

Management, report and schedule views all read campaign rows through the
same steps: scope filtering, projection to the feature's columns, then
column masking. Option lists for filter widgets only expose values of
columns the reader may see.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from campaign_access.auth.models import COLUMN_FIELDS, NON_TEXT_FIELDS, UserAccessProfile
from campaign_access.auth.permissions import (
    DEFAULT_DENIED_LABEL,
    MANAGEMENT_COLUMNS,
    REPORT_COLUMNS,
    SCHEDULE_COLUMNS,
    ColumnProjection,
    build_column_access,
    filter_rows_by_scope,
    mask_columns,
    record_fields,
)

FEATURE_PROJECTIONS: dict[str, ColumnProjection] = {
    projection.name: projection
    for projection in (MANAGEMENT_COLUMNS, REPORT_COLUMNS, SCHEDULE_COLUMNS)
}


def _as_dict(record: Any) -> dict[str, Any]:
    if isinstance(record, Mapping):
        return dict(record)
    if hasattr(record, "to_dict"):
        return record.to_dict()
    data = {name: getattr(record, name) for name in record_fields(record)}
    if hasattr(record, "id"):
        data["id"] = record.id
    return data


def to_feature_row(
    record: Any,
    profile: UserAccessProfile,
    projection: ColumnProjection,
    denied_label: str = DEFAULT_DENIED_LABEL,
) -> dict[str, Any]:
    """Project a record onto a feature's columns and mask denied ones."""
    data = _as_dict(record)
    row: dict[str, Any] = {"id": data.get("id")}
    for column in projection.columns:
        for field_name in COLUMN_FIELDS[column]:
            if field_name in data:
                row[field_name] = data[field_name]

    return mask_columns(row, profile, denied_label=denied_label)


def to_management_row(record: Any, profile: UserAccessProfile, **kwargs: Any) -> dict[str, Any]:
    return to_feature_row(record, profile, MANAGEMENT_COLUMNS, **kwargs)


def to_report_row(record: Any, profile: UserAccessProfile, **kwargs: Any) -> dict[str, Any]:
    return to_feature_row(record, profile, REPORT_COLUMNS, **kwargs)


def to_schedule_row(record: Any, profile: UserAccessProfile, **kwargs: Any) -> dict[str, Any]:
    return to_feature_row(record, profile, SCHEDULE_COLUMNS, **kwargs)


def list_rows(
    records: Iterable[Any],
    profile: UserAccessProfile,
    feature: str | ColumnProjection,
    denied_label: str = DEFAULT_DENIED_LABEL,
) -> list[dict[str, Any]]:
    """
    Produce the outgoing rows of a feature view.

    Args:
        records: Raw campaign records (dataclasses or mappings)
        profile: Access profile of the reader
        feature: Projection or its name (management, report, schedule)
        denied_label: Placeholder for denied textual columns

    Returns:
        Scope-filtered, masked rows in input order
    """
    projection = feature if isinstance(feature, ColumnProjection) else FEATURE_PROJECTIONS[feature]
    return [
        to_feature_row(record, profile, projection, denied_label)
        for record in filter_rows_by_scope(records, profile)
    ]


def build_options(
    records: Iterable[Any],
    profile: UserAccessProfile,
    projection: ColumnProjection,
) -> dict[str, list[str]]:
    """
    Sorted distinct values per textual column of a projection.

    Denied columns get an empty list. Only rows inside the reader's scope
    contribute values.
    """
    access = build_column_access(profile, projection)
    scoped = [_as_dict(record) for record in filter_rows_by_scope(records, profile)]

    options: dict[str, list[str]] = {}
    for column, allowed in access.items():
        for field_name in COLUMN_FIELDS[column]:
            if field_name in NON_TEXT_FIELDS or field_name == "schedule":
                continue
            if not allowed:
                options[field_name] = []
                continue
            values = {row[field_name] for row in scoped if row.get(field_name)}
            options[field_name] = sorted(values)
    return options


def merge_options(
    current: Mapping[str, list[str]],
    values: Mapping[str, str | None],
) -> dict[str, list[str]]:
    """Add newly entered values to option lists, keeping them sorted."""
    merged = {key: list(items) for key, items in current.items()}
    for key, value in values.items():
        if not value or key not in merged:
            continue
        if value not in merged[key]:
            merged[key] = sorted([*merged[key], value])
    return merged
