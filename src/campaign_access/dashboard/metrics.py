"""Scoped aggregation for dashboard and report summaries.

Rows outside the reader's scope are dropped before anything is computed.
Statistics derived from spend are withheld (None or an empty list, never 0)
when the reader cannot see the spend column; row counts are not gated.
A distribution is also withheld when its grouping column is denied.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable, Literal

import polars as pl
import structlog

from campaign_access.auth.models import ColumnKey, UserAccessProfile
from campaign_access.auth.permissions import filter_rows_by_scope, has_column_access
from campaign_access.core.utils import to_date, utc_now
from campaign_access.dashboard.models import (
    CampaignRecord,
    DashboardData,
    DashboardOptions,
    DateRange,
    DistributionSlice,
    KpiSummary,
    ReportSummary,
)

logger = structlog.get_logger()

GroupKey = Literal["creative", "agency"]


def get_default_ranges(base_date: date | None = None) -> tuple[DateRange, DateRange]:
    """Return the calendar month and calendar year containing ``base_date``."""
    base = base_date or utc_now().date()
    last_day = calendar.monthrange(base.year, base.month)[1]

    month = DateRange(
        start=base.replace(day=1),
        end=base.replace(day=last_day),
    )
    year = DateRange(
        start=date(base.year, 1, 1),
        end=date(base.year, 12, 31),
    )
    return month, year


def filter_by_range(records: Iterable[CampaignRecord], date_range: DateRange) -> list[CampaignRecord]:
    """Keep records whose campaign period overlaps the range (inclusive)."""
    result = []
    for record in records:
        start = to_date(record.start_date)
        end = to_date(record.end_date)
        if (
            date_range.contains(start)
            or date_range.contains(end)
            or (start <= date_range.start and end >= date_range.end)
        ):
            result.append(record)
    return result


def calculate_kpis(
    period_records: list[CampaignRecord],
    year_records: list[CampaignRecord],
    profile: UserAccessProfile,
) -> KpiSummary:
    """Compute headline numbers for already scope-filtered records."""
    spend_allowed = has_column_access(profile, ColumnKey.SPEND)

    return KpiSummary(
        active_campaigns=len(period_records),
        period_spend=sum(r.spend for r in period_records) if spend_allowed else None,
        yearly_spend=sum(r.spend for r in year_records) if spend_allowed else None,
    )


def build_distribution(records: list[CampaignRecord], key: GroupKey) -> list[DistributionSlice]:
    """
    Sum spend per group.

    Slices are ordered by descending spend; equal totals are ordered by
    label codepoint, which for Hangul syllables matches dictionary order.
    Callers must check that both spend and the grouping column are
    readable.
    """
    if not records:
        return []

    frame = pl.DataFrame({
        "label": pl.Series("label", [getattr(r, key) for r in records], dtype=pl.Utf8),
        "value": pl.Series("value", [r.spend for r in records], dtype=pl.Float64, strict=False),
    })

    grouped = (
        frame.group_by("label")
        .agg(pl.col("value").sum())
        .sort(["value", "label"], descending=[True, False])
    )

    return [
        DistributionSlice(label=row["label"], value=row["value"])
        for row in grouped.iter_rows(named=True)
    ]


def build_report_summary(
    records: Iterable[CampaignRecord],
    profile: UserAccessProfile,
) -> ReportSummary:
    """Count and total spend for report rows the profile may see."""
    scoped = filter_rows_by_scope(records, profile)
    spend_allowed = has_column_access(profile, ColumnKey.SPEND)

    return ReportSummary(
        total_count=len(scoped),
        total_spend=sum(r.spend for r in scoped) if spend_allowed else None,
    )


def generate_dashboard_data(
    records: Iterable[CampaignRecord],
    profile: UserAccessProfile,
    options: DashboardOptions | None = None,
) -> DashboardData:
    """
    Build the dashboard summary for a profile.

    Args:
        records: All campaign records
        profile: Access profile of the reader
        options: Reference date and optional custom period

    Returns:
        DashboardData for the period window
    """
    options = options or DashboardOptions()
    month, year = get_default_ranges(options.base_date)
    period = options.custom_range or month

    scoped = filter_rows_by_scope(records, profile)
    period_records = filter_by_range(scoped, period)
    year_records = filter_by_range(scoped, year)

    kpis = calculate_kpis(period_records, year_records, profile)

    spend_allowed = has_column_access(profile, ColumnKey.SPEND)
    by_creative = (
        build_distribution(period_records, "creative")
        if spend_allowed and has_column_access(profile, ColumnKey.CREATIVE)
        else []
    )
    by_agency = (
        build_distribution(period_records, "agency")
        if spend_allowed and has_column_access(profile, ColumnKey.AGENCY)
        else []
    )

    logger.debug(
        "Dashboard data generated",
        period_start=period.start.isoformat(),
        period_end=period.end.isoformat(),
        scoped_rows=len(scoped),
        period_rows=len(period_records),
        spend_visible=spend_allowed,
    )

    return DashboardData(
        range=period,
        kpis=kpis,
        by_creative=by_creative,
        by_agency=by_agency,
    )
