"""Dashboard statistics that respect column and row access."""

from campaign_access.dashboard.models import (
    CampaignRecord,
    DateRange,
    KpiSummary,
    DistributionSlice,
    DashboardData,
    DashboardOptions,
    ReportSummary,
)
from campaign_access.dashboard.metrics import (
    get_default_ranges,
    filter_by_range,
    calculate_kpis,
    build_distribution,
    build_report_summary,
    generate_dashboard_data,
)

__all__ = [
    "CampaignRecord",
    "DateRange",
    "KpiSummary",
    "DistributionSlice",
    "DashboardData",
    "DashboardOptions",
    "ReportSummary",
    "get_default_ranges",
    "filter_by_range",
    "calculate_kpis",
    "build_distribution",
    "build_report_summary",
    "generate_dashboard_data",
]
