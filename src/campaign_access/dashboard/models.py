"""Dashboard data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from campaign_access.core.utils import to_date


@dataclass(frozen=True)
class CampaignRecord:
    """One advertising campaign row as read from storage."""
    id: str
    campaign: str
    creative: str
    channel: str
    start_date: date
    end_date: date
    spend: float
    budget_account: str
    department: str
    agency: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CampaignRecord":
        """Create a record from a stored row; dates may be ISO strings."""
        return cls(
            id=str(data["id"]),
            campaign=data["campaign"],
            creative=data["creative"],
            channel=data["channel"],
            start_date=to_date(data["start_date"]),
            end_date=to_date(data["end_date"]),
            spend=data["spend"],
            budget_account=data["budget_account"],
            department=data["department"],
            agency=data["agency"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "campaign": self.campaign,
            "creative": self.creative,
            "channel": self.channel,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "spend": self.spend,
            "budget_account": self.budget_account,
            "department": self.department,
            "agency": self.agency,
        }


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class KpiSummary:
    """Headline numbers. Spend figures are None when spend is not readable."""
    active_campaigns: int
    period_spend: float | None
    yearly_spend: float | None


@dataclass(frozen=True)
class DistributionSlice:
    label: str
    value: float


@dataclass(frozen=True)
class DashboardData:
    range: DateRange
    kpis: KpiSummary
    by_creative: list[DistributionSlice] = field(default_factory=list)
    by_agency: list[DistributionSlice] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardOptions:
    """
    Options for dashboard generation.

    Attributes:
        base_date: Reference date for the month and year windows (today if None)
        custom_range: Period window to use instead of the calendar month
    """
    base_date: date | None = None
    custom_range: DateRange | None = None


@dataclass(frozen=True)
class ReportSummary:
    total_count: int
    total_spend: float | None
