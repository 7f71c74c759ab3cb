"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from campaign_access.auth.models import DataScope, Role, UserAccessProfile
from campaign_access.auth.profile import create_column_permission_map
from campaign_access.dashboard.models import CampaignRecord


class ManualClock:
    """Controllable time source for the login guard."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def admin_profile() -> UserAccessProfile:
    """Admin profile with every column flag off, to prove the override."""
    return UserAccessProfile(
        role=Role.ADMIN,
        column_permissions=create_column_permission_map([]),
        scope=DataScope(departments=frozenset({"Z부서"})),
    )


@pytest.fixture
def user_profile() -> UserAccessProfile:
    """Standard user with a partial column grant and unrestricted scope."""
    return UserAccessProfile(
        role=Role.USER,
        column_permissions=create_column_permission_map(["campaign", "channel", "agency"]),
    )


def make_record(
    record_id: str,
    department: str = "A부서",
    agency: str = "대행사1",
    spend: float = 100_000,
    creative: str = "소재1",
    start: date = date(2025, 3, 1),
    end: date = date(2025, 3, 31),
) -> CampaignRecord:
    return CampaignRecord(
        id=record_id,
        campaign=f"캠페인{record_id}",
        creative=creative,
        channel="TV",
        start_date=start,
        end_date=end,
        spend=spend,
        budget_account="광고선전비",
        department=department,
        agency=agency,
    )


@pytest.fixture
def scoped_records() -> list[CampaignRecord]:
    """Five records across three departments."""
    return [
        make_record("1", department="A부서", agency="대행사1", spend=1_000_000),
        make_record("2", department="A부서", agency="대행사2", spend=2_000_000),
        make_record("3", department="B부서", agency="대행사1", spend=3_000_000),
        make_record("4", department="C부서", agency="대행사3", spend=4_000_000),
        make_record("5", department="A부서", agency="대행사3", spend=5_000_000),
    ]


@pytest.fixture
def agency_records() -> list[CampaignRecord]:
    """Five records with distinct agencies and creatives."""
    spends = [1_200_000, 800_000, 450_000, 1_500_000, 600_000]
    return [
        make_record(
            str(i + 1),
            department="A부서",
            agency=f"대행사{chr(ord('A') + i)}",
            creative=f"소재{i + 1}",
            spend=spend,
        )
        for i, spend in enumerate(spends)
    ]


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Configure logging for tests."""
    import logging
    caplog.set_level(logging.DEBUG)
    return caplog


@pytest.fixture
def record_factory():
    """Factory for single campaign records."""
    return make_record
