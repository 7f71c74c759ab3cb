"""
Access Control Example
======================

This example shows how a session is served with Campaign Access: the login
gate throttles credential checks, the stored profile is validated, and every
read path (list rows, filter options, dashboard) applies the same column and
row decisions.
"""

from datetime import date

from campaign_access import (
    AccountLockedError,
    InvalidCredentialsError,
    LoginAttemptGuard,
    LoginGate,
    get_settings,
    resolve_profile,
)
from campaign_access.auth import MANAGEMENT_COLUMNS
from campaign_access.dashboard import CampaignRecord, DashboardOptions, generate_dashboard_data
from campaign_access.utils.logging import (
    generate_request_id,
    set_request_context,
    setup_logging_from_config,
)
from campaign_access.views import build_options, list_rows

USERS = {
    "kim": {
        "password": "s3cret",
        "profile": {
            "role": "user",
            "column_permissions": {
                "campaign": True,
                "creative": True,
                "channel": True,
                "schedule": True,
                "spend": False,
                "budget_account": False,
                "department": True,
                "agency": True,
            },
            "scope": {"departments": ["A부서"], "agencies": []},
        },
    },
}


def create_sample_records() -> list[CampaignRecord]:
    """Create sample campaign rows for demonstration."""
    rows = [
        ("1", "봄 프로모션", "소재1", "TV", "A부서", "대행사1", 1_200_000),
        ("2", "신제품 런칭", "소재2", "디지털", "A부서", "대행사2", 800_000),
        ("3", "브랜드 캠페인", "소재1", "라디오", "B부서", "대행사1", 450_000),
    ]
    return [
        CampaignRecord(
            id=record_id,
            campaign=campaign,
            creative=creative,
            channel=channel,
            start_date=date(2025, 3, 1),
            end_date=date(2025, 3, 31),
            spend=spend,
            budget_account="광고선전비",
            department=department,
            agency=agency,
        )
        for record_id, campaign, creative, channel, department, agency, spend in rows
    ]


def verify(login_id: str, password: str) -> dict | None:
    user = USERS.get(login_id)
    if user and user["password"] == password:
        return user
    return None


def main():
    """Run the access control example."""
    settings = get_settings()
    setup_logging_from_config(settings.logging)

    print("=" * 60)
    print("Campaign Access - Access Control Example")
    print("=" * 60)

    gate = LoginGate(LoginAttemptGuard.from_settings(settings), verify)

    # Failed attempts count toward a lockout
    print("\n1. Failed login attempts...")
    for _ in range(2):
        try:
            gate.authenticate("kim", "wrong")
        except InvalidCredentialsError as e:
            print(f"   ✗ {e.message} ({e.remaining_attempts} attempts left)")
        except AccountLockedError as e:
            print(f"   ✗ Locked for {e.remaining_seconds}s")

    print("\n2. Successful login...")
    user = gate.authenticate("kim", "s3cret")
    set_request_context(request_id=generate_request_id(), user_id="kim")
    profile = resolve_profile(user["profile"], user_id="kim")
    print(f"   ✓ Role: {profile.role.value}, scope: {profile.scope.to_dict()}")

    records = create_sample_records()
    denied_label = settings.masking.denied_label

    print("\n3. Management rows...")
    for row in list_rows(records, profile, "management", denied_label=denied_label):
        print(f"   {row}")

    print("\n4. Filter options...")
    for field_name, values in build_options(records, profile, MANAGEMENT_COLUMNS).items():
        print(f"   {field_name}: {values}")

    print("\n5. Dashboard...")
    data = generate_dashboard_data(records, profile, DashboardOptions(base_date=date(2025, 3, 15)))
    print(f"   Active campaigns: {data.kpis.active_campaigns}")
    print(f"   Period spend: {data.kpis.period_spend}")
    print(f"   By agency: {data.by_agency}")


if __name__ == "__main__":
    main()
