"""Tests for column access evaluation and row scope filtering."""

import pytest

from campaign_access.auth.models import (
    COLUMN_KEYS,
    ColumnKey,
    DataScope,
    Role,
    ScopedEntity,
    UserAccessProfile,
)
from campaign_access.auth.permissions import (
    MANAGEMENT_COLUMNS,
    REPORT_COLUMNS,
    SCHEDULE_COLUMNS,
    build_column_access,
    filter_rows_by_scope,
    has_column_access,
    is_row_visible,
    visible_columns,
)
from campaign_access.auth.profile import create_column_permission_map, create_default_profile


def scoped_user(departments=(), agencies=()):
    return UserAccessProfile(
        role=Role.USER,
        column_permissions=create_column_permission_map([]),
        scope=DataScope(departments=frozenset(departments), agencies=frozenset(agencies)),
    )


class TestColumnAccess:
    """Test per-column access decisions."""

    @pytest.mark.parametrize("column", COLUMN_KEYS)
    def test_admin_sees_every_column(self, admin_profile, column):
        """Admin should read every column even with all flags off."""
        assert has_column_access(admin_profile, column) is True

    @pytest.mark.parametrize("column", COLUMN_KEYS)
    def test_user_follows_permission_map(self, user_profile, column):
        """Standard users should get exactly their flag."""
        assert has_column_access(user_profile, column) == user_profile.column_permissions[column]

    def test_accepts_column_value(self, user_profile):
        """Columns may be given by value."""
        assert has_column_access(user_profile, "campaign") is True
        assert has_column_access(user_profile, "spend") is False

    def test_visible_columns_admin(self, admin_profile):
        """Admin should see the full enumeration."""
        assert visible_columns(admin_profile) == frozenset(COLUMN_KEYS)

    def test_visible_columns_user(self, user_profile):
        """Standard users should see only granted columns."""
        assert visible_columns(user_profile) == {
            ColumnKey.CAMPAIGN,
            ColumnKey.CHANNEL,
            ColumnKey.AGENCY,
        }

    def test_default_profile_sees_nothing(self):
        """The default profile should have no visible columns."""
        assert visible_columns(create_default_profile()) == frozenset()


class TestProjections:
    """Test feature column projections."""

    def test_schedule_projection_excludes_spend(self):
        """The schedule view has no spend or budget account column."""
        assert ColumnKey.SPEND not in SCHEDULE_COLUMNS
        assert ColumnKey.BUDGET_ACCOUNT not in SCHEDULE_COLUMNS
        assert ColumnKey.SCHEDULE in SCHEDULE_COLUMNS

    def test_management_and_report_cover_all_columns(self):
        """Management and report views expose all eight columns."""
        assert set(MANAGEMENT_COLUMNS.columns) == set(COLUMN_KEYS)
        assert set(REPORT_COLUMNS.columns) == set(COLUMN_KEYS)

    def test_build_column_access(self, user_profile):
        """Projection access should mirror the evaluator."""
        access = build_column_access(user_profile, SCHEDULE_COLUMNS)
        assert set(access) == set(SCHEDULE_COLUMNS.columns)
        assert access[ColumnKey.CAMPAIGN] is True
        assert access[ColumnKey.SCHEDULE] is False

    def test_build_column_access_admin(self, admin_profile):
        """Admin projections should be all true."""
        access = build_column_access(admin_profile, REPORT_COLUMNS)
        assert all(access.values())


class TestRowScope:
    """Test row visibility."""

    def test_admin_sees_any_row(self, admin_profile, record_factory):
        """Admin should see rows outside its configured scope."""
        assert is_row_visible(admin_profile, record_factory("1", department="Q부서"))

    def test_empty_scope_is_unrestricted(self, record_factory):
        """Empty allow-lists should admit every row."""
        profile = scoped_user()
        assert is_row_visible(profile, record_factory("1", department="X", agency="Y"))

    def test_department_only_scope(self, record_factory):
        """Department scope should exclude other departments regardless of agency."""
        profile = scoped_user(departments={"A"})
        assert is_row_visible(profile, record_factory("1", department="A", agency="any"))
        assert not is_row_visible(profile, record_factory("2", department="B", agency="any"))

    def test_agency_only_scope(self, record_factory):
        """Agency scope should exclude other agencies regardless of department."""
        profile = scoped_user(agencies={"대행사1"})
        assert is_row_visible(profile, record_factory("1", agency="대행사1"))
        assert not is_row_visible(profile, record_factory("2", agency="대행사2"))

    def test_both_dimensions_must_match(self, record_factory):
        """Department and agency allow-lists combine with AND."""
        profile = scoped_user(departments={"A부서"}, agencies={"대행사1"})
        assert is_row_visible(profile, record_factory("1", department="A부서", agency="대행사1"))
        assert not is_row_visible(profile, record_factory("2", department="A부서", agency="대행사2"))
        assert not is_row_visible(profile, record_factory("3", department="B부서", agency="대행사1"))

    def test_matching_is_exact(self, record_factory):
        """Scope values match by exact string equality."""
        profile = scoped_user(departments={"A부서"})
        assert not is_row_visible(profile, record_factory("1", department="a부서"))
        assert not is_row_visible(profile, record_factory("2", department="A부서 "))

    def test_mapping_rows(self):
        """Plain mappings with department and agency keys are supported."""
        profile = scoped_user(departments={"A"})
        assert is_row_visible(profile, {"department": "A", "agency": "X"})
        assert not is_row_visible(profile, {"department": "B", "agency": "X"})

    def test_campaign_record_is_scoped_entity(self, record_factory):
        """Campaign records satisfy the structural row contract."""
        assert isinstance(record_factory("1"), ScopedEntity)

    def test_mapping_row_without_fields_is_excluded(self):
        """Rows lacking the scoped field cannot match an allow-list."""
        profile = scoped_user(departments={"A"})
        assert not is_row_visible(profile, {"agency": "X"})


class TestFilterRowsByScope:
    """Test list filtering."""

    def test_admin_returns_all_rows_in_order(self, admin_profile, scoped_records):
        """Admin filtering should be the identity."""
        assert filter_rows_by_scope(scoped_records, admin_profile) == scoped_records

    def test_unrestricted_user_returns_all_rows(self, user_profile, scoped_records):
        """Empty scope should leave rows and order unchanged."""
        assert filter_rows_by_scope(scoped_records, user_profile) == scoped_records

    def test_department_scope_scenario(self, scoped_records):
        """Only the A부서 rows should remain, in input order."""
        profile = UserAccessProfile(
            role=Role.USER,
            column_permissions=create_column_permission_map([]),
            scope=DataScope(departments=frozenset({"A부서"})),
        )
        result = filter_rows_by_scope(scoped_records, profile)
        assert len(result) == 3
        assert [r.id for r in result] == ["1", "2", "5"]

    def test_accepts_iterators(self, scoped_records):
        """Any iterable of rows should be accepted."""
        profile = scoped_user(agencies={"대행사3"})
        result = filter_rows_by_scope(iter(scoped_records), profile)
        assert [r.id for r in result] == ["4", "5"]
