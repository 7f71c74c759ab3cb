"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from campaign_access.core.config import LoginGuardConfig, MaskingConfig, Settings


class TestLoginGuardConfiguration:
    """Test login guard settings."""

    def test_defaults(self):
        """Default policy is five failures, 15 minute lockout, one hour window."""
        config = Settings().login_guard
        assert config.max_attempts == 5
        assert config.lockout_minutes == 15
        assert config.attempt_window_minutes == 60

    def test_timedelta_properties(self):
        """Durations should be exposed as timedeltas."""
        config = LoginGuardConfig(lockout_minutes=10, attempt_window_minutes=30)
        assert config.lockout_duration.total_seconds() == 600
        assert config.attempt_window.total_seconds() == 1800
        assert config.sweep_interval.total_seconds() == 300

    def test_lockout_must_be_shorter_than_window(self):
        """A lockout as long as the window should be rejected."""
        with pytest.raises(ValidationError):
            LoginGuardConfig(lockout_minutes=60, attempt_window_minutes=60)

    def test_max_attempts_positive(self):
        """Zero attempts should be rejected."""
        with pytest.raises(ValidationError):
            LoginGuardConfig(max_attempts=0)

    def test_nested_override(self):
        """Should accept a nested section as a mapping."""
        settings = Settings(login_guard={"max_attempts": 3})
        assert settings.login_guard.max_attempts == 3

    def test_env_override(self, monkeypatch):
        """Environment variables should override defaults."""
        monkeypatch.setenv("CAMPAIGN_ACCESS_LOGIN_GUARD__MAX_ATTEMPTS", "7")
        assert Settings().login_guard.max_attempts == 7


class TestMaskingConfiguration:
    """Test masking settings."""

    def test_default_label(self):
        """Default placeholder should be the Korean denied label."""
        assert Settings().masking.denied_label == "권한 없음"

    def test_blank_label_rejected(self):
        """Blank labels would make masked cells look empty."""
        with pytest.raises(ValidationError):
            MaskingConfig(denied_label="  ")


class TestYamlLoading:
    """Test loading settings from YAML."""

    def test_from_yaml(self, tmp_path, monkeypatch):
        """Settings should load from YAML with env expansion."""
        monkeypatch.setenv("GUARD_LOCKOUT", "20")
        path = tmp_path / "settings.yaml"
        path.write_text(
            "login_guard:\n"
            "  max_attempts: 4\n"
            "  lockout_minutes: ${GUARD_LOCKOUT}\n"
            "masking:\n"
            "  denied_label: '-'\n"
            "logging:\n"
            "  level: ${LOG_LEVEL:DEBUG}\n",
            encoding="utf-8",
        )

        settings = Settings.from_yaml(path)
        assert settings.login_guard.max_attempts == 4
        assert settings.login_guard.lockout_minutes == 20
        assert settings.masking.denied_label == "-"
        assert settings.logging.level == "DEBUG"

    def test_missing_file(self, tmp_path):
        """A missing file should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "absent.yaml")
