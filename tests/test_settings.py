"""Tests for configuration."""

import pytest
from pydantic import ValidationError

from spliteasy.config import (
    AppSettings,
    BillSettings,
    GroupSettings,
    MemberSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestDefaults:
    """Tests for default field limits."""

    def test_bill_defaults(self):
        rules = BillSettings()
        assert (rules.min_name_len, rules.max_name_len) == (2, 40)
        assert (rules.min_desc_len, rules.max_desc_len) == (2, 500)
        assert rules.max_amount == 1_000_000
        assert rules.is_name_required is True
        assert rules.is_desc_required is False
        assert rules.is_amount_required is True
        assert rules.is_date_required is False

    def test_group_and_member_defaults(self):
        for rules in (GroupSettings(), MemberSettings()):
            assert (rules.min_name_len, rules.max_name_len) == (2, 40)
            assert rules.is_name_required is True

    def test_app_defaults(self):
        assert AppSettings().log_level == "INFO"


class TestEnvironment:
    """Tests for environment overrides."""

    def test_bill_limits_from_env(self, monkeypatch):
        monkeypatch.setenv("BILL_MAX_AMOUNT", "500")
        monkeypatch.setenv("BILL_IS_DATE_REQUIRED", "true")

        rules = get_settings().bill
        assert rules.max_amount == 500
        assert rules.is_date_required is True

    def test_prefixes_do_not_leak(self, monkeypatch):
        monkeypatch.setenv("GROUP_MAX_NAME_LEN", "10")
        assert GroupSettings().max_name_len == 10
        assert MemberSettings().max_name_len == 40

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            AppSettings()


class TestValidation:
    """Tests for settings checks."""

    def test_min_above_max_rejected(self):
        with pytest.raises(ValidationError, match="min_name_len cannot exceed max_name_len"):
            BillSettings(min_name_len=10, max_name_len=5)

    def test_non_positive_max_amount_rejected(self):
        with pytest.raises(ValidationError):
            BillSettings(max_amount=0)

    def test_validate_all_settings(self):
        results = validate_all_settings()
        assert results == {"app": True, "bill": True, "group": True, "member": True}

    def test_validate_all_settings_reports_failure(self, monkeypatch):
        monkeypatch.setenv("BILL_MIN_NAME_LEN", "50")
        results = validate_all_settings()
        assert results["bill"] is False
        assert "bill_error" in results
        assert results["group"] is True
