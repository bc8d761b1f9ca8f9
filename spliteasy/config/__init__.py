"""Configuration package."""

from spliteasy.config.settings import (
    AppSettings,
    BillSettings,
    GroupSettings,
    MemberSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "BillSettings",
    "GroupSettings",
    "MemberSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
