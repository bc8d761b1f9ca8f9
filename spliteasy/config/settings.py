"""
Configuration Management for SplitEasy

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All field limits live here, not in the models.
The models only carry types, so a record that breaks a limit can still
be loaded and shown to the user with its errors flagged.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BillSettings(BaseSettings):
    """Field limits and required-ness for bills."""

    model_config = SettingsConfigDict(
        env_prefix="BILL_",
        extra="ignore"
    )

    min_name_len: int = Field(default=2, ge=0)
    max_name_len: int = Field(default=40, ge=1)
    is_name_required: bool = True

    min_desc_len: int = Field(default=2, ge=0)
    max_desc_len: int = Field(default=500, ge=1)
    is_desc_required: bool = False

    max_amount: float = Field(
        default=1_000_000,
        gt=0,
        description="Largest amount a single bill may carry"
    )
    is_amount_required: bool = True

    is_date_required: bool = Field(
        default=False,
        description="Whether a bill must carry a date to be saved"
    )

    @model_validator(mode='after')
    def validate_bounds(self) -> 'BillSettings':
        if self.min_name_len > self.max_name_len:
            raise ValueError("min_name_len cannot exceed max_name_len")
        if self.min_desc_len > self.max_desc_len:
            raise ValueError("min_desc_len cannot exceed max_desc_len")
        return self


class GroupSettings(BaseSettings):
    """Field limits for groups."""

    model_config = SettingsConfigDict(
        env_prefix="GROUP_",
        extra="ignore"
    )

    min_name_len: int = Field(default=2, ge=0)
    max_name_len: int = Field(default=40, ge=1)
    is_name_required: bool = True


class MemberSettings(BaseSettings):
    """Field limits for members."""

    model_config = SettingsConfigDict(
        env_prefix="MEMBER_",
        extra="ignore"
    )

    min_name_len: int = Field(default=2, ge=0)
    max_name_len: int = Field(default=40, ge=1)
    is_name_required: bool = True


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local structured logs"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()

    @property
    def bill(self) -> BillSettings:
        return BillSettings()

    @property
    def group(self) -> GroupSettings:
        return GroupSettings()

    @property
    def member(self) -> MemberSettings:
        return MemberSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for each one that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("app", "bill", "group", "member"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
