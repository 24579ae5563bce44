"""Configuration management for the storefront suite."""

import os
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file at import time
load_dotenv()

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_USER_EMAIL = "test@example.com"
DEFAULT_USER_PASSWORD = "password123"
CONFIG_ENV_VAR = "STOREFRONT_CONFIG"


class RetryConfig(BaseModel):
    """Retry policy for idempotent API calls."""

    attempts: int = Field(default=3, ge=1)
    delay_ms: int = Field(default=500, ge=0)


class BrowserConfig(BaseModel):
    """Browser launch and timeout configuration."""

    name: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    slow_mo_ms: int = 0
    action_timeout_ms: int = 15000
    navigation_timeout_ms: int = 30000
    expect_timeout_ms: int = 10000


class ArtifactsConfig(BaseModel):
    """Where and what to capture when a scenario fails."""

    output_dir: Path = Path("test-results")
    screenshot_on_failure: bool = True
    html_on_failure: bool = True


class Settings(BaseSettings):
    """Main configuration for the storefront suite."""

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_nested_delimiter="__",
        populate_by_name=True,
    )

    base_url: str = DEFAULT_BASE_URL
    user_email: str = Field(
        default=DEFAULT_USER_EMAIL,
        validation_alias=AliasChoices("user_email", "STOREFRONT_USER_EMAIL", "USER_EMAIL"),
    )
    user_password: str = Field(
        default=DEFAULT_USER_PASSWORD,
        validation_alias=AliasChoices("user_password", "STOREFRONT_USER_PASSWORD", "USER_PASSWORD"),
    )
    use_mock: bool = True

    # Sub-configurations
    retry: RetryConfig = Field(default_factory=RetryConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)

    def url(self, path: str = "/") -> str:
        """Join a site-relative path onto the base URL."""
        return f"{self.base_url.rstrip('/')}{path}"


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge ``override`` into ``base``, recursing into nested sections."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path | None = None) -> Settings:
    """Load configuration from YAML file and environment variables.

    The file is ``config_path``, else the one named by ``STOREFRONT_CONFIG``,
    else the first of the default names found in the working directory.
    """
    config_data: dict = {}

    if config_path is None and os.environ.get(CONFIG_ENV_VAR):
        config_path = Path(os.environ[CONFIG_ENV_VAR])

    # Try to find config file
    if config_path is None:
        for name in ["storefront.yaml", "storefront.yml", ".storefront.yaml"]:
            if Path(name).exists():
                config_path = Path(name)
                break

    if config_path and config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if raw and "storefront" in raw:
                config_data = raw["storefront"]
            elif raw:
                config_data = raw

    # Environment variables override YAML, key by key within sections
    env_settings = Settings()
    explicit_env = env_settings.model_dump(exclude_unset=True)
    return Settings.model_validate(_deep_merge(config_data, explicit_env))
