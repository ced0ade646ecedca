"""Run configuration resolved from environment variables (and `.env`)."""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from demoqa_verification.exceptions import ConfigurationError


@dataclass(frozen=True)
class EnvironmentProfile:
    """Named target environment."""

    name: str
    base_url: str
    api_url: str
    timeout: int
    retries: int


ENVIRONMENTS: dict[str, EnvironmentProfile] = {
    "dev": EnvironmentProfile(
        name="Development",
        base_url="https://demoqa.com",
        api_url="https://demoqa.com/api",
        timeout=30000,
        retries=1,
    ),
    "staging": EnvironmentProfile(
        name="Staging",
        base_url="https://staging.demoqa.com",
        api_url="https://staging.demoqa.com/api",
        timeout=45000,
        retries=2,
    ),
    "prod": EnvironmentProfile(
        name="Production",
        base_url="https://demoqa.com",
        api_url="https://demoqa.com/api",
        timeout=60000,
        retries=3,
    ),
}


def get_environment(name: str) -> EnvironmentProfile:
    """Look up an environment profile by name.

    Raises:
        ConfigurationError: If no profile with that name exists.
    """
    try:
        return ENVIRONMENTS[name]
    except KeyError:
        available = ", ".join(ENVIRONMENTS)
        raise ConfigurationError(
            f"Environment '{name}' not found. Available: {available}"
        ) from None


class Settings(BaseSettings):
    """Suite configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="dev", description="Environment profile name")

    # Browser
    headless: bool | None = Field(
        default=None, description="Force headless/headed; unset keeps the plugin default"
    )
    browser: str = Field(default="chromium", description="Browser engine")

    # Execution
    workers: int = Field(default=1, ge=1, description="Parallel pytest-xdist workers")
    timeout: int | None = Field(
        default=None, ge=1, description="Per-test timeout (ms); unset uses the profile's"
    )
    retries: int | None = Field(
        default=None, ge=0, description="Whole-test reruns; unset uses the profile's"
    )
    action_timeout: int = Field(default=15000, ge=1, description="Default action timeout (ms)")
    navigation_timeout: int = Field(
        default=30000, ge=1, description="Default navigation timeout (ms)"
    )

    # Reporting
    allure_results_dir: str = Field(default="allure-results")
    screenshots_dir: str = Field(default="demoqa_verification/screenshots")

    # CI
    ci: bool = Field(default=False, description="Running on a CI agent")

    @property
    def profile(self) -> EnvironmentProfile:
        return get_environment(self.environment)

    @property
    def base_url(self) -> str:
        return self.profile.base_url

    @property
    def test_timeout(self) -> int:
        return self.timeout if self.timeout is not None else self.profile.timeout

    @property
    def test_retries(self) -> int:
        return self.retries if self.retries is not None else self.profile.retries


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
