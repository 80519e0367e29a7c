# Configuration Settings

from pydantic_settings import BaseSettings
from pydantic import Field, validator
from typing import List, Optional
import os
import re


# Loose Unicode approximation kept as-is: `A-z` also spans the punctuation
# between "Z" and "a" ([ \ ] ^ _ `).
DEFAULT_TITLE_PATTERN = r"\[[A-zÀ-ú0-9 ]*\][A-zÀ-ú0-9- ]+"


class Settings(BaseSettings):
    """
    Application settings with environment variable support
    """

    ENVIRONMENT: str = Field(default="development", env="ENVIRONMENT")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        env="LOG_FORMAT"
    )
    LOG_FILE: Optional[str] = Field(None, env="LOG_FILE")

    # PR Rules
    MAX_PR_LINES: int = Field(default=3000, env="MAX_PR_LINES")
    MAX_CHANGED_FILES: int = Field(default=20, env="MAX_CHANGED_FILES")
    TITLE_PATTERN: str = Field(default=DEFAULT_TITLE_PATTERN, env="TITLE_PATTERN")
    DISABLED_CHECKS: List[str] = Field(default=[], env="DISABLED_CHECKS")

    # Build Artifacts
    XCODE_SUMMARY_PATH: str = Field(default="build/reports/errors.json", env="XCODE_SUMMARY_PATH")
    XCRESULT_PATH: str = Field(
        default="Example/fastlane/test_output/Example.xcresult",
        env="XCRESULT_PATH"
    )
    COVERAGE_JSON_PATH: Optional[str] = Field(None, env="COVERAGE_JSON_PATH")
    MINIMUM_COVERAGE: float = Field(default=70.0, env="MINIMUM_COVERAGE")
    COVERAGE_EXCLUDED_TARGETS: List[str] = Field(
        default=["ExampleTests.xctest"],
        env="COVERAGE_EXCLUDED_TARGETS"
    )
    FAIL_SENTINEL_PATH: str = Field(default="Danger-has-fails.swift", env="FAIL_SENTINEL_PATH")

    # Subprocess Configuration
    COMMAND_TIMEOUT: int = Field(default=120, env="COMMAND_TIMEOUT")  # seconds

    # GitHub Configuration
    GITHUB_TOKEN: Optional[str] = Field(None, env="GITHUB_TOKEN")
    GITHUB_REPOSITORY: Optional[str] = Field(None, env="GITHUB_REPOSITORY")
    GITHUB_API_URL: str = Field(default="https://api.github.com", env="GITHUB_API_URL")
    GITHUB_EVENT_PATH: Optional[str] = Field(None, env="GITHUB_EVENT_PATH")
    POST_RESULTS_TO_PR: bool = Field(default=False, env="POST_RESULTS_TO_PR")

    @validator("ENVIRONMENT")
    def validate_environment(cls, v):
        """Validate environment"""
        valid_envs = ["development", "ci", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment. Must be one of: {valid_envs}")
        return v.lower()

    @validator("TITLE_PATTERN")
    def validate_title_pattern(cls, v):
        """Validate the title pattern compiles"""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid TITLE_PATTERN: {e}")
        return v

    @validator("MINIMUM_COVERAGE")
    def validate_minimum_coverage(cls, v):
        """Validate coverage threshold is a percentage"""
        if not 0 <= v <= 100:
            raise ValueError("MINIMUM_COVERAGE must be between 0 and 100")
        return v

    @validator("GITHUB_API_URL")
    def validate_api_url(cls, v):
        """Strip trailing slash from API URL"""
        return v.rstrip("/")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

        # Allow extra fields for forward compatibility
        extra = "allow"


# Singleton instance
_settings = None


def get_settings() -> Settings:
    """Get cached settings instance"""
    global _settings
    if _settings is None:
        _settings = get_environment_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings instance so the next call re-reads the environment"""
    global _settings
    _settings = None


class CISettings(Settings):
    """CI environment settings"""
    LOG_LEVEL: str = "INFO"
    POST_RESULTS_TO_PR: bool = True


class DevelopmentSettings(Settings):
    """Development environment settings"""
    LOG_LEVEL: str = "DEBUG"


def get_environment_settings() -> Settings:
    """Get environment-specific settings"""
    env = os.getenv("ENVIRONMENT", "development").lower()

    if env == "development":
        return DevelopmentSettings()
    elif env == "ci":
        return CISettings()
    else:
        return Settings()
