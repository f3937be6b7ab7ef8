"""Application configuration using pydantic-settings."""

import re
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Literal, Self

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TYPE_PREFIX_RE = re.compile(r"[a-z]")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Public address of the host site; shortlinks fall back to it when no
    # dedicated shortlink domain is configured
    home_url: str = "http://localhost:8000"

    # Custom domain for shortlinks, e.g. "https://ex.am"
    shortlink_base: str = ""

    # Deployment-level override (HUM_SHORTLINK_BASE). When present it wins
    # over shortlink_base and cannot be changed from the settings surface.
    shortlink_base_override: str = Field(
        default="",
        validation_alias=AliasChoices("HUM_SHORTLINK_BASE", "shortlink_base_override"),
    )

    # Amazon associates tag used for /i/ (ISBN/ASIN) redirects
    amazon_affiliate_id: str = ""

    # Simple redirect rules: type prefix -> base URL
    # Example: REDIRECT_BASES='{"w": "https://wiki.example.com/"}'
    redirect_bases: dict[str, str] = Field(default_factory=dict)

    # Prefixes resolved against local resources in addition to b, t, a, p
    extra_local_types: list[str] = Field(default_factory=list)

    # JSON resource catalog; defaults to api/content/resources.json
    catalog_path: str = ""

    # What to do with a resource whose format/media kind maps to no prefix:
    #   default - fall back to "b"
    #   error   - refuse to classify it
    unknown_format_policy: Literal["default", "error"] = "default"

    debug: bool = False
    enable_docs: bool = False

    @model_validator(mode="after")
    def validate_config(self) -> Self:
        for prefix in [*self.redirect_bases, *self.extra_local_types]:
            if not _TYPE_PREFIX_RE.fullmatch(prefix):
                raise ValueError(
                    f"Invalid type prefix {prefix!r}: "
                    "type prefixes are single lowercase ASCII letters."
                )
        return self

    @cached_property
    def catalog_file(self) -> Path:
        """Defaults to content/resources.json next to the app if CATALOG_PATH not set."""
        if self.catalog_path:
            return Path(self.catalog_path)
        return Path(__file__).parent.parent / "content" / "resources.json"

    @cached_property
    def configured_shortlink_base(self) -> str:
        """Override beats the stored setting, which beats the site address."""
        if self.shortlink_base_override:
            return self.shortlink_base_override.rstrip("/")
        return self.shortlink_base or self.home_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.

    Example:
        def test_something(monkeypatch):
            monkeypatch.setenv("HUM_SHORTLINK_BASE", "https://ex.am")
            clear_settings_cache()
            settings = get_settings()  # Fresh instance
    """
    get_settings.cache_clear()
