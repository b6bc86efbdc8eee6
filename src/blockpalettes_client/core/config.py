"""Client configuration via Pydantic Settings.

Values are read from ``BLOCKPALETTES_*`` environment variables (or a ``.env``
file) and may be overridden at client construction time.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://www.blockpalettes.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "blockpalettes-client/0.1.0"


def normalize_base_url(url: str) -> str:
    """Check that ``url`` is an http(s) address and strip trailing slashes.

    Raises:
        ValueError: If the scheme is not http or https.
    """
    if not url.startswith(("http://", "https://")):
        msg = f"base_url must be an http(s) URL, got {url!r}"
        raise ValueError(msg)
    return url.rstrip("/")


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BLOCKPALETTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upstream
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base address of the Block Palettes website",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        description="Per-request HTTP timeout in seconds",
        gt=0,
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header sent with every request",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        return normalize_base_url(v)

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit stderr log records as JSON lines instead of text",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables a size-rotated file sink when set)",
    )


def get_settings() -> Settings:
    """Create and return client settings."""
    return Settings()
