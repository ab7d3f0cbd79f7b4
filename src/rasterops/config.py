"""rasterops configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid.

    Example:
        >>> Settings(_env_file=None).require_output_limit()  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        rasterops.config.ConfigError: Output pixel limit not configured. ...
    """

    def __init__(self, key_name: str, env_var: str) -> None:
        """Initialize configuration error.

        Args:
            key_name: Human-readable name of the missing key.
            env_var: Environment variable name to set.
        """
        self.key_name = key_name
        self.env_var = env_var
        message = (
            f"{key_name} not configured. "
            f"Set it in .env file or {env_var} environment variable."
        )
        super().__init__(message)


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Filtering
    BITONAL_THRESHOLD: int = Field(default=128, ge=1, le=255)  # luma >= this is white

    # Resource guard
    MAX_OUTPUT_PIXELS: int = Field(default=0, ge=0)  # 0 = no limit
    REQUIRE_OUTPUT_LIMIT: bool = False  # refuse to run operators without a limit

    # Scaling
    HIGH_QUALITY_REDUCING_GAP: float = Field(default=2.0, ge=1.0)

    def require_output_limit(self) -> int:
        """Get the output pixel limit, raising ConfigError if not set.

        Use this when a deployment must refuse unbounded output buffers
        rather than silently running without a ceiling.

        Returns:
            The configured maximum number of output pixels.

        Raises:
            ConfigError: If MAX_OUTPUT_PIXELS is 0 (disabled).
        """
        if self.MAX_OUTPUT_PIXELS <= 0:
            raise ConfigError("Output pixel limit", "MAX_OUTPUT_PIXELS")
        return self.MAX_OUTPUT_PIXELS


# Singleton instance for import convenience
settings = Settings()
