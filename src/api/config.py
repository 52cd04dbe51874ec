"""Application configuration and constants."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

PAGE_FORMAT = "A4"
PDF_FILENAME = "document.pdf"
PDF_MEDIA_TYPE = "application/pdf"

# Flags for a memory-constrained serverless runtime (no /dev/shm, no GPU).
DEFAULT_BROWSER_ARGS: list[str] = [
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-extensions",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--hide-scrollbars",
    "--font-render-hinting=none",
]

BROWSER_TIMEOUT_MS = 30000


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_cors_origins: str = "*"

    browser_executable_path: Optional[str] = None
    browser_args: str = ",".join(DEFAULT_BROWSER_ARGS)
    browser_headless: bool = True
    browser_chromium_sandbox: bool = False
    browser_timeout_ms: int = BROWSER_TIMEOUT_MS

    render_timeout_seconds: Optional[float] = None

    log_level: str = "INFO"
    log_format: str = "json"

    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 60
    rate_limit_per_hour: int = 1000

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.api_cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.api_cors_origins.split(",")]

    @property
    def browser_args_list(self) -> list[str]:
        """Parse Chromium launch flags from comma-separated string."""
        if not self.browser_args:
            return []
        return [arg.strip() for arg in self.browser_args.split(",") if arg.strip()]


settings = Settings()
