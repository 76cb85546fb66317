import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

# Known to render inside Discord embeds.
DEFAULT_BANNER_URL = (
    "https://media.giphy.com/media/v1.Y2lkPTc5MGI3NjExbjRuaHNvN3hyY2tvaHJkN2E3enYxeG1uYWFnd3h6NnQyZnhidHc3ayZlcD12MV9naWZzX3NlYXJjaCZjdD1n"  # noqa: E501
    "/RlHpuVwtbvdIBXzm2z/giphy.gif"
)


class EnvConfig(BaseSettings):
    """Environment configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )


class Settings(EnvConfig):
    """Manages application settings using Pydantic."""

    log_level: int = logging.INFO
    prefix: str = "!"
    token: str = ""

    # Ticket System Configuration
    config_path: str = "ticket_bot_config.json"
    close_delay_seconds: float = 5.0

    liveness_host: str = "0.0.0.0"  # noqa: S104
    liveness_port: int = 3000


settings = Settings()
