"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Cadence productivity server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback; personal activity data should not be exposed to
    # the LAN/WAN unless `0.0.0.0` is chosen explicitly.
    cadence_host: str = "127.0.0.1"
    cadence_port: int = 8003
    cadence_log_level: str = "info"
    # If binding to non-loopback, refuse to start unless this is set true
    # (there is no auth layer).
    cadence_allow_insecure_bind: bool = False

    # Scoring
    # Optional YAML profile overriding the default point table.
    cadence_scoring_weights_path: str = ""

    # Analysis window used when a tool reads from the data source
    cadence_week_length: int = 7


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
