from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Data paths
    data_dir: str = "sample_data"
    preferences_path: Optional[str] = None

    # Pricing
    currency: str = "CLP"
    baseline_fabric_name: str = "Deserve"

    # Roster / breakdown display
    missing_size_label: str = "N/A"
    no_name_placeholder: str = "-"

    # UI settings
    default_view_mode: str = "grid"

    # Boundary I/O
    fetch_timeout_seconds: float = 10.0

    # Seed data settings
    default_seed_value: int = 42
    default_seed_teams: int = 3

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
