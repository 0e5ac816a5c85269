from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from MICROSTOCK_* environment variables."""

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Treat warnings as submission-blocking in the CLI exit code
    strict: bool = False

    model_config = SettingsConfigDict(env_prefix="MICROSTOCK_", env_file=".env", extra="ignore")


def get_settings() -> Settings:
    return Settings()
