# server/core/config.py

from typing import Annotated
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_SECRET_KEY = "your-secret-key"


class Settings(BaseSettings):
    """
    Process configuration, read once at startup and handed to create_app.
    Nothing below main.py looks up environment variables on its own.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True, extra="ignore"
    )

    database_url: str = Field(default="sqlite:///./data/app.db")
    secret_key: str = Field(default=DEFAULT_SECRET_KEY)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)
    log_level: str = Field(default="INFO")
    # Comma-separated in the environment.
    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])
    token_expire_minutes: int = Field(default=60)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            return [o.strip() for o in value.split(",") if o.strip()]
        return value

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == DEFAULT_SECRET_KEY


def load_settings() -> Settings:
    return Settings()
