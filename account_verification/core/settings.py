from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    # Environment
    ENV: str = Field(default="dev")

    # Build mode: dev builds link to the local HTTPS server instead of HOST_NAME
    DEV_BUILD: bool = Field(default=True)
    HOST_NAME: str = Field(default="localhost")
    HOST_PORT: Optional[int] = Field(default=None)
    HTTPS_PORT_LOCAL: int = Field(default=3443)

    # Session token
    AUTH_SECRET_KEY: str = Field(default="change-this-secret")
    AUTH_ALGORITHM: str = Field(default="HS256")
    AUTH_COOKIE_NAME: str = Field(default="access_token")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./members.db")

    # Email (Gmail SMTP). Empty credentials mean "not configured".
    EMAIL_USERNAME: str = Field(default="")
    EMAIL_APP_PASSWORD: str = Field(default="")
    EMAIL_FROM_NAME: str = Field(default="Infinite Chess")
    SMTP_HOST: str = Field(default="smtp.gmail.com")
    SMTP_PORT: int = Field(default=587)
    SMTP_TIMEOUT_SECONDS: float = Field(default=30.0)

    # Logging
    LOG_DIR: str = Field(default="logs")
    ERROR_LOG_FILE: str = Field(default="errLog.txt")
    HACK_LOG_FILE: str = Field(default="hackLog.txt")
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() == "dev"

    @property
    def is_prod(self) -> bool:
        return self.ENV.lower() == "prod"

    @property
    def verification_host(self) -> str:
        """Host (and port, when non-default) that verification links point at."""
        if self.DEV_BUILD:
            return f"localhost:{self.HTTPS_PORT_LOCAL}"
        if self.HOST_PORT and self.HOST_PORT != 443:
            return f"{self.HOST_NAME}:{self.HOST_PORT}"
        return self.HOST_NAME

    @property
    def email_credentials_configured(self) -> bool:
        return bool(self.EMAIL_USERNAME.strip() and self.EMAIL_APP_PASSWORD.strip())

    @property
    def email_from_address(self) -> str:
        if self.EMAIL_FROM_NAME:
            return f"{self.EMAIL_FROM_NAME} <{self.EMAIL_USERNAME}>"
        return self.EMAIL_USERNAME

    def validate_for_runtime(self) -> None:
        """Perform basic sanity checks based on the current environment.

        In non-dev environments this will raise if the session secret is unsafe
        or if verification links would point somewhere unusable.
        """
        if self.is_dev:
            return

        if not self.AUTH_SECRET_KEY or self.AUTH_SECRET_KEY == "change-this-secret" or len(self.AUTH_SECRET_KEY) < 32:
            raise RuntimeError(
                "AUTH_SECRET_KEY is not set to a strong value. "
                "Set a long, random secret in your environment for non-dev deployments."
            )

        if self.is_prod and self.DEV_BUILD:
            raise RuntimeError(
                "DEV_BUILD must be False in prod, otherwise verification links point at localhost."
            )

        if not self.DEV_BUILD and not self.HOST_NAME.strip():
            raise RuntimeError("HOST_NAME must be set when DEV_BUILD is False.")


settings = Settings()
