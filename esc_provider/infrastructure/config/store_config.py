"""
Provider configuration for one Pulumi ESC secret store.

Values come either from the controller (constructor keywords) or from the
process environment via from_env(), which loads a local .env file first so
development runs need no exported variables.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from esc_provider.domain.entities.environment import EnvironmentReference
from esc_provider.infrastructure.esc.esc_http_api import DEFAULT_API_URL


class EscStoreConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    organization: str
    environment: str
    access_token: SecretStr
    api_url: str = DEFAULT_API_URL
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("organization", "environment")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must be a non-empty string")
        return value.strip()

    @field_validator("access_token")
    @classmethod
    def check_token_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("access token must not be empty")
        return value

    @field_validator("api_url")
    @classmethod
    def check_http_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError(f"api_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @property
    def environment_reference(self) -> EnvironmentReference:
        return EnvironmentReference(self.organization, self.environment)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "EscStoreConfig":
        """Build the config from PULUMI_* environment variables.

        Raises:
            pydantic.ValidationError: if a required variable is missing or invalid.
        """
        load_dotenv(dotenv_path)
        values = {
            "organization": os.environ.get("PULUMI_ORGANIZATION", ""),
            "environment": os.environ.get("PULUMI_ENVIRONMENT", ""),
            "access_token": os.environ.get("PULUMI_ACCESS_TOKEN", ""),
        }
        if os.environ.get("PULUMI_API_URL"):
            values["api_url"] = os.environ["PULUMI_API_URL"]
        if os.environ.get("PULUMI_TIMEOUT"):
            values["timeout"] = os.environ["PULUMI_TIMEOUT"]
        return cls(**values)
