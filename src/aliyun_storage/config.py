"""Configuration models for the OSS storage adapter."""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, SecretStr, ValidationError, field_validator

from aliyun_storage.exceptions import ConfigurationError

DEFAULT_ENDPOINT = "https://oss-cn-hangzhou.aliyuncs.com"


class OssConfig(BaseModel, frozen=True):
    """Aliyun OSS connection configuration."""

    access_key_id: str
    access_key_secret: SecretStr
    bucket: str
    endpoint: str | None = None
    path: str | None = None
    cname: bool = False
    quiet_sdk_logging: bool = True

    @field_validator("access_key_id", "bucket")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("access_key_secret")
    @classmethod
    def _secret_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "OssConfig":
        """
        Builds a configuration from a plain mapping.

        Args:
            mapping: Keys as accepted by the model (endpoint, access_key_id, ...).

        Returns:
            The validated configuration.

        Raises:
            ConfigurationError: If a required field is missing or invalid.
        """
        try:
            return cls(**dict(mapping))
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "config"
            raise ConfigurationError(field, error["msg"], cause=e) from e


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> OssConfig:
    """Loads configuration from environment variables."""
    return OssConfig.from_mapping(
        {
            "endpoint": os.getenv("OSS_ENDPOINT") or None,
            "access_key_id": os.getenv("OSS_ACCESS_KEY_ID", ""),
            "access_key_secret": os.getenv("OSS_ACCESS_KEY_SECRET", ""),
            "bucket": os.getenv("OSS_BUCKET", ""),
            "path": os.getenv("OSS_PATH") or None,
            "cname": _env_flag("OSS_CNAME", False),
            "quiet_sdk_logging": _env_flag("OSS_QUIET_SDK_LOGGING", True),
        }
    )
