"""
Pydantic configuration model for the CDAP control plane.

Validates the provider config once, at construction time, instead of
passing loose dicts into every resource operation.
"""

from __future__ import annotations

import os
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CdapConfig(BaseModel):
    """Configuration shared by every CDAP resource controller.

    Values are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (CDAP_HOST, CDAP_NAMESPACE, CDAP_AUTH_TOKEN).
    3. Field defaults (``default_namespace`` falls back to ``"default"``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    host: str = Field(description="Base URL of the CDAP router (e.g. 'http://localhost:11015')")
    default_namespace: str = Field(
        default="default", description="Namespace used when a resource declares none"
    )
    auth_token: str | None = Field(default=None, description="Bearer token for the CDAP API")
    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    max_attempts: int = Field(
        default=1, ge=1, description="Transport attempts per request (1 disables retries)"
    )
    retry_delay: float = Field(
        default=1.0, ge=0, description="Initial backoff between transport attempts"
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing values."""
        env_map = {
            "host": "CDAP_HOST",
            "default_namespace": "CDAP_NAMESPACE",
            "auth_token": "CDAP_AUTH_TOKEN",
        }
        for field, env_var in env_map.items():
            if not values.get(field) and os.environ.get(env_var):
                values[field] = os.environ[env_var]
        return values

    @model_validator(mode="after")
    def validate_host(self) -> CdapConfig:
        """Ensure host is an absolute http(s) URL."""
        parts = urlsplit(self.host)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(
                f"CDAP host must be an http(s) URL, got {self.host!r}. "
                "Set it explicitly or via the CDAP_HOST environment variable."
            )
        if not self.default_namespace:
            raise ValueError("default_namespace must not be empty")
        return self


def validate_config(config: dict | CdapConfig) -> CdapConfig:
    """Validate and return a typed config model.

    Args:
        config: Raw configuration dictionary, or an already validated model.

    Returns:
        A validated :class:`CdapConfig`.

    Raises:
        pydantic.ValidationError: If the config is invalid.
    """
    if isinstance(config, CdapConfig):
        return config
    return CdapConfig(**config)


__all__ = [
    "CdapConfig",
    "validate_config",
]
