"""Client configuration.

Two entry points:
- `build_client_config`: validate explicit options and derive `ClientConfig`.
- `ClientSettings`: read the same options from env vars / `.env` files
  (pydantic-settings) for callers that do not want to hard-code credentials.
"""

from __future__ import annotations

import base64
import os
import sys
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from connectwise.core.domain.models import ClientConfig
from connectwise.core.errors import ConfigurationError

API_PATH = "/apis/3.0"
DEFAULT_ENTRY_POINT = "v4_6_release"
DEFAULT_API_VERSION = "3.0.0"
DEFAULT_TIMEOUT_MS = 10000


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "connectwise-api"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "connectwise-api"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "connectwise-api"
    return Path.home() / ".config" / "connectwise-api"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def encode_basic_auth(company_id: str, public_key: str, private_key: str) -> str:
    """`Basic base64(companyId+publicKey:privateKey)`."""

    raw = f"{company_id}+{public_key}:{private_key}"
    return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")


def build_client_config(
    company_id: str | None,
    public_key: str | None,
    private_key: str | None,
    company_url: str | None,
    *,
    api_version: str | None = None,
    entry_point: str | None = None,
    timeout: float | None = None,
) -> ClientConfig:
    """Validate client options and derive the immutable `ClientConfig`.

    Raises:
        ConfigurationError: a required option is missing or empty, or an
            option has the wrong type/value (e.g. a negative timeout).
    """

    required = (
        ("company_id", company_id),
        ("public_key", public_key),
        ("private_key", private_key),
        ("company_url", company_url),
    )
    for name, value in required:
        if not value:
            raise ConfigurationError(f"{name} must be defined", field=name)

    entry_point = entry_point or DEFAULT_ENTRY_POINT
    api_version = api_version or DEFAULT_API_VERSION
    timeout = timeout or DEFAULT_TIMEOUT_MS

    try:
        return ClientConfig(
            company_id=company_id,
            company_url=company_url,
            api_url=f"https://{company_url}/{entry_point}{API_PATH}",
            api_version=api_version,
            public_key=public_key,
            private_key=private_key,
            auth=encode_basic_auth(company_id, public_key, private_key),
            timeout=timeout,
        )
    except ValidationError as exc:
        error = exc.errors()[0]
        name = str(error["loc"][0]) if error["loc"] else None
        raise ConfigurationError(f"{name} is invalid: {error['msg']}", field=name) from exc


class ClientSettings(BaseSettings):
    """Client options loaded from the environment.

    Credentials are optional here; `to_config()` enforces them with the same
    rules as explicit construction.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONNECTWISE_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    company_id: str | None = Field(
        default=None,
        description="Company (tenant) identifier used to log in.",
    )
    public_key: str | None = Field(
        default=None,
        description="API member public key.",
    )
    private_key: str | None = Field(
        default=None,
        repr=False,
        description="API member private key.",
    )
    company_url: str | None = Field(
        default=None,
        description="API host, e.g. 'api-na.myconnectwise.net' (no scheme).",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        min_length=1,
        description="Version requested through the Accept header.",
    )
    entry_point: str = Field(
        default=DEFAULT_ENTRY_POINT,
        min_length=1,
        description="Release channel path segment (e.g. 'v4_6_release').",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        description="Timeout per request (milliseconds).",
    )

    def to_config(self) -> ClientConfig:
        return build_client_config(
            self.company_id,
            self.public_key,
            self.private_key,
            self.company_url,
            api_version=self.api_version,
            entry_point=self.entry_point,
            timeout=self.timeout,
        )
