"""sdkkernel configuration management.

Loads client configuration from a TOML file with environment variable
overrides (``SDKKERNEL_`` prefix).  Uses :mod:`tomllib` on Python 3.11+.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sdkkernel.exceptions import ConfigurationError
from sdkkernel.formatter import MessageFormatter
from sdkkernel.models import ResponseType

# ---------------------------------------------------------------------------
# Default paths
# ---------------------------------------------------------------------------

DEFAULT_CONFIG_DIR = ".sdkkernel"
DEFAULT_CONFIG_FILE = "config.toml"

ENV_PREFIX = "SDKKERNEL_"

_MISSING = object()

# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class HttpSettings(BaseModel):
    """Transport-level settings read by the request pipeline."""

    model_config = ConfigDict(extra="ignore")

    base_uri: str = ""
    log_template: str = Field(
        default=MessageFormatter.DEBUG,
        description="MessageFormatter template used by the log middleware",
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Default transport timeout in seconds (None = httpx default)",
    )


class KernelConfig(BaseModel):
    """Client configuration.

    All fields can be overridden via environment variables with the
    ``SDKKERNEL_`` prefix, e.g. ``SDKKERNEL_RESPONSE_TYPE=array`` or
    ``SDKKERNEL_HTTP_LOG_TEMPLATE='{method} {uri} {code}'``.
    """

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    response_type: Optional[ResponseType] = None
    http: HttpSettings = Field(default_factory=HttpSettings)
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a setting by dotted key, e.g. ``"http.log_template"``.

        Returns *default* when any segment is missing or the value is None.
        """
        value: Any = self
        for part in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, part, _MISSING)
            elif isinstance(value, dict):
                value = value.get(part, _MISSING)
            else:
                return default
            if value is _MISSING or value is None:
                return default
        return value


# ---------------------------------------------------------------------------
# Loader helpers
# ---------------------------------------------------------------------------


def _apply_env_overrides(data: dict) -> dict:
    """Apply SDKKERNEL_ environment variable overrides to *data*.

    ``SDKKERNEL_HTTP_<FIELD>`` targets the nested ``[http]`` table.
    """
    top_fields = set(KernelConfig.model_fields.keys()) - {"http"}
    http_fields = set(HttpSettings.model_fields.keys())
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()
        if name.startswith("http_") and name[len("http_"):] in http_fields:
            data.setdefault("http", {})[name[len("http_"):]] = value
        elif name in top_fields:
            data[name] = value
    return data


def load_config(config_path: Path | None = None, project_dir: Path | None = None) -> KernelConfig:
    """Load configuration from a TOML file with env-var overrides.

    Parameters
    ----------
    config_path:
        Explicit path to a TOML file.  When *None*, looks for
        ``<project_dir>/.sdkkernel/config.toml``.
    project_dir:
        Project root directory.  Defaults to :func:`Path.cwd`.

    Returns
    -------
    KernelConfig
        Parsed and validated configuration.

    Raises
    ------
    ConfigurationError
        If the file cannot be parsed or the values fail validation.
    """
    project = project_dir or Path.cwd()
    path = config_path or (project / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE)

    data: dict = {}
    if path.exists():
        try:
            with open(path, "rb") as fh:
                data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc

    # Flatten every table except [http], which maps onto HttpSettings
    flat: dict = {}
    for k, v in data.items():
        if isinstance(v, dict) and k != "http":
            flat.update(v)
        else:
            flat[k] = v

    flat = _apply_env_overrides(flat)
    try:
        return KernelConfig(**flat)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def default_config_toml() -> str:
    """Return default configuration as a TOML string."""
    return """\
# sdkkernel configuration

[general]
# One of: raw, array, object, collection, string
response_type = "array"
log_level = "INFO"

[http]
base_uri = ""
# log_template = "{method} {uri} HTTP/{version} {code}"
"""
