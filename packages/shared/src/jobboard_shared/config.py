"""Client configuration from the environment.

Every knob has a working default so the client runs with no environment at
all, pointed at the hosted backend:

  JOBBOARD_API_BASE_URL            backend root URL
  JOBBOARD_REQUEST_TIMEOUT         whole-request timeout in seconds (10)
  JOBBOARD_STORAGE_PATH            JSON file holding the persisted token
  JOBBOARD_SESSION_CHECK_INTERVAL  seconds between expiry watchdog checks (60)
  JOBBOARD_DEBUG                   "true" logs every request at DEBUG
  JOBBOARD_APP_NAME                display name

The calling code doesn't need to know where a value came from — it calls
`load_config()` and gets a validated ClientConfig.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel

DEFAULT_API_BASE_URL = "https://job-portal-api-nest.onrender.com"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_SESSION_CHECK_INTERVAL = 60.0


def default_storage_path() -> str:
    return str(Path.home() / ".jobboard" / "storage.json")


class ClientConfig(BaseModel):
    """Resolved client settings."""

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    storage_path: str = ""
    session_check_interval: float = DEFAULT_SESSION_CHECK_INTERVAL
    debug: bool = False
    app_name: str = "Job Portal"


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number, got '{raw}'") from None
    if value <= 0:
        raise ValueError(f"Environment variable {name} must be positive, got '{raw}'")
    return value


def load_config() -> ClientConfig:
    """Build a ClientConfig from JOBBOARD_* environment variables.

    Raises:
        ValueError: A numeric variable is set but not a positive number.
    """
    return ClientConfig(
        api_base_url=os.environ.get("JOBBOARD_API_BASE_URL") or DEFAULT_API_BASE_URL,
        request_timeout=_float_env("JOBBOARD_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        storage_path=os.environ.get("JOBBOARD_STORAGE_PATH") or default_storage_path(),
        session_check_interval=_float_env(
            "JOBBOARD_SESSION_CHECK_INTERVAL", DEFAULT_SESSION_CHECK_INTERVAL
        ),
        debug=os.environ.get("JOBBOARD_DEBUG", "false").lower() == "true",
        app_name=os.environ.get("JOBBOARD_APP_NAME") or "Job Portal",
    )


def get_api_url(base_url: str, endpoint: str) -> str:
    """Join a base URL and an endpoint with exactly one slash between them."""
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"
