"""Where: src/mbws/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to the client without file I/O.
Trade-offs: - Validation is limited to simple boundary checks.
"""

from __future__ import annotations

from mbws.config.config import (
    DEFAULT_WS_ROOT_URL,
    REQUEST_TIMEOUT_DEFAULT,
    config as app_config,
)

# Web service endpoint ------------------------------------------------------

_root = (app_config.ws_root_url or "").strip().rstrip("/")
WS2_ROOT_URL: str = _root or DEFAULT_WS_ROOT_URL


# MusicBrainz application identity ------------------------------------------

# MusicBrainz recommends a User-Agent of the form:
#   "AppName/AppVersion (contact-url-or-email)"
# See: https://musicbrainz.org/doc/MusicBrainz_API/Best_Practices#User-Agent

MB_APP_NAME: str = app_config.mb_app_name or "mbws"
MB_APP_VERSION: str = app_config.mb_app_version or "0.1.0"
MB_CONTACT: str = app_config.mb_contact or ""


# Transport -----------------------------------------------------------------

_timeout = app_config.request_timeout
REQUEST_TIMEOUT: float = (
    float(_timeout)
    if isinstance(_timeout, (int, float)) and not isinstance(_timeout, bool) and _timeout > 0
    else REQUEST_TIMEOUT_DEFAULT
)


__all__ = [
    "WS2_ROOT_URL",
    "MB_APP_NAME",
    "MB_APP_VERSION",
    "MB_CONTACT",
    "REQUEST_TIMEOUT",
]
