"""Where: src/mbws/platform/musicbrainz/user_agent.py
What: Build MusicBrainz-compliant User-Agent strings.
Why: Centralise request etiquette shared by transports and clients.
"""

from __future__ import annotations

import os

from mbws.config.settings import MB_APP_NAME, MB_APP_VERSION, MB_CONTACT


def format_user_agent(app_name: str, app_version: str, contact: str) -> str:
    """Return ``App/Version (contact)`` when contact information is available."""

    stripped = contact.strip()
    if stripped:
        return f"{app_name}/{app_version} ( {stripped} )"
    return f"{app_name}/{app_version}"


def resolve_user_agent(explicit: str | None = None) -> str:
    """Pick the User-Agent: explicit value, ``MBWS_USER_AGENT``, then settings."""

    if explicit and explicit.strip():
        return explicit.strip()
    env = os.getenv("MBWS_USER_AGENT")
    if env and env.strip():
        return env.strip()
    return format_user_agent(MB_APP_NAME, MB_APP_VERSION, MB_CONTACT)


__all__ = [
    "format_user_agent",
    "resolve_user_agent",
]
