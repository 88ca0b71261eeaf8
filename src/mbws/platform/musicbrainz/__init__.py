"""MusicBrainz infrastructure package.

This package wires the WS2 request/decode pipeline to a blocking
``requests`` transport and exposes the ``WS2Client`` facade.
"""

from .client import WS2Client
from .http_client import MusicBrainzHTTPClient
from .user_agent import format_user_agent, resolve_user_agent

__all__ = [
    "MusicBrainzHTTPClient",
    "WS2Client",
    "format_user_agent",
    "resolve_user_agent",
]
