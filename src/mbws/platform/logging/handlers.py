"""Where: src/mbws/platform/logging/handlers.py
What: Rich console handler rendering structured web service events.
Why: Keep request/decode diagnostics readable without touching call sites.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class WS2RichHandler(RichHandler):
    """Rich handler that styles ``ws2_event`` log records."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "ws2.request.start": ("🌐", "cyan"),
        "ws2.query.invalid": ("⚠️", "yellow"),
        "ws2.request.failed": ("⛔", "red"),
        "ws2.decode.complete": ("✅", "green"),
        "ws2.decode.failed": ("❌", "red"),
    }
    _URL_LIMIT: ClassVar[int] = 96

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_url(self, url: str) -> Text:
        """Render a request URL, eliding the middle of very long targets."""

        display = url
        if len(display) > self._URL_LIMIT:
            keep = (self._URL_LIMIT - 1) // 2
            display = f"{display[:keep]}…{display[-keep:]}"

        text = Text()
        for char in display:
            if char in "/?&=" or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_ws2_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured web service events with dedicated styling."""

        event = getattr(record, "ws2_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        pattern = getattr(record, "pattern", None)
        entity = getattr(record, "entity", None)
        label = " ".join(part for part in [pattern, entity] if isinstance(part, str) and part)

        if event == "ws2.request.start":
            _ = body.append("GET ")
            url = getattr(record, "url", None)
            if url:
                _ = body.append_text(self._format_url(str(url)))
        elif event in ("ws2.request.failed", "ws2.query.invalid"):
            _ = body.append("Request failed" if event == "ws2.request.failed" else "Invalid query")
            # TransportError messages already carry the status
            error_message = getattr(record, "error_message", None)
            status = getattr(record, "status", None)
            if error_message:
                _ = body.append(f": {error_message}")
            elif isinstance(status, int):
                _ = body.append(f" (status={status})")
        elif event == "ws2.decode.complete":
            _ = body.append("Decoded")
            metrics: list[str] = []
            items = getattr(record, "items", None)
            count = getattr(record, "count", None)
            offset = getattr(record, "offset", None)
            if isinstance(items, int):
                metrics.append(f"items={items}")
            if isinstance(count, int):
                metrics.append(f"count={count}")
            if isinstance(offset, int):
                metrics.append(f"offset={offset}")
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
        else:
            _ = body.append("Decode failed")
            error_message = getattr(record, "error_message", None)
            if error_message:
                _ = body.append(f" ({error_message})")

        if label:
            _ = body.append(f" <{label}>")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        ws2_text = self._render_ws2_message(record)
        if ws2_text is not None:
            return ws2_text
        return super().render_message(record, message)


__all__ = ["WS2RichHandler"]
