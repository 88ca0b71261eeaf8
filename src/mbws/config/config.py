"""Configuration management for the web service client."""

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, ClassVar

from mbws.config.paths import default_config_path
from mbws.platform.logging import logger

DEFAULT_WS_ROOT_URL = "https://musicbrainz.org/ws/2"
REQUEST_TIMEOUT_DEFAULT = 15.0

_FIELD_NOTES: dict[str, str] = {
    "ws_root_url": "Web service root; point at a mirror or a local server if needed",
    "mb_app_name": "User-Agent application name (MusicBrainz asks for AppName/AppVersion (contact))",
    "mb_app_version": "User-Agent application version",
    "mb_contact": "User-Agent contact, e.g. a URL or mailto: address",
    "request_timeout": "Seconds the default transport waits for a response",
}


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return repr(value)
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class Config:
    """Client configuration, read from ``config/config.toml`` or ``$MBWS_CONFIG_PATH``."""

    ws_root_url: str = DEFAULT_WS_ROOT_URL
    mb_app_name: str | None = None
    mb_app_version: str | None = None
    mb_contact: str | None = None
    request_timeout: float = REQUEST_TIMEOUT_DEFAULT

    # Singleton instance and the file it came from
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def to_toml(self) -> str:
        """Render as commented TOML; unset identity fields are left out."""

        out = ["# mbws configuration", ""]
        for field in fields(self):
            value = getattr(self, field.name)
            out.append(f"# {_FIELD_NOTES[field.name]}")
            if value is None:
                out.append(f"# {field.name} = ")
            else:
                out.append(f"{field.name} = {_toml_literal(value)}")
            out.append("")
        return "\n".join(out)

    def save(self, target: Path | None = None) -> Path:
        """Write the configuration and return the file that was written."""

        destination = target or default_config_path()
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            _ = destination.write_text(self.to_toml(), encoding="utf-8")
        except OSError as e:
            logger.error("Could not write configuration to %s: %s", destination, e)
            raise
        logger.info("Configuration saved to %s", destination)
        return destination

    @classmethod
    def load(cls, source: Path | None = None) -> "Config":
        """Load configuration, reusing the cached instance for the same file.

        A missing file yields the defaults; nothing is written to disk.
        Unknown keys are reported and ignored.

        Raises:
            OSError: The file exists but cannot be read.
            tomllib.TOMLDecodeError: The file is not valid TOML.
        """
        config_file = source or default_config_path()
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    raw = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.error("Could not read configuration from %s: %s", config_file, e)
                raise
            known = {field.name for field in fields(cls)}
            if unknown := sorted(raw.keys() - known):
                logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
            instance = cls(**{key: value for key, value in raw.items() if key in known})
            logger.info("Configuration loaded from %s", config_file)
        else:
            logger.debug("No configuration at %s; using defaults", config_file)
            instance = cls()

        cls._instance = instance
        cls._loaded_from = config_file
        return instance


# Global configuration instance
config = Config.load()
