"""Where: src/mbws/config/paths.py
What: Locate the TOML config file and the optional log file.
Why: Keep environment overrides and repository-relative defaults in one place.

The config file is looked up as explicit argument, then ``MBWS_CONFIG_PATH``,
then ``config/config.toml`` under the repository root. The log file has no
default; logging to disk starts only when ``MBWS_LOG_FILE`` is set.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

CONFIG_PATH_ENV: Final[str] = "MBWS_CONFIG_PATH"
LOG_FILE_ENV: Final[str] = "MBWS_LOG_FILE"

_ROOT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def _from_env(name: str, env: Mapping[str, str] | None) -> Path | None:
    raw = (os.environ if env is None else env).get(name, "").strip()
    return Path(raw).expanduser().resolve() if raw else None


def resolve_path(
    explicit: Path | str | None,
    *,
    env_var: str,
    default: Path,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Pick ``explicit``, then ``$env_var``, then ``default``; always absolute."""

    if explicit is not None:
        return Path(explicit).expanduser().resolve()
    return _from_env(env_var, env) or default.expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Nearest ancestor of ``start`` carrying a project marker, else the cwd."""

    origin = (start or Path(__file__)).resolve()
    for candidate in origin.parents:
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return Path.cwd()


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    return resolve_path(
        None,
        env_var=CONFIG_PATH_ENV,
        default=_detect_repo_root() / "config" / "config.toml",
        env=env,
    )


def configured_log_file(env: Mapping[str, str] | None = None) -> Path | None:
    """Log file named by ``MBWS_LOG_FILE``, or ``None`` to keep logging on the console."""

    return _from_env(LOG_FILE_ENV, env)


__all__ = [
    "CONFIG_PATH_ENV",
    "LOG_FILE_ENV",
    "configured_log_file",
    "default_config_path",
    "resolve_path",
]
