"""Core configuration.

Why here:
- Centralises the user's defaults (pydantic-settings) without polluting the CLI.
- Only non-secret preferences live here: the master secret and pepper are
  never read from files or environment variables.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.charsets import CharacterClass
from core.domain.models import DEFAULT_VERSION, MAX_LENGTH, MIN_LENGTH

APP_NAME = "pwderive"


def _platform_config_root() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or Path.home())
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def get_user_config_dir() -> Path:
    """Per-user configuration directory (APPDATA, Application Support or XDG)."""

    return _platform_config_root() / APP_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _env_key(line: str) -> str | None:
    """Key of an assignment line, or None for comments and blank lines."""

    name, sep, _ = line.partition("=")
    name = name.strip()
    if not sep or not name or name.startswith("#"):
        return None
    return name


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Update assignments in the user's .env, keeping comments and unrelated keys.

    Existing keys are rewritten in place; new keys are appended in sorted order.
    """

    env_path = env_path or get_user_env_file()
    pending = {key: value for key, value in values.items() if value is not None}
    for key, value in pending.items():
        if "\n" in value or "\r" in value:
            raise ValueError(f"{key} must be a single-line value")

    if env_path.exists():
        lines = env_path.read_text(encoding="utf-8").splitlines()
    else:
        lines = [f"# {APP_NAME} user config (.env)"]

    updated: list[str] = []
    for line in lines:
        key = _env_key(line)
        if key in pending:
            updated.append(f"{key}={pending.pop(key)}")
        else:
            updated.append(line)
    updated.extend(f"{key}={pending[key]}" for key in sorted(pending))

    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.write_text("\n".join(updated) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated defaults at the edge (env vars, .env files).
    - One configuration contract shared by the CLI commands.
    """

    model_config = SettingsConfigDict(
        env_prefix="PWDERIVE_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    default_length: int = Field(
        default=12,
        ge=MIN_LENGTH,
        le=MAX_LENGTH,
        description="Password length used when --length is not given.",
    )
    default_version: str = Field(
        default=DEFAULT_VERSION,
        min_length=1,
        description="Version tag used when --version is not given.",
    )

    default_uppercase: bool = Field(default=True, description="Include A-Z by default.")
    default_lowercase: bool = Field(default=True, description="Include a-z by default.")
    default_digits: bool = Field(default=True, description="Include 0-9 by default.")
    default_special: bool = Field(default=True, description="Include punctuation by default.")

    export_dir: Path | None = Field(
        default=None,
        description="Directory for JSON exports when --export-dir is not given.",
    )

    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Minimum level for log output (loguru level name).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file (rotated).",
    )

    def default_selection(self) -> frozenset[CharacterClass]:
        flags = {
            CharacterClass.UPPERCASE: self.default_uppercase,
            CharacterClass.LOWERCASE: self.default_lowercase,
            CharacterClass.DIGITS: self.default_digits,
            CharacterClass.SPECIAL: self.default_special,
        }
        return frozenset(cls for cls, enabled in flags.items() if enabled)


def configure_logging(settings: AppSettings) -> None:
    """Route loguru output according to the settings.

    `diagnose=False` keeps local variables (secrets included) out of tracebacks.
    """

    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        backtrace=True,
        diagnose=False,
    )
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(exist_ok=True, parents=True)
        logger.add(
            settings.log_file.resolve(),
            rotation="10 MB",
            retention=3,
            backtrace=True,
            diagnose=False,
            level=settings.log_level.upper(),
        )
