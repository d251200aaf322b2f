"""Tests for settings and the user .env writer."""

import pytest
from pydantic import ValidationError

from core.config import AppSettings, write_user_env_vars
from core.domain.charsets import CharacterClass


def test_defaults(isolated_settings):
    settings = AppSettings()
    assert settings.default_length == 12
    assert settings.default_version == "v1"
    assert settings.default_selection() == frozenset(CharacterClass)
    assert settings.export_dir is None


def test_environment_overrides(isolated_settings, monkeypatch):
    monkeypatch.setenv("PWDERIVE_DEFAULT_LENGTH", "20")
    monkeypatch.setenv("PWDERIVE_DEFAULT_SPECIAL", "false")
    monkeypatch.setenv("PWDERIVE_EXPORT_DIR", str(isolated_settings / "exports"))

    settings = AppSettings()
    assert settings.default_length == 20
    assert CharacterClass.SPECIAL not in settings.default_selection()
    assert settings.export_dir == isolated_settings / "exports"


@pytest.mark.parametrize("value", ["7", "129"])
def test_default_length_is_bounded(isolated_settings, monkeypatch, value):
    monkeypatch.setenv("PWDERIVE_DEFAULT_LENGTH", value)
    with pytest.raises(ValidationError):
        AppSettings()


def test_write_user_env_vars_updates_in_place(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text(
        "# old\nPWDERIVE_DEFAULT_LENGTH=16\nPWDERIVE_DEFAULT_VERSION='v3'\nOTHER_TOOL=keep\n",
        encoding="utf-8",
    )

    written = write_user_env_vars(
        {"PWDERIVE_DEFAULT_LENGTH": "24", "PWDERIVE_EXPORT_DIR": "/tmp/x", "PWDERIVE_LOG_FILE": None},
        env_path=env_path,
    )

    assert written == env_path
    assert env_path.read_text(encoding="utf-8").splitlines() == [
        "# old",
        "PWDERIVE_DEFAULT_LENGTH=24",
        "PWDERIVE_DEFAULT_VERSION='v3'",
        "OTHER_TOOL=keep",
        "PWDERIVE_EXPORT_DIR=/tmp/x",
    ]


def test_write_user_env_vars_creates_file_with_header(tmp_path):
    env_path = tmp_path / "new" / ".env"
    write_user_env_vars({"PWDERIVE_DEFAULT_VERSION": "v2"}, env_path=env_path)
    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["PWDERIVE_DEFAULT_VERSION=v2"]


def test_write_user_env_vars_rejects_multiline_values(tmp_path):
    with pytest.raises(ValueError):
        write_user_env_vars({"PWDERIVE_DEFAULT_VERSION": "v2\nINJECTED=1"}, env_path=tmp_path / ".env")
    assert not (tmp_path / ".env").exists()
