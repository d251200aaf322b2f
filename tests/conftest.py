import pytest
from loguru import logger

from core.domain.charsets import CharacterClass
from core.domain.errors import DerivationError


class RecordingKeyDeriver:
    """Returns fixed key material and remembers what it handed out."""

    def __init__(self, material: bytes = bytes(range(32))):
        self.material = material
        self.calls: list[tuple[str, str, str, str]] = []
        self.issued: list[bytearray] = []

    def derive_key(self, master_secret, pepper, context, version):
        self.calls.append((master_secret, pepper, context, version))
        buffer = bytearray(self.material)
        self.issued.append(buffer)
        return buffer


class FailingKeyDeriver:
    def __init__(self):
        self.calls = 0

    def derive_key(self, master_secret, pepper, context, version):
        self.calls += 1
        raise DerivationError("backend unavailable")


@pytest.fixture(autouse=True)
def quiet_logging():
    logger.remove()
    yield
    logger.remove()


@pytest.fixture
def recording_kdf():
    return RecordingKeyDeriver()


@pytest.fixture
def failing_kdf():
    return FailingKeyDeriver()


@pytest.fixture
def all_classes():
    return frozenset(CharacterClass)


@pytest.fixture
def isolated_settings(monkeypatch, tmp_path):
    """Pin settings so a developer's .env files cannot leak into tests."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("core.config.get_user_env_file", lambda: tmp_path / "user.env")
    monkeypatch.setenv("PWDERIVE_DEFAULT_LENGTH", "12")
    monkeypatch.setenv("PWDERIVE_DEFAULT_VERSION", "v1")
    for name in ("UPPERCASE", "LOWERCASE", "DIGITS", "SPECIAL"):
        monkeypatch.setenv(f"PWDERIVE_DEFAULT_{name}", "true")
    monkeypatch.delenv("PWDERIVE_EXPORT_DIR", raising=False)
    monkeypatch.delenv("PWDERIVE_LOG_FILE", raising=False)
    monkeypatch.setenv("PWDERIVE_LOG_LEVEL", "WARNING")
    return tmp_path
