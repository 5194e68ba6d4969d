from pathlib import Path

import pytest
from pydantic import ValidationError

from ironcoder import config
from ironcoder.auth import open_store


def test_defaults_under_data_dir(tmp_path):
    settings = config.load_settings()

    assert settings.credentials_path == tmp_path / "data" / "users.txt"
    assert settings.log_dir == tmp_path / "data" / "logs"
    assert settings.parse_mode == "permissive"
    assert settings.password_scheme == "argon2"
    assert settings.lockout_after == 5


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("IRONCODER_CREDENTIALS_PATH", str(tmp_path / "creds.txt"))
    monkeypatch.setenv("IRONCODER_PARSE_MODE", "STRICT")
    monkeypatch.setenv("IRONCODER_PASSWORD_SCHEME", "plaintext")
    monkeypatch.setenv("IRONCODER_LOCKOUT_AFTER", "3")

    settings = config.load_settings()

    assert settings.credentials_path == Path(tmp_path / "creds.txt")
    assert settings.parse_mode == "strict"
    assert settings.password_scheme == "plaintext"
    assert settings.lockout_after == 3


@pytest.mark.parametrize("name,value", [
    ("IRONCODER_PARSE_MODE", "lenient"),
    ("IRONCODER_PASSWORD_SCHEME", "md5"),
    ("IRONCODER_LOCKOUT_AFTER", "0"),
    ("IRONCODER_LOCKOUT_SECONDS", "soon"),
])
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        config.load_settings()


def test_open_store_uses_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("IRONCODER_CREDENTIALS_PATH", str(tmp_path / "creds.txt"))
    monkeypatch.setenv("IRONCODER_PASSWORD_SCHEME", "plaintext")

    store = open_store()
    store.register("alice", "pw1")

    assert (tmp_path / "creds.txt").read_text(encoding="utf-8") == "alice pw1\n"
