import pytest
from argon2 import PasswordHasher

from ironcoder.auth import CredentialStore, passwords


@pytest.fixture
def fast_hasher():
    """Minimum-cost argon2 parameters; the real defaults take ~50ms per hash."""
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "users.txt"


@pytest.fixture
def store(store_path, fast_hasher):
    return CredentialStore(store_path, scheme=passwords.get_scheme(passwords.ARGON2, fast_hasher))


@pytest.fixture
def plain_store(store_path):
    return CredentialStore(store_path, scheme=passwords.get_scheme(passwords.PLAINTEXT))


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep settings and logs inside the test's tmp dir."""
    monkeypatch.setenv("IRONCODER_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "IRONCODER_CREDENTIALS_PATH",
        "IRONCODER_LOG_DIR",
        "IRONCODER_PARSE_MODE",
        "IRONCODER_PASSWORD_SCHEME",
        "IRONCODER_LOCKOUT_AFTER",
        "IRONCODER_LOCKOUT_SECONDS",
        "IRONCODER_FAILURE_WINDOW",
    ):
        monkeypatch.delenv(name, raising=False)
