"""
Tests for environment-driven settings.
"""
import pytest
from pydantic import ValidationError

from accounts.config import Settings
from accounts.manager import AccountManager
from accounts.storage import MemoryStorage
from crypto.errors import InvalidInput


def test_defaults(monkeypatch):
    for name in ("USERS_FILE", "LOG_LEVEL", "PASSWORD_SCHEME", "USERNAME_MIN_LENGTH", "USERNAME_MAX_LENGTH"):
        monkeypatch.delenv(f"CREDVAULT_{name}", raising=False)
    settings = Settings(_env_file=None)
    assert settings.USERS_FILE == "users.json"
    assert settings.PASSWORD_SCHEME == "sha256"
    assert (settings.USERNAME_MIN_LENGTH, settings.USERNAME_MAX_LENGTH) == (3, 50)
    assert settings.CHECK_EMAIL_DELIVERABILITY is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CREDVAULT_PASSWORD_SCHEME", "argon2")
    monkeypatch.setenv("CREDVAULT_LOG_LEVEL", " debug ")
    monkeypatch.setenv("CREDVAULT_USERNAME_MIN_LENGTH", "5")
    settings = Settings(_env_file=None)
    assert settings.PASSWORD_SCHEME == "argon2"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.USERNAME_MIN_LENGTH == 5


def test_unknown_scheme_rejected(monkeypatch):
    monkeypatch.setenv("CREDVAULT_PASSWORD_SCHEME", "plaintext")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_manager_honours_username_bounds():
    settings = Settings(_env_file=None, USERNAME_MIN_LENGTH=5, USERNAME_MAX_LENGTH=8)
    accounts = AccountManager(MemoryStorage(), settings=settings)
    with pytest.raises(InvalidInput):
        accounts.register("abcd", "abcd@example.com", "pw")
    with pytest.raises(InvalidInput):
        accounts.register("abcdefghi", "long@example.com", "pw")
    assert accounts.register("abcde", "abcde@example.com", "pw").username == "abcde"
