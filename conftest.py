import pytest

from accounts.config import Settings
from accounts.manager import AccountManager
from accounts.storage import JSONStorage, MemoryStorage
from crypto.cipher import generate_key


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def json_storage(tmp_path):
    return JSONStorage(str(tmp_path / "users.json"))


@pytest.fixture
def accounts(storage, settings):
    return AccountManager(storage, settings=settings)


@pytest.fixture
def alice(accounts):
    return accounts.register("alice", "alice@example.com", "correct-pw")


@pytest.fixture
def key():
    return generate_key()
