"""User accounts: registration, authentication and storage."""

from .errors import AccountError, DuplicateEmail, DuplicateUsername, NotFound
from .hashing import Argon2Hasher, Sha256Hasher, create_hasher
from .manager import AccountManager
from .models import AccountState, User
from .storage import IStorage, JSONStorage, MemoryStorage

__all__ = [
    # Lifecycle
    "AccountManager",
    "User",
    "AccountState",
    # Storage
    "IStorage",
    "MemoryStorage",
    "JSONStorage",
    # Credential hashers
    "Sha256Hasher",
    "Argon2Hasher",
    "create_hasher",
    # Errors
    "AccountError",
    "DuplicateUsername",
    "DuplicateEmail",
    "NotFound",
]
