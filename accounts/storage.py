from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional, Dict, Any, List, Iterable
import json, logging, os, tempfile, threading, uuid

from .errors import DuplicateEmail, DuplicateUsername, NotFound
from .models import User

logger = logging.getLogger(__name__)


def _check_unique(user: User, others: Iterable[User]) -> None:
    """Reject `user` if another record already holds its username or email."""
    for other in others:
        if other.user_id == user.user_id:
            continue
        if other.username == user.username:
            raise DuplicateUsername(user.username)
        if other.email == user.email:
            raise DuplicateEmail(user.email)


class IStorage(ABC):
    """
    Durable keyed storage for user records.

    `save_user` inserts when `user_id` is None (assigning a new id) and
    updates otherwise. It must enforce username/email uniqueness atomically
    so that two racing registrations can never both be stored.
    """

    @abstractmethod
    def exists_by_username(self, username: str) -> bool: ...
    @abstractmethod
    def exists_by_email(self, email: str) -> bool: ...
    @abstractmethod
    def exists_by_id(self, user_id: str) -> bool: ...
    @abstractmethod
    def get_user_by_id(self, user_id: str) -> Optional[User]: ...
    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...
    @abstractmethod
    def get_all_users(self) -> List[User]: ...
    @abstractmethod
    def save_user(self, user: User) -> User: ...
    @abstractmethod
    def delete_user_by_id(self, user_id: str) -> None: ...


class MemoryStorage(IStorage):
    """Process-local store, handy for tests and short-lived tools."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    def exists_by_username(self, username: str) -> bool:
        return self.get_user_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        with self._lock:
            return any(u.email == email for u in self._users.values())

    def exists_by_id(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._users

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for u in self._users.values():
                if u.username == username:
                    return u
        return None

    def get_all_users(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def save_user(self, user: User) -> User:
        with self._lock:
            if user.user_id is None:
                user = replace(user, user_id=str(uuid.uuid4()))
            elif user.user_id not in self._users:
                raise NotFound(user.user_id)
            _check_unique(user, self._users.values())
            self._users[user.user_id] = user
            return user

    def delete_user_by_id(self, user_id: str) -> None:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                raise NotFound(user_id)


class JSONStorage(IStorage):
    def __init__(self, path: str = "users.json"):
        self.path = path
        self._lock = threading.Lock()
        if not os.path.exists(self.path):
            with open(self.path, "w") as f:
                json.dump({"users": []}, f)

    def _load(self) -> Dict[str, Any]:
        with open(self.path, "r") as f:
            return json.load(f)

    def _save(self, data: Dict[str, Any]) -> None:
        # atomic-ish write to avoid corruption
        fd, tmp = tempfile.mkstemp(prefix="users.", suffix=".tmp", dir=os.path.dirname(self.path) or ".")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)
        finally:
            if os.path.exists(tmp):
                try: os.remove(tmp)
                except OSError: pass

    def _users(self) -> List[User]:
        return [User.from_dict(u) for u in self._load()["users"]]

    def exists_by_username(self, username: str) -> bool:
        return self.get_user_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        with self._lock:
            return any(u.email == email for u in self._users())

    def exists_by_id(self, user_id: str) -> bool:
        return self.get_user_by_id(user_id) is not None

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            for u in self._users():
                if u.user_id == user_id:
                    return u
        return None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for u in self._users():
                if u.username == username:
                    return u
        return None

    def get_all_users(self) -> List[User]:
        with self._lock:
            return self._users()

    def save_user(self, user: User) -> User:
        with self._lock:
            users = self._users()
            if user.user_id is None:
                user = replace(user, user_id=str(uuid.uuid4()))
                users.append(user)
            else:
                for i, existing in enumerate(users):
                    if existing.user_id == user.user_id:
                        users[i] = user
                        break
                else:
                    raise NotFound(user.user_id)
            _check_unique(user, users)
            self._save({"users": [u.to_dict() for u in users]})
            logger.debug("Wrote %d user record(s) to %s", len(users), self.path)
            return user

    def delete_user_by_id(self, user_id: str) -> None:
        with self._lock:
            users = self._users()
            remaining = [u for u in users if u.user_id != user_id]
            if len(remaining) == len(users):
                raise NotFound(user_id)
            self._save({"users": [u.to_dict() for u in remaining]})
