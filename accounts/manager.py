import logging
from typing import Optional, List

from email_validator import EmailNotValidError, validate_email

from crypto.errors import InvalidInput
from .config import Settings, get_settings
from .errors import DuplicateEmail, DuplicateUsername, NotFound
from .hashing import Sha256Hasher
from .models import User
from .storage import IStorage

logger = logging.getLogger(__name__)


class AccountManager:
    """
    Registration, authentication and lifecycle of user accounts.

    Passwords are turned into digests by `hasher` before anything reaches
    `storage`; the plaintext is never stored or kept on the instance.
    """

    def __init__(self, storage: IStorage, hasher=None, settings: Optional[Settings] = None):
        self.storage = storage
        self.hasher = hasher or Sha256Hasher()
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # input canonicalization
    # ------------------------------------------------------------------

    @staticmethod
    def _canon(username: str) -> str:
        return username.strip().lower()

    def _valid_username(self, username: str) -> str:
        if not isinstance(username, str) or not username.strip():
            raise InvalidInput("Username is required")
        username_c = self._canon(username)
        lo, hi = self.settings.USERNAME_MIN_LENGTH, self.settings.USERNAME_MAX_LENGTH
        if not lo <= len(username_c) <= hi:
            raise InvalidInput(f"Username must be between {lo} and {hi} characters")
        return username_c

    def _valid_email(self, email: str) -> str:
        if not isinstance(email, str) or not email.strip():
            raise InvalidInput("Email is required")
        try:
            info = validate_email(
                email.strip(),
                check_deliverability=self.settings.CHECK_EMAIL_DELIVERABILITY,
            )
        except EmailNotValidError as exc:
            raise InvalidInput(f"Invalid email format: {exc}") from exc
        return info.normalized

    @staticmethod
    def _require_password(password: str) -> None:
        if not isinstance(password, str) or not password:
            raise InvalidInput("Password is required")

    def _get_or_raise(self, user_id: str) -> User:
        user = self.storage.get_user_by_id(user_id)
        if user is None:
            raise NotFound(user_id)
        return user

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def register(self, username: str, email: str, password: str) -> User:
        """
        Create an active account.

        Both uniqueness checks run before the password is hashed or anything
        is written; the store enforces them again atomically on save.

        Raises:
            InvalidInput: bad username, email or empty password
            DuplicateUsername / DuplicateEmail: already taken
        """
        username_c = self._valid_username(username)
        email_n = self._valid_email(email)
        self._require_password(password)

        if self.storage.exists_by_username(username_c):
            logger.warning("Registration rejected: username %s taken", username_c)
            raise DuplicateUsername(username_c)
        if self.storage.exists_by_email(email_n):
            logger.warning("Registration rejected: email already in use (username %s)", username_c)
            raise DuplicateEmail(email_n)

        user = User.new(
            username=username_c,
            email=email_n,
            pwd_hash=self.hasher.hash(password),
        )
        stored = self.storage.save_user(user)
        logger.info("Registered user %s (%s)", stored.username, stored.user_id)
        return stored

    def authenticate(self, username: str, password: str) -> bool:
        """
        True only for an existing, enabled account whose password matches.

        Unknown usernames and wrong passwords both give False.
        """
        self._require_password(password)
        if not isinstance(username, str) or not username.strip():
            return False
        user = self.storage.get_user_by_username(self._canon(username))
        if user is None:
            return False
        return self.hasher.verify(user.pwd_hash, password) and user.enabled

    def update(self, user_id: str, *, email: Optional[str] = None, enabled: Optional[bool] = None) -> User:
        """
        Patch the email and/or enabled flag of an account.

        `updated_at` is refreshed even when nothing else changes.

        Raises:
            NotFound: no such user
            InvalidInput: malformed email
            DuplicateEmail: new email belongs to another account
        """
        user = self._get_or_raise(user_id)
        changes = {}

        if email is not None:
            email_n = self._valid_email(email)
            if email_n != user.email:
                if self.storage.exists_by_email(email_n):
                    raise DuplicateEmail(email_n)
                changes["email"] = email_n

        if enabled is not None:
            changes["enabled"] = bool(enabled)

        updated = self.storage.save_user(user.touched(**changes))
        logger.info("Updated user %s: %s", updated.user_id, sorted(changes) or "timestamp only")
        return updated

    def disable(self, user_id: str) -> User:
        """Active -> Disabled. Credentials stay valid but authentication fails."""
        return self.update(user_id, enabled=False)

    def enable(self, user_id: str) -> User:
        """Disabled -> Active."""
        return self.update(user_id, enabled=True)

    def delete(self, user_id: str) -> None:
        """Remove an account permanently. Deleting twice raises NotFound."""
        if not self.storage.exists_by_id(user_id):
            raise NotFound(user_id)
        self.storage.delete_user_by_id(user_id)
        logger.info("Deleted user %s", user_id)

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.storage.get_user_by_id(user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.storage.get_user_by_username(self._canon(username))

    def find_all(self) -> List[User]:
        """Get all registered users."""
        return self.storage.get_all_users()
