import hmac
import re

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from crypto.hashing import HashAlgorithm, hash_text

_HEX_DIGEST = re.compile(r"[0-9a-f]{64}")


class Sha256Hasher:
    """Unsalted SHA-256 hex digest. Compatible with existing stored records."""

    scheme = "sha256"

    def hash(self, password: str) -> str:
        return hash_text(password, HashAlgorithm.PRIMARY)

    def verify(self, stored_hash: str, password: str) -> bool:
        candidate = hash_text(password, HashAlgorithm.PRIMARY)
        return hmac.compare_digest(candidate.encode("utf-8"), stored_hash.encode("utf-8"))


class Argon2Hasher:
    """
    Salted Argon2id hashing for new credentials.

    Still accepts legacy SHA-256 digests on verify so an existing store can
    be switched over without resetting every password.
    """

    scheme = "argon2"

    def __init__(self):
        self._ph = PasswordHasher()
        self._legacy = Sha256Hasher()

    def hash(self, password: str) -> str:
        """Create a secure hash for a new password."""
        # reuse the primitive's empty-input check
        hash_text(password, HashAlgorithm.PRIMARY)
        return self._ph.hash(password)

    def verify(self, stored_hash: str, password: str) -> bool:
        """Check a password attempt against the stored hash."""
        if _HEX_DIGEST.fullmatch(stored_hash):
            return self._legacy.verify(stored_hash, password)
        if not stored_hash.isascii():
            return False
        try:
            return self._ph.verify(stored_hash, password)
        except (VerificationError, InvalidHashError):
            # mismatch, or a stored value that is not a readable Argon2 hash
            return False


_HASHERS = {
    Sha256Hasher.scheme: Sha256Hasher,
    Argon2Hasher.scheme: Argon2Hasher,
}


def create_hasher(scheme: str = "sha256"):
    try:
        return _HASHERS[scheme]()
    except KeyError:
        raise ValueError(f"Unknown password scheme: {scheme!r}") from None
