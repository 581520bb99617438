from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


def _now_iso() -> str:
    """Consistent ISO-8601 timestamp (UTC, microsecond precision)."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


class AccountState(Enum):
    ACTIVE = "active"
    DISABLED = "disabled"
    DELETED = "deleted"  # terminal; never held by a stored record


@dataclass(frozen=True)
class User:
    # identity
    user_id: Optional[str]   # assigned by the store on first save
    username: str   # canonical (trimmed, lowercased)
    email: str      # normalized by email-validator
    pwd_hash: str   # credential digest, never the plaintext

    # lifecycle
    enabled: bool
    created_at: str   # ISO8601 "YYYY-MM-DDTHH:MM:SS.ffffffZ"
    updated_at: str

    @staticmethod
    def new(username: str, email: str, pwd_hash: str) -> "User":
        now = _now_iso()
        return User(
            user_id=None,
            username=username,
            email=email,
            pwd_hash=pwd_hash,
            enabled=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def state(self) -> AccountState:
        return AccountState.ACTIVE if self.enabled else AccountState.DISABLED

    def touched(self, **changes: Any) -> "User":
        """Copy with `changes` applied and `updated_at` refreshed."""
        updated_at = max(_now_iso(), self.created_at)
        return replace(self, updated_at=updated_at, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Build a User, ignoring keys this version does not know about."""
        known = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in known}
        filtered.setdefault("enabled", True)
        return cls(**filtered)
