from crypto.errors import CredVaultError


class AccountError(CredVaultError):
    """Base class for account lifecycle failures."""


class DuplicateUsername(AccountError, ValueError):
    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class DuplicateEmail(AccountError, ValueError):
    def __init__(self, email: str):
        super().__init__(f"Email already exists: {email}")
        self.email = email


class NotFound(AccountError, LookupError):
    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id
