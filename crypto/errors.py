"""
Error taxonomy shared by the crypto primitives and the account layer.

Every failure raised by this project derives from `CredVaultError`, so a
caller can catch the whole family at once or branch on the concrete class.
Caller-side mistakes also subclass `ValueError` to keep them usable where a
plain `ValueError` is expected.
"""


class CredVaultError(Exception):
    """Base class for all errors raised by credvault."""


class InvalidInput(CredVaultError, ValueError):
    """A required argument was missing, empty or of the wrong kind."""


class MalformedEncoding(CredVaultError, ValueError):
    """Text that should be Base64 (or UTF-8 once decoded) is not."""


class MalformedKey(MalformedEncoding):
    """Key text does not decode to a usable AES-256 key."""


class AlgorithmUnavailable(CredVaultError):
    """The crypto backend cannot provide the requested algorithm."""


class CryptoFailure(CredVaultError):
    """The cipher engine rejected an operation (bad tag, bad padding, ...)."""
