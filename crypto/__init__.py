"""Cryptographic primitives: digests, Base64 helpers and AES encryption."""

from .cipher import CipherMode, decrypt, encrypt, generate_key
from .errors import (
    AlgorithmUnavailable,
    CredVaultError,
    CryptoFailure,
    InvalidInput,
    MalformedEncoding,
    MalformedKey,
)
from .hashing import (
    HashAlgorithm,
    decode_base64,
    encode_base64,
    hash_text,
    md5,
    sha256,
)

__all__ = [
    # Hashing
    "HashAlgorithm",
    "hash_text",
    "sha256",
    "md5",
    "encode_base64",
    "decode_base64",
    # Symmetric cipher
    "CipherMode",
    "generate_key",
    "encrypt",
    "decrypt",
    # Errors
    "CredVaultError",
    "InvalidInput",
    "MalformedEncoding",
    "MalformedKey",
    "AlgorithmUnavailable",
    "CryptoFailure",
]
