"""
One-way digests and Base64 text helpers.

Digests are rendered as lowercase hex. The algorithm is always passed in
explicitly so call sites show what they rely on:

    hash_text("secret", HashAlgorithm.PRIMARY)   # 64 hex chars (SHA-256)
    hash_text("secret", HashAlgorithm.LEGACY)    # 32 hex chars (MD5, deprecated)

No salt is added here. Salting belongs to the caller (see accounts.hashing).
"""

import base64
import binascii
import logging
import warnings
from enum import Enum

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

from .errors import AlgorithmUnavailable, InvalidInput, MalformedEncoding

logger = logging.getLogger(__name__)


class HashAlgorithm(Enum):
    PRIMARY = "sha256"
    LEGACY = "md5"  # backward compatibility only, not for new security use


_HASH_FACTORIES = {
    HashAlgorithm.PRIMARY: hashes.SHA256,
    HashAlgorithm.LEGACY: hashes.MD5,
}


def hash_text(text: str, algorithm: HashAlgorithm) -> str:
    """
    Hash UTF-8 text and return the lowercase hex digest.

    Args:
        text: Non-empty input string
        algorithm: Which digest to compute

    Raises:
        InvalidInput: text is None/empty or algorithm is not a HashAlgorithm
        AlgorithmUnavailable: the backend does not support the algorithm
    """
    if not isinstance(text, str) or not text:
        raise InvalidInput("Input cannot be null or empty")
    if not isinstance(algorithm, HashAlgorithm):
        raise InvalidInput(f"Unknown hash algorithm: {algorithm!r}")

    if algorithm is HashAlgorithm.LEGACY:
        warnings.warn(
            "MD5 digests are insecure; use HashAlgorithm.PRIMARY",
            DeprecationWarning,
            stacklevel=2,
        )

    try:
        digest = hashes.Hash(_HASH_FACTORIES[algorithm]())
    except UnsupportedAlgorithm as exc:
        logger.error("Hash algorithm %s unavailable: %s", algorithm.value, exc)
        raise AlgorithmUnavailable(f"{algorithm.value} is not supported by this backend") from exc

    digest.update(text.encode("utf-8"))
    return digest.finalize().hex()


def sha256(text: str) -> str:
    """SHA-256 hex digest of text."""
    return hash_text(text, HashAlgorithm.PRIMARY)


def md5(text: str) -> str:
    """MD5 hex digest of text. Deprecated: kept for reading old data."""
    return hash_text(text, HashAlgorithm.LEGACY)


def encode_base64(text: str) -> str:
    """Base64-encode the UTF-8 bytes of text (standard alphabet, padded)."""
    if text is None:
        raise InvalidInput("Input cannot be null")
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode_base64(encoded: str) -> str:
    """
    Decode Base64 text back into a UTF-8 string.

    Raises MalformedEncoding on anything that is not strict, padded Base64
    or whose bytes are not valid UTF-8.
    """
    if encoded is None:
        raise InvalidInput("Encoded string cannot be null")
    try:
        raw = base64.b64decode(encoded, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise MalformedEncoding("Base64 decoding failed") from exc
