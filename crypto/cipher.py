"""
AES-256 symmetric encryption for text payloads.

Keys and ciphertexts travel as Base64 text. Two modes are supported:

- CipherMode.GCM (default): a fresh 12-byte random nonce per call, stored as
  a prefix: nonce || ciphertext || tag. Encrypting the same text twice gives
  different output, and tampering is detected on decrypt.
- CipherMode.ECB_LEGACY: AES-ECB with PKCS#7 padding and no IV. It is
  deterministic and leaks plaintext patterns. Only use it to exchange data
  with systems that still produce it.
"""

import base64
import binascii
import logging
import os
from enum import Enum

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import CryptoFailure, InvalidInput, MalformedEncoding, MalformedKey

logger = logging.getLogger(__name__)

KEY_SIZE_BYTES = 32  # AES-256
NONCE_SIZE_BYTES = 12
TAG_SIZE_BYTES = 16


class CipherMode(Enum):
    GCM = "AES-256-GCM"
    ECB_LEGACY = "AES-256-ECB-PKCS7"


# ============================================================================
# Helpers
# ============================================================================

def _require_text(value: str, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{what} cannot be null or empty")


def _require_mode(mode: CipherMode) -> None:
    if not isinstance(mode, CipherMode):
        raise InvalidInput(f"Unknown cipher mode: {mode!r}")


def _decode_key(key_text: str) -> bytes:
    try:
        key = base64.b64decode(key_text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedKey("Secret key is not valid Base64") from exc
    if len(key) != KEY_SIZE_BYTES:
        raise MalformedKey(
            f"Secret key must be {KEY_SIZE_BYTES * 8} bits, got {len(key) * 8}"
        )
    return key


def _ecb_encrypt(data: bytes, key: bytes) -> bytes:
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(data) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def _ecb_decrypt(data: bytes, key: bytes) -> bytes:
    decryptor = Cipher(algorithms.AES(key), modes.ECB()).decryptor()
    padded = decryptor.update(data) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    return unpadder.update(padded) + unpadder.finalize()


def _gcm_encrypt(data: bytes, key: bytes) -> bytes:
    nonce = os.urandom(NONCE_SIZE_BYTES)
    return nonce + AESGCM(key).encrypt(nonce, data, None)


def _gcm_decrypt(payload: bytes, key: bytes) -> bytes:
    if len(payload) < NONCE_SIZE_BYTES + TAG_SIZE_BYTES:
        raise ValueError("ciphertext is shorter than nonce and tag")
    nonce, ct_with_tag = payload[:NONCE_SIZE_BYTES], payload[NONCE_SIZE_BYTES:]
    return AESGCM(key).decrypt(nonce, ct_with_tag, None)


# ============================================================================
# Public operations
# ============================================================================

def generate_key() -> str:
    """Return a fresh random 256-bit AES key as Base64 text."""
    return base64.b64encode(os.urandom(KEY_SIZE_BYTES)).decode("ascii")


def encrypt(plaintext: str, key_text: str, mode: CipherMode = CipherMode.GCM) -> str:
    """
    Encrypt text under a Base64 AES-256 key.

    Args:
        plaintext: Non-empty text to protect
        key_text: Base64 key as produced by generate_key()
        mode: CipherMode.GCM unless legacy interop is required

    Returns:
        Base64 ciphertext

    Raises:
        InvalidInput, MalformedKey, CryptoFailure
    """
    _require_text(plaintext, "Plain text")
    _require_text(key_text, "Secret key")
    _require_mode(mode)
    key = _decode_key(key_text)

    data = plaintext.encode("utf-8")
    try:
        if mode is CipherMode.GCM:
            sealed = _gcm_encrypt(data, key)
        else:
            sealed = _ecb_encrypt(data, key)
    except ValueError as exc:
        logger.error("Encryption failed (%s): %s", mode.value, exc)
        raise CryptoFailure("Encryption failed") from exc
    return base64.b64encode(sealed).decode("ascii")


def decrypt(ciphertext_text: str, key_text: str, mode: CipherMode = CipherMode.GCM) -> str:
    """
    Decrypt Base64 ciphertext produced by encrypt() with the same key and mode.

    Raises:
        InvalidInput: empty/None arguments or unknown mode
        MalformedKey: key is not Base64 or not 256 bits
        MalformedEncoding: ciphertext is not Base64
        CryptoFailure: wrong key, tampered or truncated data, bad padding
    """
    _require_text(ciphertext_text, "Encrypted text")
    _require_text(key_text, "Secret key")
    _require_mode(mode)
    key = _decode_key(key_text)

    try:
        payload = base64.b64decode(ciphertext_text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedEncoding("Encrypted text is not valid Base64") from exc

    try:
        if mode is CipherMode.GCM:
            data = _gcm_decrypt(payload, key)
        else:
            data = _ecb_decrypt(payload, key)
        return data.decode("utf-8")
    except (InvalidTag, ValueError) as exc:
        logger.error("Decryption failed (%s): %s", mode.value, type(exc).__name__)
        raise CryptoFailure("Decryption failed") from exc
