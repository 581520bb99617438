"""
Tests for one-way digests, Base64 helpers and the credential hashers.
"""
import base64
import string

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

import crypto.hashing
from accounts.hashing import Argon2Hasher, Sha256Hasher, create_hasher
from crypto.errors import AlgorithmUnavailable, InvalidInput, MalformedEncoding
from crypto.hashing import HashAlgorithm, decode_base64, encode_base64, hash_text, md5, sha256


@pytest.mark.parametrize("text", ["a", "hello", "correct horse battery staple", "ünïcödé ✓", " "])
def test_primary_digest_is_64_lowercase_hex(text):
    digest = hash_text(text, HashAlgorithm.PRIMARY)
    assert len(digest) == 64
    assert set(digest) <= set(string.hexdigits.lower())
    assert digest == hash_text(text, HashAlgorithm.PRIMARY)


def test_known_vectors():
    assert sha256("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert sha256("hello") == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
    with pytest.warns(DeprecationWarning):
        assert md5("abc") == "900150983cd24fb0d6963f7d28e17f72"


def test_different_algorithms_differ():
    with pytest.warns(DeprecationWarning):
        legacy = hash_text("abc", HashAlgorithm.LEGACY)
    assert len(legacy) == 32
    assert legacy != hash_text("abc", HashAlgorithm.PRIMARY)


@pytest.mark.parametrize("bad", ["", None])
def test_empty_input_is_rejected(bad):
    with pytest.raises(InvalidInput):
        hash_text(bad, HashAlgorithm.PRIMARY)


def test_algorithm_must_be_enum_member():
    with pytest.raises(InvalidInput):
        hash_text("abc", "SHA-256")


def test_base64_helpers():
    assert encode_base64("Hello World") == "SGVsbG8gV29ybGQ="
    assert decode_base64("SGVsbG8gV29ybGQ=") == "Hello World"
    assert encode_base64("") == ""
    assert decode_base64(encode_base64("한글 ✓")) == "한글 ✓"


@pytest.mark.parametrize("bad", ["not base64!", "SGVsbG8", base64.b64encode(b"\xff\xfe").decode()])
def test_decode_base64_rejects_malformed(bad):
    with pytest.raises(MalformedEncoding):
        decode_base64(bad)


def test_base64_helpers_reject_none():
    with pytest.raises(InvalidInput):
        encode_base64(None)
    with pytest.raises(InvalidInput):
        decode_base64(None)


def test_sha256_hasher_matches_primary_digest():
    hasher = Sha256Hasher()
    stored = hasher.hash("pw")
    assert stored == sha256("pw")
    assert hasher.verify(stored, "pw")
    assert not hasher.verify(stored, "PW")


def test_argon2_hasher_salts_and_verifies():
    hasher = Argon2Hasher()
    first, second = hasher.hash("pw"), hasher.hash("pw")
    assert first.startswith("$argon2")
    assert first != second
    assert hasher.verify(first, "pw")
    assert not hasher.verify(first, "nope")


def test_argon2_hasher_accepts_legacy_digests():
    hasher = Argon2Hasher()
    assert hasher.verify(sha256("pw"), "pw")
    assert not hasher.verify(sha256("pw"), "other")


def test_argon2_hasher_rejects_empty_password():
    with pytest.raises(InvalidInput):
        Argon2Hasher().hash("")


def test_create_hasher():
    assert isinstance(create_hasher("sha256"), Sha256Hasher)
    assert isinstance(create_hasher("argon2"), Argon2Hasher)
    with pytest.raises(ValueError):
        create_hasher("bcrypt")


def test_unsupported_backend_algorithm(monkeypatch):
    def unavailable():
        raise UnsupportedAlgorithm("sha256 disabled")

    monkeypatch.setitem(crypto.hashing._HASH_FACTORIES, HashAlgorithm.PRIMARY, unavailable)
    with pytest.raises(AlgorithmUnavailable) as excinfo:
        hash_text("a", HashAlgorithm.PRIMARY)
    assert isinstance(excinfo.value.__cause__, UnsupportedAlgorithm)


def test_sha256_hasher_rejects_non_ascii_stored_hash():
    assert Sha256Hasher().verify("é" * 64, "pw") is False


@pytest.mark.parametrize(
    "stored",
    ["not-a-hash", "900150983cd24fb0d6963f7d28e17f72", sha256("pw").upper(), "$argon2id$corrupted", "é" * 64],
)
def test_argon2_hasher_unreadable_stored_hash_is_a_mismatch(stored):
    assert Argon2Hasher().verify(stored, "pw") is False
