"""Salt and salted double-hash commitment tests."""

from __future__ import annotations

import hashlib

import pytest

from secretmatch.client.commitment import compute_commitment
from secretmatch.client.commitment import generate_salt
from secretmatch.core.validation import MalformedInputError
from secretmatch.core.validation import is_commitment
from secretmatch.core.validation import is_salt


def test_generate_salt_is_128_bit_lowercase_hex() -> None:
    salts = {generate_salt() for _ in range(20)}

    assert len(salts) == 20
    assert all(is_salt(salt) and len(salt) == 32 for salt in salts)


def test_commitment_is_hash_of_hex_hash_plus_salt(salt: str) -> None:
    """Input: 'hello' + salt -> Output: sha256(sha256hex('hello') + salt) hex."""
    inner = hashlib.sha256(b"hello").hexdigest()
    expected = hashlib.sha256((inner + salt).encode("utf-8")).hexdigest()

    commitment = compute_commitment("hello", salt)

    assert commitment == expected
    assert is_commitment(commitment)


def test_commitment_equality_tracks_secret_equality(salt: str) -> None:
    assert compute_commitment("hello", salt) == compute_commitment("hello", salt)
    assert compute_commitment("hello", salt) != compute_commitment("world", salt)


def test_commitment_depends_on_salt() -> None:
    assert compute_commitment("hello", "a" * 32) != compute_commitment("hello", "b" * 32)


def test_commitment_hashes_unicode_as_utf8(salt: str) -> None:
    inner = hashlib.sha256("héllo ✓".encode("utf-8")).hexdigest()
    expected = hashlib.sha256((inner + salt).encode("utf-8")).hexdigest()

    assert compute_commitment("héllo ✓", salt) == expected


@pytest.mark.parametrize("bad_salt", ["", "ABCDEF0123456789ABCDEF0123456789", "0" * 31, "0" * 33])
def test_commitment_rejects_malformed_salt(bad_salt: str) -> None:
    with pytest.raises(MalformedInputError):
        compute_commitment("hello", bad_salt)
