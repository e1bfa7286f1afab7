"""Salt generation and salted double-hash commitments.

A commitment is ``sha256_hex(sha256_hex(secret) + salt)``. Only the
commitment is ever sent to the server; the salt travels in the invite link.
"""

from __future__ import annotations

import hashlib
import secrets

from secretmatch.core.validation import SALT_HEX_LENGTH
from secretmatch.core.validation import validate_salt


def generate_salt() -> str:
    """Return 128 random bits as lowercase hex."""
    return secrets.token_hex(SALT_HEX_LENGTH // 2)


def sha256_hex(message: str) -> str:
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def normalize_secret(raw_secret: str) -> str:
    """Trim surrounding whitespace so copy/paste noise does not flip a match."""
    return raw_secret.strip()


def compute_commitment(secret: str, salt: str) -> str:
    """Return the salted double hash of the normalized secret."""
    validate_salt(salt)
    return sha256_hex(sha256_hex(normalize_secret(secret)) + salt)
