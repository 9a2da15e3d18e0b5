"""
Opaque token generation and hashing.

Used for password reset tokens and refresh token storage.
"""

import secrets
import hashlib


def generate_token(length: int = 32) -> str:
    """
    Generate a cryptographically secure random token.

    Args:
        length: Number of bytes (token will be 2x this in hex chars)
    """
    return secrets.token_hex(length)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a token, for storing refresh tokens."""
    return hashlib.sha256(token.encode()).hexdigest()
