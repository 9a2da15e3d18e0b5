"""
Authentication module.
"""

from fintrack.auth.password import verify_password, hash_password
from fintrack.auth.jwt import create_access_token, create_refresh_token, decode_token
from fintrack.auth.tokens import generate_token, hash_token
from fintrack.auth.dependencies import get_current_user, get_current_user_optional

__all__ = [
    "verify_password",
    "hash_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "generate_token",
    "hash_token",
    "get_current_user",
    "get_current_user_optional",
]
