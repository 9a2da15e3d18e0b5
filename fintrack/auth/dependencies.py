"""
FastAPI dependencies for authentication.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from fintrack.db.database import get_db
from fintrack.db.models import User
from fintrack.auth.jwt import decode_token, ACCESS


def get_token_from_request(request: Request) -> Optional[str]:
    """
    Extract JWT token from request.

    Checks the Authorization header (Bearer token) first, then the
    access_token cookie.
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]

    return request.cookies.get("access_token")


async def get_current_user_optional(
    request: Request,
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Get the current user if authenticated, None otherwise."""
    token = get_token_from_request(request)
    if not token:
        return None

    payload = decode_token(token)
    if not payload or payload.get("type") != ACCESS:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return db.query(User).filter(
        User.id == user_id,
        User.is_deleted == False,
        User.is_active == True,
    ).first()


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    """
    Get the current authenticated user.

    Raises HTTPException 401 if not authenticated.
    """
    user = await get_current_user_optional(request, db)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user
