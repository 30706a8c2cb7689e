"""
Authentication and authorization dependencies.

Supports JWT auth (production) from either the ``Authorization`` header or the
``token`` cookie, with an ``X-User-Id`` header fallback when AUTH_MODE=demo.
"""

import os
import uuid
from fastapi import HTTPException, Header, Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from typing import Optional

from workfriar.database import get_db
from workfriar.services.auth import decode_access_token
from workfriar.models.user import User, ADMIN_ROLES, REVIEWER_ROLES

AUTH_MODE = os.getenv("AUTH_MODE", "jwt")  # "jwt" or "demo"

# Declares the bearer scheme in the OpenAPI document; missing headers fall through to the cookie.
bearer_scheme = HTTPBearer(auto_error=False)


def _as_uuid(value) -> uuid.UUID:
    if value is None:
        raise ValueError("None is not a UUID")
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def _load_user(db: Session, user_id) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user or user.is_active is False:
        raise HTTPException(status_code=401, detail="User not found or disabled")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token: Optional[str] = Cookie(default=None),
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller from a Bearer token (header first, then cookie)."""
    raw = credentials.credentials if credentials else token
    if raw:
        jwt_token = raw.removeprefix("Bearer ").strip()
        payload = decode_access_token(jwt_token) if jwt_token else None
        if not payload:
            raise HTTPException(status_code=401, detail="Unauthorized")

        sub = payload.get("sub")
        if not sub:
            raise HTTPException(status_code=401, detail="Invalid token payload")

        try:
            user_uuid = _as_uuid(sub)
        except ValueError:
            raise HTTPException(status_code=401, detail="Invalid token subject (user id)")

        return _load_user(db, user_uuid)

    if AUTH_MODE == "demo" and x_user_id:
        try:
            return _load_user(db, _as_uuid(x_user_id))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid X-User-Id (must be UUID)")

    raise HTTPException(status_code=401, detail="Unauthorized")


def get_current_user_id(user: User = Depends(get_current_user)) -> uuid.UUID:
    return user.id


def require_reviewer(user: User = Depends(get_current_user)) -> User:
    """Require a role that may approve or reject timesheets."""
    if user.role_name not in REVIEWER_ROLES:
        raise HTTPException(status_code=403, detail="Reviewer access required")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Require Admin or Super Admin."""
    if user.role_name not in ADMIN_ROLES:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
