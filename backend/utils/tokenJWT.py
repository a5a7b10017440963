# utils/tokenJWT.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.users import User
from utils.errors import Unauthorized, Forbidden

# auto_error=False so a missing header is reported through our own 401
bearer_scheme = HTTPBearer(auto_error=False)


# Generate a signed access token; `sub` carries the user id
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def token_for_user(user: User) -> str:
    return create_access_token(data={"sub": str(user.id), "admin": bool(user.is_admin)})


# Resolve the caller from the bearer token
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise Unauthorized("Not authenticated")

    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise Unauthorized("Could not validate credentials")

    user = db.get(User, user_id)
    if user is None:
        raise Unauthorized("Could not validate credentials")
    if not user.is_active:
        raise Forbidden("Account is inactive")
    return user


def ensure_admin(user: User) -> User:
    if not user.is_admin:
        raise Forbidden("Admin access required")
    return user


# Dependency for admin-only routes
def require_admin(current_user: User = Depends(get_current_user)) -> User:
    return ensure_admin(current_user)
