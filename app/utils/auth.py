# app/utils/auth.py

import bcrypt
import jwt
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.db.get_db import get_db
from app.models.user import User
from app.models.enums import DeletedStatus
from app.core.config import ACCESS_TOKEN_EXPIRE_SECONDS, ALGORITHM, SECRET_KEY
from app.utils.helpers import parse_uuid

security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Salted bcrypt hash; a new salt is drawn on every call."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Constant-time bcrypt comparison. An empty or unreadable stored hash never matches."""
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except ValueError:
        return False


def create_access_token(user: User, expires_delta: timedelta = None) -> str:
    """
    Generate JWT token for user
    Claims: {"sub": <user id>, "email": ..., "name": <display name>}
    """
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(seconds=ACCESS_TOKEN_EXPIRE_SECONDS))
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.display_name,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")
    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the bearer token to a live account.
    Token validity and account existence are checked separately: a valid
    token whose account is gone or soft deleted yields 404.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail="Unauthorized")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = parse_uuid(payload["sub"])
    except HTTPException:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.query(User).filter(
        User.id == user_id,
        User.status_deleted == DeletedStatus.not_deleted.value
    ).first()

    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return user
