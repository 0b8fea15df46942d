from jose import jwt, JWTError
from datetime import timedelta
from typing import Any, Dict, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session
from tutorhub.config import settings
from tutorhub.database import get_session
from tutorhub.models.user import User
from tutorhub.utils.dates import utcnow

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def create_access_token(claims: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``claims`` plus an ``exp``; the user id travels as ``user_id``."""
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {**claims, "exp": utcnow() + lifetime}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def user_id_from_claims(payload: Dict[str, Any]) -> int:
    raw = payload.get("user_id") or payload.get("sub")
    if raw is None:
        raise _unauthorized("Invalid token payload")

    try:
        return int(raw)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> User:
    payload = decode_access_token(token)
    if payload is None:
        raise _unauthorized("Could not validate credentials")

    user = session.get(User, user_id_from_claims(payload))
    if user is None:
        raise _unauthorized("User not found")

    return user
