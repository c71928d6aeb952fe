from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings

BCRYPT_MAX_PASSWORD_BYTES = 72

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Extracts "Authorization: Bearer <token>"; the tokens themselves are JWTs issued by /api/login
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login")


def password_exceeds_bcrypt_limit(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES


def _check_password_length(password: str) -> None:
    if password_exceeds_bcrypt_limit(password):
        raise ValueError("Password must not exceed 72 bytes when UTF-8 encoded.")


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    # bcrypt only considers the first 72 bytes of the password; reject rather than truncate.
    _check_password_length(password)
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    _check_password_length(plain_password)
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict[str, Any] | None:
    """Verify and decode a JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def token_subject(token: str) -> int | None:
    """Return the user id in a valid token's `sub` claim, or None."""
    payload = verify_token(token)
    if payload is None:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.isdigit():
        return None
    return int(subject)
