"""Password hashing and access tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from passlib.context import CryptContext
from jose import ExpiredSignatureError, JWTError, jwt
from fastapi import HTTPException, status

from spherical.config import Settings

_pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str) -> str:
    return _pwd_ctx.hash(plain)


def verify_password(plain: str, hashed: Optional[str]) -> bool:
    """False for accounts without a stored hash."""
    if not hashed:
        return False
    return _pwd_ctx.verify(plain, hashed)


def create_access_token(
    claims: dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    issued = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {**claims, "iat": issued, "exp": issued + lifetime}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verified claims of `token`. Raises 401 when expired, forged or roleless."""
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError:
        raise _unauthorized("Invalid token")
    if not claims.get("sub") or not claims.get("role"):
        raise _unauthorized("Invalid token")
    return claims
