import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from tiger.config import settings
from tiger.db.session import get_db
from tiger.db.models.user import User

logger = logging.getLogger(__name__)

# Bearer token from the Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# 🔐 Issue a signed token whose subject is the user's email
def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": subject, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the token subject or raise 401."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.warning("JWT decode failed: %s", e)
        raise _unauthorized(f"Token is invalid: {e}")

    subject = payload.get("sub")
    if subject is None:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized()
    return subject


# 👤 Resolve the caller from the bearer token
def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    email = decode_access_token(token)
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        logger.warning("User not found in DB for email: %s", email)
        raise _unauthorized()
    return user
