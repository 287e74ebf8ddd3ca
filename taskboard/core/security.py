from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
import uuid
import jwt
from passlib.context import CryptContext
from .config import settings

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

CSRF_PURPOSE = "csrf"

# JWT token functions
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> Optional[str]:
    """Return the subject of a valid access token, or None."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.exceptions.PyJWTError:
        return None
    # Anti-forgery tokens are signed with the same key; never accept one as a login.
    if payload.get("purpose") is not None:
        return None
    return payload.get("sub")


def create_csrf_token(owner_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Anti-forgery token bound to one owner, handed out with every form."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.CSRF_TOKEN_EXPIRE_MINUTES)
    return jwt.encode(
        {
            "sub": str(owner_id),
            "purpose": CSRF_PURPOSE,
            "exp": datetime.now(timezone.utc) + expires_delta,
        },
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def verify_csrf_token(token: Optional[str], owner_id: uuid.UUID) -> bool:
    if not token:
        return False
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.exceptions.PyJWTError:
        logger.debug("Rejected undecodable anti-forgery token")
        return False
    return payload.get("purpose") == CSRF_PURPOSE and payload.get("sub") == str(owner_id)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
