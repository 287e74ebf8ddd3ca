from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session, select
from typing import Optional
import logging
import uuid

from ..core.exceptions import AuthenticationRequired
from ..core.security import decode_access_token, verify_csrf_token
from ..db.session import get_session
from ..models.user import User

logger = logging.getLogger(__name__)

# auto_error=False: a missing header means "no principal", not an immediate 403
security = HTTPBearer(auto_error=False)


def resolve_current_owner(
    token: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: Session = Depends(get_session),
) -> Optional[uuid.UUID]:
    if token is None:
        return None

    email = decode_access_token(token.credentials)
    if email is None:
        logger.debug("Ignoring invalid bearer token")
        return None

    owner_id = session.exec(select(User.id).where(User.email == email)).first()
    if owner_id is None:
        logger.debug("Bearer token names unknown user %s", email)
    return owner_id


def require_owner(owner_id: Optional[uuid.UUID] = Depends(resolve_current_owner)) -> uuid.UUID:
    if owner_id is None:
        raise AuthenticationRequired()
    return owner_id


def require_csrf_token(
    owner_id: uuid.UUID = Depends(require_owner),
    x_csrf_token: Optional[str] = Header(default=None),
) -> uuid.UUID:
    if not verify_csrf_token(x_csrf_token, owner_id):
        logger.info("Rejected mutating request without a valid anti-forgery token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing anti-forgery token",
        )
    return owner_id


def get_current_user(
    owner_id: uuid.UUID = Depends(require_owner),
    session: Session = Depends(get_session),
) -> User:
    user = session.get(User, owner_id)
    if user is None:
        raise AuthenticationRequired()
    return user
