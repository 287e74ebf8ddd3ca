from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from datetime import timedelta
import logging

from ....db.session import get_session
from ....models.user import User
from ....schemas.user import Token, UserCreate, UserRead, UserLogin
from ....core.security import create_access_token, get_password_hash, verify_password
from ....core.config import settings
from ...deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(user_create: UserCreate, session: Session = Depends(get_session)):
    email = user_create.email.strip().lower()

    # Check if user exists
    user = session.exec(select(User).where(User.email == email)).first()
    if user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    db_user = User(
        email=email,
        password_hash=get_password_hash(user_create.password),
        full_name=user_create.full_name.strip()
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)
    logger.info("Registered user %s", db_user.id)
    return db_user

@router.post("/login", response_model=Token)
def login(user_credentials: UserLogin, session: Session = Depends(get_session)):
    statement = select(User).where(User.email == user_credentials.email.strip().lower())
    user = session.exec(statement).first()

    # Same answer for unknown email and wrong password
    if not user or not verify_password(user_credentials.password, user.password_hash):
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": user.email}, expires_delta=access_token_expires
    )

    return Token(access_token=access_token, token_type="bearer")

@router.get("/me", response_model=UserRead)
def get_current_user_profile(current_user: User = Depends(get_current_user)):
    return current_user
