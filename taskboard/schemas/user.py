from sqlmodel import SQLModel
from datetime import datetime
import uuid


class UserBase(SQLModel):
    email: str
    full_name: str


class UserCreate(UserBase):
    password: str


class UserRead(UserBase):
    id: uuid.UUID
    created_at: datetime


class UserLogin(SQLModel):
    email: str
    password: str


class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"
