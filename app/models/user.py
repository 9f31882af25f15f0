from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import Optional
from datetime import datetime


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    google_id: Optional[str] = Field(default=None, index=True)
    profile_picture: Optional[str] = None
    role: str = Field(default="customer", index=True)
    is_approved: bool = Field(default=False)

    # riders can be switched off by an admin; other roles ignore it
    is_active: bool = Field(default=True)

    phone: Optional[str] = None
    address: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
