from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class ApprovedEmail(SQLModel, table=True):
    __tablename__ = "approved_email"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    role: str
    is_active: bool = Field(default=True)
    added_by_id: Optional[int] = Field(default=None, foreign_key="user.id")
    created_at: datetime = Field(default_factory=datetime.utcnow)
