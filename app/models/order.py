from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, JSON
from typing import List, Optional
from datetime import datetime

from app.models.order_item import OrderItem


class Order(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    shipping_address: dict = Field(sa_column=Column(JSON, nullable=False))
    contact_info: dict = Field(sa_column=Column(JSON, nullable=False))
    payment_method: str = Field(default="Credit Card")

    items_price: float = 0.0
    tax_price: float = 0.0
    shipping_price: float = 0.0
    total_price: float = 0.0

    status: str = Field(default="pending", index=True)
    assigned_rider_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)

    paid_at: Optional[datetime] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    notes: Optional[str] = None
    tracking_number: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    items: List["OrderItem"] = Relationship(back_populates="order")
