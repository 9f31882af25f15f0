from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

from app.constants.order_status import OrderStatus


class ShippingAddress(BaseModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zipCode: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


class ContactInfo(BaseModel):
    phone: str = Field(..., min_length=5)
    email: EmailStr


class OrderItemCreate(BaseModel):
    product: int
    variant: int
    quantity: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    orderItems: List[OrderItemCreate]
    shippingAddress: ShippingAddress
    contactInfo: ContactInfo
    paymentMethod: str = "Credit Card"
    notes: Optional[str] = None


class StatusUpdate(BaseModel):
    status: OrderStatus


class AssignRider(BaseModel):
    riderId: int
