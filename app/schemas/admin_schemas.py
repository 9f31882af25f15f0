from pydantic import BaseModel, EmailStr

from app.constants.roles import UserRole


class ApprovedEmailCreate(BaseModel):
    email: EmailStr
    role: UserRole


class RiderStatusUpdate(BaseModel):
    isActive: bool
