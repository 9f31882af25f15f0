from pydantic import BaseModel, EmailStr


class GoogleTokenRequest(BaseModel):
    token: str


class GoogleUserInfo(BaseModel):
    google_id: str
    email: str
    name: str
    picture: str | None = None


class ApprovalCheckRequest(BaseModel):
    email: EmailStr
