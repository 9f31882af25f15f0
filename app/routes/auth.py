from datetime import datetime
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
from app.database import get_session
from app.models.user import User
from app.schemas.auth_schemas import ApprovalCheckRequest, GoogleTokenRequest
from app.services.approval_service import resolve_role
from app.utils.google_auth import verify_google_token
from app.utils.responses import create_response
from app.utils.serializers import format_user
from app.utils.token import create_user_token, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()


# -------- AUTH ROUTES --------

@router.post("/google")
def google_login(request: GoogleTokenRequest, session: Session = Depends(get_session)):
    google_user = verify_google_token(request.token)
    if not google_user:
        raise HTTPException(401, "Invalid Google token")

    role = resolve_role(session, google_user.email)
    if role is None:
        raise HTTPException(403, "Email not approved for login")

    user = session.exec(select(User).where(User.google_id == google_user.google_id)).first()

    if not user:
        # link an account created before its first Google login
        user = session.exec(select(User).where(User.email == google_user.email)).first()

    if not user:
        user = User(
            name=google_user.name,
            email=google_user.email,
            google_id=google_user.google_id,
            profile_picture=google_user.picture,
        )
        logger.info(f"Creating user for {google_user.email} as {role}")

    user.google_id = google_user.google_id
    user.name = google_user.name or user.name
    user.profile_picture = user.profile_picture or google_user.picture
    user.role = role
    user.is_approved = True
    user.updated_at = datetime.utcnow()

    session.add(user)
    session.commit()
    session.refresh(user)

    return create_response(True, "Login successful", {
        "token": create_user_token(user),
        "user": format_user(user),
    })


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    return create_response(True, "User profile retrieved", format_user(current_user))


@router.post("/check-approval")
def check_email_approval(request: ApprovalCheckRequest, session: Session = Depends(get_session)):
    role = resolve_role(session, request.email)

    return create_response(True, "Email approval status retrieved", {
        "isApproved": role is not None,
        "role": role,
    })
