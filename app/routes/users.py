from datetime import datetime

from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from app.database import get_session
from app.dependencies.capabilities import require_admin
from app.models.user import User
from app.schemas.user_schemas import EmailCheck, ProfileUpdate
from app.services.rider_service import list_riders
from app.utils.responses import create_response
from app.utils.serializers import format_user, format_user_brief
from app.utils.token import get_current_user

router = APIRouter()


# -------- USER PROFILE --------

@router.patch("/profile")
def update_profile(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    if payload.name is not None:
        current_user.name = payload.name

    if payload.phone is not None:
        current_user.phone = payload.phone

    if payload.address is not None:
        current_user.address = payload.address.model_dump()

    current_user.updated_at = datetime.utcnow()
    session.add(current_user)
    session.commit()
    session.refresh(current_user)

    return create_response(True, "Profile updated successfully", format_user(current_user))


@router.post("/check-email")
def check_email(payload: EmailCheck, session: Session = Depends(get_session)):
    existing = session.exec(
        select(User).where(User.email == payload.email.lower())
    ).first()

    return create_response(True, "Email check successful", {"exists": existing is not None})


# -------- RIDERS (admin) --------

@router.get("/riders", dependencies=[Depends(require_admin)])
def get_riders(session: Session = Depends(get_session)):
    riders = list_riders(session)

    return create_response(True, "Riders retrieved successfully", [
        {**format_user_brief(r), "profilePicture": r.profile_picture, "isActive": r.is_active}
        for r in riders
    ])
