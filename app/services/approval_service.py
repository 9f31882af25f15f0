import logging
from typing import Optional

from fastapi import HTTPException
from sqlmodel import Session, select

from app.models.approved_email import ApprovedEmail
from app.models.user import User

logger = logging.getLogger(__name__)


def resolve_role(session: Session, email: str) -> Optional[str]:
    """Role the email is approved for, or None. One approval row per email."""
    approved = session.exec(
        select(ApprovedEmail)
        .where(ApprovedEmail.email == email.lower())
        .where(ApprovedEmail.is_active == True)  # noqa: E712
    ).first()
    return approved.role if approved else None


def add_approved_email(session: Session, email: str, role: str, added_by: User) -> ApprovedEmail:
    email = email.lower()
    existing = session.exec(
        select(ApprovedEmail).where(ApprovedEmail.email == email)
    ).first()
    if existing:
        raise HTTPException(400, "Email already approved")

    approved = ApprovedEmail(email=email, role=role, added_by_id=added_by.id)
    session.add(approved)
    session.commit()
    session.refresh(approved)

    logger.info(f"Approved {email} as {role} (by user {added_by.id})")
    return approved


def remove_approved_email(session: Session, approved_id: int):
    approved = session.get(ApprovedEmail, approved_id)
    if not approved:
        raise HTTPException(404, "Approved email not found")

    session.delete(approved)
    session.commit()
    logger.info(f"Removed approval for {approved.email}")
