from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, text
from datetime import datetime
import logging

from app.database import get_session
from app.utils.responses import create_response

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
def health_check(session: Session = Depends(get_session)):
    db_status = "ok"

    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database ping failed: {e}")
        db_status = "failed"

    return create_response(True, "Service is running", {
        "database": db_status,
        "timestamp": datetime.utcnow().isoformat(),
    })
