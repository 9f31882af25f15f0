import logging

from google.oauth2 import id_token
from google.auth.transport import requests
from app.config import settings
from app.schemas.auth_schemas import GoogleUserInfo
from typing import Optional

logger = logging.getLogger(__name__)


def verify_google_token(token: str) -> Optional[GoogleUserInfo]:
    try:
        id_info = id_token.verify_oauth2_token(
            token,
            requests.Request(),
            settings.google_client_id
        )
    except ValueError as e:
        logger.warning(f"Google token verification failed: {e}")
        return None

    if id_info.get("aud") != settings.google_client_id:
        logger.warning("Google token audience mismatch")
        return None

    return GoogleUserInfo(
        google_id=id_info["sub"],
        email=id_info["email"].lower(),
        name=id_info.get("name", "Google User"),
        picture=id_info.get("picture"),
    )
