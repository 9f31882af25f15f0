from jose import jwt, JWTError
from datetime import datetime, timedelta
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session
from app.config import settings
from app.database import get_session
from app.models.user import User

# the token itself is issued by POST /auth/google after Google verification
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/google")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    claims = dict(data)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims["exp"] = datetime.utcnow() + lifetime
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def create_user_token(user: User) -> str:
    """Session token for a signed-in user; carries the role it was issued for."""
    return create_access_token({"sub": str(user.id), "role": user.role})


def decode_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> User:
    """
    Resolve the bearer token to an approved user.

    The role is always read from the database, never from the token, so a
    role change by an admin applies on the very next request.
    """
    claims = decode_access_token(token)
    if claims is None:
        raise _unauthorized("Could not validate credentials")

    subject = claims.get("sub")
    if subject is None or not str(subject).isdigit():
        raise _unauthorized("Invalid token payload")

    user = session.get(User, int(subject))
    if user is None:
        raise _unauthorized("User not found")

    if not user.is_approved:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is not approved",
        )

    return user
