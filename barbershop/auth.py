# barbershop/auth.py

from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext


from sqlmodel import Session, select
from barbershop.config import settings
from barbershop.db import get_session
from barbershop.models import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def create_access_token(data: dict, expires_minutes: int = 0) -> str:
    expires_minutes = expires_minutes or settings.auth.access_token_expire_minutes
    to_encode = data.copy()
    to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode(to_encode, settings.auth.secret_key, algorithm=settings.auth.algorithm)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    # accounts seeded without a usable hash can never log in
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> dict:
    """Resolve the bearer token to ``{"id", "email", "role"}``.

    The role comes from the database row, not from the token claims.
    """
    try:
        payload = jwt.decode(
            token, settings.auth.secret_key, algorithms=[settings.auth.algorithm]
        )
    except JWTError:
        raise _unauthorized("Invalid token")

    email = payload.get("sub")
    if email is None:
        raise _unauthorized("Invalid token")

    user = session.exec(
        select(User).where(User.email == email)
    ).first()
    if user is None:
        raise _unauthorized("User not found")

    return {"id": user.id, "email": user.email, "role": user.role}
