# barbershop/routers/users_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from barbershop.db import get_session
from barbershop.models import User
from barbershop.schemas import Token, UserCreate, UserPublic
from barbershop.auth import create_access_token, get_current_user, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["users"],
)


@router.post("/auth/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    # OAuth2 "password" flow carries the email in the username field
    user = session.exec(
        select(User).where(User.email == form_data.username)
    ).first()

    if user is None or not verify_password(form_data.password, user.password_hash):
        logger.info("Failed login for %s", form_data.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": user.email})
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserPublic)
def me(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    return session.get(User, current_user["id"])


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    session: Session = Depends(get_session),
):
    # 1) Check if email already exists
    existing = session.exec(
        select(User).where(User.email == user.email)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    # 2) Create customer in DB; operators are provisioned out of band
    db_user = User(
        email=user.email,
        password_hash=hash_password(user.password),
        role="user",
        name=user.name,
        phone=user.phone,
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)  # fills db_user.id

    return db_user
