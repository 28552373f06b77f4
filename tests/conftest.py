"""Shared test fixtures and helpers."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from barbershop.auth import create_access_token
from barbershop.db import get_session
from barbershop.deps import get_now
from barbershop.main import app
from barbershop.models import BlockedTime, Booking, Service, User, WorkingHours

# 2025-03-17 is a Monday
MONDAY = date(2025, 3, 17)
TUESDAY = date(2025, 3, 18)
NOW = datetime(2025, 3, 10, 8, 0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def client(engine, now):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_now] = lambda: now
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_user(
    session: Session,
    email: str = "customer@example.com",
    role: str = "user",
    name: Optional[str] = None,
    phone: Optional[str] = None,
) -> User:
    user = User(email=email, password_hash="!", role=role, name=name, phone=phone)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def add_service(
    session: Session,
    name: str = "Haircut",
    duration: int = 30,
    price: str = "25.00",
    is_active: bool = True,
) -> Service:
    service = Service(name=name, duration=duration, price=Decimal(price), is_active=is_active)
    session.add(service)
    session.commit()
    session.refresh(service)
    return service


def add_hours(
    session: Session,
    day: str = "monday",
    start: str = "09:00",
    end: str = "12:00",
    is_available: bool = True,
) -> WorkingHours:
    hours = WorkingHours(day_of_week=day, start_time=start, end_time=end, is_available=is_available)
    session.add(hours)
    session.commit()
    session.refresh(hours)
    return hours


def add_block(
    session: Session,
    on_date: date = MONDAY,
    start: Optional[str] = None,
    end: Optional[str] = None,
    is_all_day: bool = False,
    reason: Optional[str] = None,
) -> BlockedTime:
    block = BlockedTime(
        date=on_date, start_time=start, end_time=end, is_all_day=is_all_day, reason=reason
    )
    session.add(block)
    session.commit()
    session.refresh(block)
    return block


def add_booking(
    session: Session,
    service: Service,
    customer: User,
    start: str,
    end: str,
    on_date: date = MONDAY,
    status: str = "pending",
) -> Booking:
    booking = Booking(
        customer_id=customer.id,
        service_id=service.id,
        appointment_date=on_date,
        start_time=start,
        end_time=end,
        status=status,
        total_price=service.price,
    )
    session.add(booking)
    session.commit()
    session.refresh(booking)
    return booking


def auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}
