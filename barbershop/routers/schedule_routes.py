# barbershop/routers/schedule_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barbershop.db import get_session
from barbershop.deps import require_admin
from barbershop.models import BlockedTime, WorkingHours
from barbershop.schemas import (
    BlockedTimeCreate,
    BlockedTimePublic,
    DayOfWeek,
    WorkingHoursIn,
    WorkingHoursPublic,
)
from barbershop.timeutils import DAYS_OF_WEEK, normalize_time

router = APIRouter(
    tags=["schedule"],
    dependencies=[Depends(require_admin)],
)


@router.get("/working-hours", response_model=List[WorkingHoursPublic])
def list_working_hours(session: Session = Depends(get_session)):
    rows = session.exec(select(WorkingHours)).all()
    return sorted(rows, key=lambda h: DAYS_OF_WEEK.index(h.day_of_week))


@router.put("/working-hours/{day_of_week}", response_model=WorkingHoursPublic)
def set_working_hours(
    day_of_week: DayOfWeek,
    hours: WorkingHoursIn,
    session: Session = Depends(get_session),
):
    # DB upsert: one row per weekday
    db_hours = session.exec(
        select(WorkingHours).where(WorkingHours.day_of_week == day_of_week.value)
    ).first()
    start_time = normalize_time(hours.start_time)
    end_time = normalize_time(hours.end_time)

    if db_hours is None:
        db_hours = WorkingHours(
            day_of_week=day_of_week.value,
            start_time=start_time,
            end_time=end_time,
            is_available=hours.is_available,
        )
    else:
        db_hours.start_time = start_time
        db_hours.end_time = end_time
        db_hours.is_available = hours.is_available

    session.add(db_hours)
    session.commit()
    session.refresh(db_hours)
    return db_hours


@router.get("/blocked-times", response_model=List[BlockedTimePublic])
def list_blocked_times(
    on_date: Optional[date] = None,
    session: Session = Depends(get_session),
):
    stmt = select(BlockedTime)
    if on_date is not None:
        stmt = stmt.where(BlockedTime.date == on_date)
    stmt = stmt.order_by(BlockedTime.date, BlockedTime.start_time)
    return session.exec(stmt).all()


@router.post("/blocked-times", response_model=BlockedTimePublic, status_code=201)
def create_blocked_time(
    block: BlockedTimeCreate,
    session: Session = Depends(get_session),
):
    if block.is_all_day:
        start_time = end_time = None
    else:
        start_time = normalize_time(block.start_time)
        end_time = normalize_time(block.end_time)

    existing_blocks = session.exec(
        select(BlockedTime).where(BlockedTime.date == block.date)
    ).all()

    # Reject exact duplicates; overlapping breaks are allowed
    for existing in existing_blocks:
        if block.is_all_day and existing.is_all_day:
            raise HTTPException(status_code=409, detail="Day is already blocked")
        if (
            not block.is_all_day
            and not existing.is_all_day
            and existing.start_time == start_time
            and existing.end_time == end_time
        ):
            raise HTTPException(status_code=409, detail="Block already exists")

    db_block = BlockedTime(
        date=block.date,
        start_time=start_time,
        end_time=end_time,
        reason=block.reason,
        is_all_day=block.is_all_day,
    )

    session.add(db_block)
    session.commit()
    session.refresh(db_block)
    return db_block


@router.delete("/blocked-times/{block_id}", status_code=204)
def delete_blocked_time(
    block_id: int,
    session: Session = Depends(get_session),
):
    db_block = session.get(BlockedTime, block_id)
    if db_block is None:
        raise HTTPException(status_code=404, detail="Blocked time not found")

    session.delete(db_block)
    session.commit()
