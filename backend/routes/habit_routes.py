import re

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from errors import ValidationError
from services.analytics_service import format_timestamp
from services.habit_service import HabitService, serialize_habit

router = APIRouter(prefix="/habits", tags=["Habits"])

class HabitCreate(BaseModel):
    name: str = ""
    description: Optional[str] = ""


_HABIT_ID_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def _parse_habit_id(raw: str) -> int:
    """Signed 64-bit decimal, ASCII digits only, no padding."""
    if not _HABIT_ID_RE.fullmatch(raw):
        raise ValidationError("Invalid habit ID")
    habit_id = int(raw)
    if not _INT64_MIN <= habit_id <= _INT64_MAX:
        raise ValidationError("Invalid habit ID")
    return habit_id


def _habit_body(habit: dict) -> dict:
    return {k: habit[k] for k in ("id", "name", "description", "created_at")}


@router.get("")
def list_habits(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    return [serialize_habit(h) for h in HabitService.get_all(db, user_id)]

@router.post("", status_code=201)
def create_habit(habit_data: HabitCreate, user_id: int = Depends(get_current_user),
                 db: Session = Depends(get_db)):
    h = HabitService.create(db, user_id, habit_data.name, habit_data.description)
    return {"message": "Habit created successfully", "habit": _habit_body(serialize_habit(h))}

@router.post("/{habit_id}/track")
def track_habit(habit_id: str, user_id: int = Depends(get_current_user),
                db: Session = Depends(get_db)):
    habit, record = HabitService.check(db, user_id, _parse_habit_id(habit_id))
    return {
        "message": "Habit tracked successfully",
        "habit": _habit_body(habit),
        "tracked_at": format_timestamp(record.date),
    }

@router.get("/{habit_id}/stats")
def habit_stats(habit_id: str, user_id: int = Depends(get_current_user),
                db: Session = Depends(get_db)):
    return HabitService.get_stats(db, user_id, _parse_habit_id(habit_id)).to_dict()
