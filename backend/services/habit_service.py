"""
habit_service.py - Habit registry & completion ledger
Creates habits with per-user sequential ids, lists them, records completions
and hands the ledger to AnalyticsService for stats.
"""

import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import func

from database import utcnow
from errors import ValidationError, NotFoundError, ConflictError
from models.habit import Habit, HabitCounter
from models.track_record import TrackRecord
from services.analytics_service import AnalyticsService, StatsSummary, format_timestamp
from services.cache_service import habit_cache

logger = logging.getLogger(__name__)


def serialize_habit(h: Habit) -> dict:
    return {
        "id": h.id,
        "user_id": h.user_id,
        "name": h.name,
        "description": h.description or "",
        "created_at": format_timestamp(h.created_at),
    }


class HabitService:

    @staticmethod
    def _next_habit_id(db: Session, user_id: int) -> int:
        """Bump the user's counter in one UPDATE; seed it from MAX(id) the first time."""
        bumped = (
            db.query(HabitCounter)
            .filter(HabitCounter.user_id == user_id)
            .update({HabitCounter.last_id: HabitCounter.last_id + 1}, synchronize_session=False)
        )
        if bumped:
            return db.query(HabitCounter.last_id).filter(HabitCounter.user_id == user_id).scalar()

        max_id = db.query(func.max(Habit.id)).filter(Habit.user_id == user_id).scalar()
        next_id = (max_id or 0) + 1
        db.add(HabitCounter(user_id=user_id, last_id=next_id))
        db.flush()
        return next_id

    @staticmethod
    def create(db: Session, user_id: int, name: str, description: str | None = None) -> Habit:
        if not name or not name.strip():
            raise ValidationError("Name is required")

        try:
            h = Habit(
                user_id=user_id,
                id=HabitService._next_habit_id(db, user_id),
                name=name,
                description=description or "",
                created_at=utcnow(),
            )
            db.add(h)
            db.commit()
            db.refresh(h)
        except IntegrityError:
            db.rollback()
            raise ConflictError("Habit id already taken, please retry")
        except SQLAlchemyError:
            db.rollback()
            raise

        habit_cache.invalidate(user_id)
        logger.info(f"Created habit {h.id} for user {user_id}")
        return h

    @staticmethod
    def get_all(db: Session, user_id: int) -> list[Habit]:
        """All of the user's habits, read from the store; refreshes the cache."""
        habits = db.query(Habit).filter_by(user_id=user_id).order_by(Habit.id).all()
        habit_cache.set(user_id, {h.id: serialize_habit(h) for h in habits})
        return habits

    @staticmethod
    def get(db: Session, user_id: int, habit_id: int) -> dict:
        """Serialized habit. Cache hits are trusted; misses go to the store."""
        cached = habit_cache.get(user_id)
        if cached is not None and habit_id in cached:
            return cached[habit_id]

        h = db.query(Habit).filter_by(user_id=user_id, id=habit_id).first()
        if not h:
            raise NotFoundError("Habit not found")
        # the entry (if any) predates this habit
        habit_cache.invalidate(user_id)
        return serialize_habit(h)

    @staticmethod
    def check(db: Session, user_id: int, habit_id: int) -> tuple[dict, TrackRecord]:
        """Append a completed record for today. Returns (habit, record)."""
        habit = HabitService.get(db, user_id, habit_id)
        record = TrackRecord(
            habit_id=habit_id,
            user_id=user_id,
            completed=True,
            date=utcnow(),
        )
        try:
            db.add(record)
            db.commit()
            db.refresh(record)
        except IntegrityError:
            # the habit vanished between lookup and insert
            db.rollback()
            habit_cache.invalidate(user_id)
            raise NotFoundError("Habit not found")
        except SQLAlchemyError:
            db.rollback()
            raise
        return habit, record

    @staticmethod
    def get_history(db: Session, user_id: int, habit_id: int) -> list[TrackRecord]:
        """The habit's ledger in record-id order."""
        return (
            db.query(TrackRecord)
            .filter_by(user_id=user_id, habit_id=habit_id)
            .order_by(TrackRecord.id)
            .all()
        )

    @staticmethod
    def get_stats(db: Session, user_id: int, habit_id: int) -> StatsSummary:
        habit = HabitService.get(db, user_id, habit_id)
        records = HabitService.get_history(db, user_id, habit_id)
        return AnalyticsService.summarize(habit["name"], records)

    @staticmethod
    def clear_cache():
        habit_cache.clear()
