from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from database import Base, utcnow


class Habit(Base):
    __tablename__ = "habits"

    # id is sequential per user, so the pair is the key
    user_id = Column(Integer, primary_key=True, autoincrement=False)
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=utcnow)

    records = relationship(
        "TrackRecord",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TrackRecord.id",
    )


class HabitCounter(Base):
    """Last habit id issued per user."""

    __tablename__ = "habit_counters"

    user_id = Column(Integer, primary_key=True, autoincrement=False)
    last_id = Column(Integer, nullable=False, default=0)
