from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKeyConstraint, Index
from sqlalchemy.orm import relationship
from database import Base, utcnow


class TrackRecord(Base):
    __tablename__ = "track_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    habit_id = Column(Integer, nullable=False)
    user_id = Column(Integer, nullable=False)
    completed = Column(Boolean, nullable=False, default=True)
    date = Column(DateTime, nullable=False, default=utcnow)

    habit = relationship("Habit", back_populates="records")

    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id", "habit_id"],
            ["habits.user_id", "habits.id"],
            ondelete="CASCADE",
        ),
        Index("ix_track_records_user_habit", "user_id", "habit_id"),
    )
