# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.habit import Habit, HabitCounter
from models.track_record import TrackRecord

__all__ = [
    "User",
    "Habit",
    "HabitCounter",
    "TrackRecord",
]
