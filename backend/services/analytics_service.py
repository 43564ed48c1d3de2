"""
analytics_service.py - Habit statistics
Reduces a habit's completion ledger into summary counts.
"""

from dataclasses import dataclass
from datetime import datetime, date
from typing import Iterable

from config import TIMESTAMP_FORMAT


def format_timestamp(value: datetime | None) -> str | None:
    return value.strftime(TIMESTAMP_FORMAT) if value is not None else None


@dataclass
class StatsSummary:
    habit_name: str
    total_trackings: int = 0
    completed_days: int = 0
    skipped_days: int = 0
    first_tracked: datetime | None = None
    last_tracked: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "habit_name": self.habit_name,
            "total_trackings": self.total_trackings,
            "completed_days": self.completed_days,
            "skipped_days": self.skipped_days,
            "first_tracked": format_timestamp(self.first_tracked),
            "last_tracked": format_timestamp(self.last_tracked),
        }


class AnalyticsService:

    @staticmethod
    def summarize(habit_name: str, records: Iterable) -> StatsSummary:
        """
        Single pass over records (anything with .date and .completed).

        Records must arrive in ledger order: when several share a calendar
        date the last one decides whether that day counts as completed or
        skipped. First/last tracked come from the raw timestamps.
        """
        summary = StatsSummary(habit_name=habit_name)
        day_status: dict[date, bool] = {}

        for record in records:
            summary.total_trackings += 1
            day_status[record.date.date()] = bool(record.completed)
            if summary.first_tracked is None or record.date < summary.first_tracked:
                summary.first_tracked = record.date
            if summary.last_tracked is None or record.date > summary.last_tracked:
                summary.last_tracked = record.date

        summary.completed_days = sum(1 for done in day_status.values() if done)
        summary.skipped_days = len(day_status) - summary.completed_days
        return summary
