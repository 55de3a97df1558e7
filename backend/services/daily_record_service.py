"""
daily_record_service.py — Per-day mood and completion summary
Counts are always rebuilt from scratch from the day's visible habits and their
completions; the calendar queries read the stored rows as they are.
"""

import calendar
import logging
from datetime import date

from sqlalchemy.orm import Session

from models.daily_record import DailyRecord, MOOD_UNSET, MOOD_MIN, MOOD_MAX
from services.completion_service import CompletionService
from services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)


def is_valid_mood(mood: int) -> bool:
    return mood == MOOD_UNSET or MOOD_MIN <= mood <= MOOD_MAX


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


class DailyRecordService:
    @staticmethod
    def get(db: Session, day: date) -> DailyRecord | None:
        return db.query(DailyRecord).filter_by(date=day).first()

    @staticmethod
    def save(db: Session, record: DailyRecord) -> DailyRecord | None:
        """Upsert keyed by date. An existing row keeps its own id."""
        mood = record.mood if record.mood is not None else MOOD_UNSET
        completed = record.completed_habits or 0
        total = record.total_habits or 0
        if not is_valid_mood(mood):
            logger.warning(f"Rejecting daily record for {record.date}: mood {mood} out of range")
            return None
        if completed < 0 or total < 0 or completed > total:
            logger.warning(f"Rejecting daily record for {record.date}: {completed}/{total} is inconsistent")
            return None

        existing = DailyRecordService.get(db, record.date)
        if existing is None:
            existing = DailyRecord(date=record.date)
            db.add(existing)
        existing.mood = mood
        existing.completed_habits = completed
        existing.total_habits = total
        db.commit()
        return existing

    @staticmethod
    def recompute(db: Session, day: date, create: bool = True) -> DailyRecord | None:
        """Rebuild completed/total for `day`.

        With create=False a day without a record is left without one.
        """
        record = DailyRecordService.get(db, day)
        if record is None and not create:
            return None

        habits = ScheduleService.habits_for_date(db, day)
        done_ids = CompletionService.completed_habit_ids(db, day)
        completed = sum(1 for h in habits if h.id in done_ids)

        if record is None:
            record = DailyRecord(date=day, mood=MOOD_UNSET)
            db.add(record)
        record.total_habits = len(habits)
        record.completed_habits = completed
        db.commit()
        return record

    @staticmethod
    def refresh_existing(db: Session, start: date, end: date | None = None) -> int:
        """Recompute every stored record in [start, end) (end None = open)."""
        query = db.query(DailyRecord.date).filter(DailyRecord.date >= start)
        if end is not None:
            query = query.filter(DailyRecord.date < end)
        days = [row.date for row in query.order_by(DailyRecord.date).all()]
        for d in days:
            DailyRecordService.recompute(db, d, create=False)
        return len(days)

    @staticmethod
    def records_in_range(db: Session, start: date, end: date) -> dict[date, DailyRecord]:
        if end < start:
            return {}
        records = db.query(DailyRecord).filter(
            DailyRecord.date >= start,
            DailyRecord.date <= end,
        ).order_by(DailyRecord.date).all()
        return {r.date: r for r in records}

    @staticmethod
    def monthly_records(db: Session, year: int, month: int) -> dict[date, DailyRecord]:
        start, end = month_bounds(year, month)
        return DailyRecordService.records_in_range(db, start, end)

    @staticmethod
    def month_summary(db: Session, year: int, month: int) -> dict:
        """How many days of the month have a saved record."""
        start, end = month_bounds(year, month)
        records = DailyRecordService.records_in_range(db, start, end)
        return {
            "year": year,
            "month": month,
            "days_with_data": len(records),
            "total_days": end.day,
        }
