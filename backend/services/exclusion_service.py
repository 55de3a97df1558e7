"""
exclusion_service.py — Per-day suppression of recurring habits
An exclusion hides a habit on one date without touching its definition.
"""

from datetime import date

from sqlalchemy.orm import Session

from models.habit_exclusion import HabitExclusion


class ExclusionService:
    @staticmethod
    def exclude(db: Session, habit_id: int, day: date) -> HabitExclusion:
        """Idempotent: a second call for the same (habit, day) returns the existing row."""
        existing = db.query(HabitExclusion).filter_by(habit_id=habit_id, exclusion_date=day).first()
        if existing:
            return existing
        exclusion = HabitExclusion(habit_id=habit_id, exclusion_date=day)
        db.add(exclusion)
        db.commit()
        return exclusion

    @staticmethod
    def excluded_habit_ids(db: Session, day: date) -> set[int]:
        rows = db.query(HabitExclusion.habit_id).filter(HabitExclusion.exclusion_date == day).all()
        return {row.habit_id for row in rows}

    @staticmethod
    def remove_future_exclusions(db: Session, habit_id: int, after: date) -> int:
        removed = db.query(HabitExclusion).filter(
            HabitExclusion.habit_id == habit_id,
            HabitExclusion.exclusion_date > after,
        ).delete(synchronize_session=False)
        db.commit()
        return removed

    @staticmethod
    def remove_all_exclusions(db: Session, habit_id: int) -> int:
        removed = db.query(HabitExclusion).filter(
            HabitExclusion.habit_id == habit_id
        ).delete(synchronize_session=False)
        db.commit()
        return removed
