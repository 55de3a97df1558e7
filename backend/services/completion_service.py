"""
completion_service.py — Per-day completion flags
One row per (habit, date); a missing row reads as "not completed".
"""

from datetime import date

from sqlalchemy.orm import Session

from models.habit_completion import HabitCompletion


class CompletionService:
    @staticmethod
    def get_status(db: Session, habit_id: int, day: date) -> bool:
        completion = db.query(HabitCompletion).filter_by(habit_id=habit_id, date=day).first()
        return completion.is_completed if completion else False

    @staticmethod
    def set_status(db: Session, habit_id: int, day: date, completed: bool) -> HabitCompletion:
        """Upsert by (habit_id, day)."""
        completion = db.query(HabitCompletion).filter_by(habit_id=habit_id, date=day).first()
        if completion:
            completion.is_completed = completed
        else:
            completion = HabitCompletion(habit_id=habit_id, date=day, is_completed=completed)
            db.add(completion)
        db.commit()
        return completion

    @staticmethod
    def completed_habit_ids(db: Session, day: date) -> set[int]:
        rows = db.query(HabitCompletion.habit_id).filter(
            HabitCompletion.date == day,
            HabitCompletion.is_completed.is_(True),
        ).all()
        return {row.habit_id for row in rows}

    @staticmethod
    def remove_completion(db: Session, habit_id: int, day: date) -> int:
        removed = db.query(HabitCompletion).filter(
            HabitCompletion.habit_id == habit_id,
            HabitCompletion.date == day,
        ).delete(synchronize_session=False)
        db.commit()
        return removed

    @staticmethod
    def remove_future_completions(db: Session, habit_id: int, after: date) -> int:
        removed = db.query(HabitCompletion).filter(
            HabitCompletion.habit_id == habit_id,
            HabitCompletion.date > after,
        ).delete(synchronize_session=False)
        db.commit()
        return removed

    @staticmethod
    def remove_all_completions(db: Session, habit_id: int) -> int:
        removed = db.query(HabitCompletion).filter(
            HabitCompletion.habit_id == habit_id
        ).delete(synchronize_session=False)
        db.commit()
        return removed
