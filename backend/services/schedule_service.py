"""
schedule_service.py — Which habits apply to a given date
Pure over the current habit and exclusion tables; nothing is cached between
calls because either table may change at any time.
"""

from datetime import date, timedelta

from sqlalchemy.orm import Session

from models.habit import Habit, HabitKind
from services.exclusion_service import ExclusionService
from services.habit_repository import HabitRepository


def sort_key(habit: Habit):
    return (habit.name, habit.id)


def is_visible_on(habit: Habit, day: date, excluded_ids: set[int]) -> bool:
    """Visibility of one active habit on `day`.

    Order matters: a retired base habit is already non-base, so the cutoff
    check must run before the kind branch or it would vanish from its past.
    """
    if habit.id in excluded_ids:
        return False
    if habit.created_date > day:
        return False
    if habit.deactivated_date is not None:
        return day < habit.deactivated_date
    if habit.kind is HabitKind.BASE:
        return True
    return habit.created_date == day


def visible_range(habit: Habit) -> tuple[date, date | None]:
    """Inclusive first day and exclusive last day a habit can appear on (None = open)."""
    if habit.deactivated_date is not None:
        return habit.created_date, habit.deactivated_date
    if habit.kind is HabitKind.BASE:
        return habit.created_date, None
    return habit.created_date, habit.created_date + timedelta(days=1)


class ScheduleService:
    @staticmethod
    def habits_for_date(db: Session, day: date) -> list[Habit]:
        habits = HabitRepository.list_active(db)
        excluded = ExclusionService.excluded_habit_ids(db, day)
        visible = [h for h in habits if is_visible_on(h, day, excluded)]
        return sorted(visible, key=sort_key)
