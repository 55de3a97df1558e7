"""
habit_repository.py — Habit CRUD and lifecycle transitions
Base habits are archived, never erased while still base; day-scoped habits are
erased together with their completions. Deactivate-from-future retires a base
habit at a cutoff date while keeping it on the days before.
"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from models.habit import Habit, HabitKind
from services.completion_service import CompletionService
from services.exclusion_service import ExclusionService

logger = logging.getLogger(__name__)


def normalize_name(name: str | None) -> str:
    return (name or "").strip()


def _same_name(a: str, b: str) -> bool:
    # casefold in Python: SQLite's lower() only folds ASCII
    return a.casefold() == b.casefold()


class HabitRepository:
    @staticmethod
    def list_active(db: Session) -> list[Habit]:
        return db.query(Habit).filter(Habit.is_active.is_(True)).order_by(Habit.name, Habit.id).all()

    @staticmethod
    def list_active_base(db: Session) -> list[Habit]:
        return db.query(Habit).filter(
            Habit.is_active.is_(True),
            Habit.is_base_habit.is_(True),
        ).order_by(Habit.name, Habit.id).all()

    @staticmethod
    def get(db: Session, habit_id: int) -> Habit | None:
        return db.query(Habit).filter_by(id=habit_id).first()

    @staticmethod
    def name_exists(db: Session, name: str) -> bool:
        """Any active habit, of either kind, with this name."""
        wanted = normalize_name(name)
        if not wanted:
            return False
        names = db.query(Habit.name).filter(Habit.is_active.is_(True)).all()
        return any(_same_name(row.name, wanted) for row in names)

    @staticmethod
    def name_exists_for_day(db: Session, name: str, day: date) -> bool:
        """An active day-scoped habit with this name created exactly on `day`."""
        wanted = normalize_name(name)
        if not wanted:
            return False
        names = db.query(Habit.name).filter(
            Habit.is_active.is_(True),
            Habit.is_base_habit.is_(False),
            Habit.created_date == day,
        ).all()
        return any(_same_name(row.name, wanted) for row in names)

    @staticmethod
    def create(db: Session, name: str, kind: HabitKind, created_date: date) -> Habit | None:
        clean = normalize_name(name)
        if not clean:
            logger.info("Refusing to create a habit with an empty name")
            return None

        if kind is HabitKind.BASE:
            taken = HabitRepository.name_exists(db, clean)
        else:
            taken = HabitRepository.name_exists_for_day(db, clean, created_date)
        if taken:
            logger.info(f"Habit {clean!r} already exists ({kind.value}, {created_date})")
            return None

        habit = Habit(
            name=clean,
            created_date=created_date,
            is_active=True,
            is_base_habit=kind is HabitKind.BASE,
            deactivated_date=None,
        )
        db.add(habit)
        db.commit()
        db.refresh(habit)
        logger.info(f"Created {kind.value} habit {habit.id} {clean!r} on {created_date}")
        return habit

    @staticmethod
    def erase(db: Session, habit: Habit) -> None:
        """Hard delete: completions, exclusions, then the row itself."""
        CompletionService.remove_all_completions(db, habit.id)
        ExclusionService.remove_all_exclusions(db, habit.id)
        db.delete(habit)
        db.commit()
        logger.info(f"Deleted habit {habit.id} {habit.name!r}")

    @staticmethod
    def deactivate_or_delete(db: Session, habit_id: int) -> Habit | None:
        """Archive a base habit, erase a non-base one. Returns the affected habit."""
        habit = HabitRepository.get(db, habit_id)
        if not habit:
            return None

        if habit.kind is HabitKind.BASE:
            habit.is_active = False
            db.commit()
            logger.info(f"Archived base habit {habit.id} {habit.name!r}")
        else:
            HabitRepository.erase(db, habit)
        return habit

    @staticmethod
    def deactivate_base_from_future(db: Session, habit_id: int, today: date) -> Habit | None:
        """Retire an active base habit as of `today`; None when not applicable."""
        habit = HabitRepository.get(db, habit_id)
        if not habit or not habit.is_active or habit.kind is not HabitKind.BASE:
            logger.info(f"Habit {habit_id} is not an active base habit, nothing to deactivate")
            return None

        habit.is_base_habit = False
        habit.deactivated_date = today
        db.commit()

        completions = CompletionService.remove_future_completions(db, habit.id, today)
        exclusions = ExclusionService.remove_future_exclusions(db, habit.id, today)
        logger.info(
            f"Habit {habit.id} {habit.name!r} removed from {today} on "
            f"({completions} completions, {exclusions} exclusions purged)"
        )
        return habit
