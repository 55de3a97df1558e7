"""
habit_store.py — The call surface used by the presentation layer
Every public call opens its own session. Storage errors on an open database are
logged and turned into an empty/default value; callers that need to tell "no
data" from "storage failed" use the fetch_* methods, which return StoreResult.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from functools import partial
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from database import Database
from models.daily_record import DailyRecord
from models.habit import Habit, HabitKind
from services.completion_service import CompletionService
from services.daily_record_service import DailyRecordService, is_valid_mood
from services.exclusion_service import ExclusionService
from services.habit_repository import HabitRepository
from services.result import StoreResult
from services.schedule_service import ScheduleService, is_visible_on, visible_range

logger = logging.getLogger(__name__)


class HabitStore:
    """Synchronous Habit Store. Construct once at startup and pass it around."""

    def __init__(self, database: Database, clock: Callable[[], date] = date.today):
        self.database = database
        self.clock = clock
        # raises StorageUnavailableError, which is fatal for the caller
        self.database.init_db()

    def today(self) -> date:
        return self.clock()

    # ------------------------------------------------------------------
    def _run(self, operation: str, default, fn, *args) -> StoreResult:
        with self.database.session() as db:
            try:
                return StoreResult.success(fn(db, *args))
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Storage error in {operation}: {e}")
                return StoreResult.failure(default, e)

    # ------------------------------------------------------------------
    # Habits
    def fetch_habits(self) -> StoreResult:
        return self._run("list_habits", [], HabitRepository.list_active)

    def list_habits(self) -> list[Habit]:
        return self.fetch_habits().value

    def base_habits(self) -> list[Habit]:
        return self._run("base_habits", [], HabitRepository.list_active_base).value

    def get_habit(self, habit_id: int) -> Habit | None:
        return self._run("get_habit", None, HabitRepository.get, habit_id).value

    def fetch_habits_for_date(self, day: date) -> StoreResult:
        return self._run("habits_for_date", [], ScheduleService.habits_for_date, day)

    def habits_for_date(self, day: date) -> list[Habit]:
        return self.fetch_habits_for_date(day).value

    def habit_name_exists(self, name: str) -> bool:
        return self._run("habit_name_exists", False, HabitRepository.name_exists, name).value

    def habit_name_exists_on(self, name: str, day: date) -> bool:
        return self._run(
            "habit_name_exists_on", False, HabitRepository.name_exists_for_day, name, day
        ).value

    def habit_name_exists_today(self, name: str) -> bool:
        return self.habit_name_exists_on(name, self.today())

    def add_habit(self, name: str, is_base: bool, created_date: date | None = None) -> int | None:
        """New habit id, or None when the name is empty or already taken."""
        kind = HabitKind.BASE if is_base else HabitKind.DAY
        day = created_date or self.today()

        def op(db):
            habit = HabitRepository.create(db, name, kind, day)
            if habit is None:
                return None
            start, end = visible_range(habit)
            DailyRecordService.refresh_existing(db, start, end)
            return habit.id

        return self._run("add_habit", None, op).value

    def delete_or_deactivate(self, habit_id: int) -> bool:
        today = self.today()

        def op(db):
            habit = HabitRepository.get(db, habit_id)
            if habit is None:
                return False
            start, end = visible_range(habit)
            archived = habit.kind is HabitKind.BASE
            HabitRepository.deactivate_or_delete(db, habit_id)
            if archived:
                # records before today keep the counts they had while the habit was live
                DailyRecordService.refresh_existing(db, today)
            else:
                DailyRecordService.refresh_existing(db, start, end)
            return True

        return self._run("delete_or_deactivate", False, op).value

    def remove_from_day(self, habit_id: int, day: date) -> bool:
        """Take a habit off one date: exclusion for recurring habits, erase a day-scoped one."""
        def op(db):
            habit = HabitRepository.get(db, habit_id)
            if habit is None or not habit.is_active:
                return False
            if not is_visible_on(habit, day, set()):
                return False
            if habit.is_recurring:
                ExclusionService.exclude(db, habit.id, day)
                CompletionService.remove_completion(db, habit.id, day)
            else:
                HabitRepository.erase(db, habit)
            DailyRecordService.recompute(db, day, create=False)
            return True

        return self._run("remove_from_day", False, op).value

    def deactivate_base_from_future(self, habit_id: int, today: date | None = None) -> bool:
        cutoff = today or self.today()

        def op(db):
            habit = HabitRepository.deactivate_base_from_future(db, habit_id, cutoff)
            if habit is None:
                return False
            DailyRecordService.refresh_existing(db, cutoff)
            return True

        return self._run("deactivate_base_from_future", False, op).value

    # ------------------------------------------------------------------
    # Completions
    def completion_status(self, habit_id: int, day: date) -> bool:
        return self._run("completion_status", False, CompletionService.get_status, habit_id, day).value

    def set_completion(self, habit_id: int, day: date, completed: bool) -> None:
        def op(db):
            CompletionService.set_status(db, habit_id, day, completed)
            DailyRecordService.recompute(db, day)

        self._run("set_completion", None, op)

    # ------------------------------------------------------------------
    # Daily records
    def daily_record(self, day: date) -> DailyRecord | None:
        return self._run("daily_record", None, DailyRecordService.get, day).value

    def save_daily_record(self, record: DailyRecord) -> None:
        self._run("save_daily_record", None, DailyRecordService.save, record)

    def set_mood(self, day: date, mood: int) -> bool:
        """Store the mood for a day and bring its counts up to date."""
        if not is_valid_mood(mood):
            logger.warning(f"Ignoring mood {mood} for {day}: out of range")
            return False

        def op(db):
            record = DailyRecordService.get(db, day) or DailyRecord(date=day)
            record.mood = mood
            if DailyRecordService.save(db, record) is None:
                return False
            DailyRecordService.recompute(db, day)
            return True

        return self._run("set_mood", False, op).value

    def recompute_daily_stats(self, day: date) -> DailyRecord | None:
        return self._run("recompute_daily_stats", None, DailyRecordService.recompute, day).value

    # ------------------------------------------------------------------
    # Calendar
    def fetch_records_in_range(self, start: date, end: date) -> StoreResult:
        return self._run("records_in_range", {}, DailyRecordService.records_in_range, start, end)

    def records_in_range(self, start: date, end: date) -> dict[date, DailyRecord]:
        return self.fetch_records_in_range(start, end).value

    def monthly_records(self, year: int, month: int) -> dict[date, DailyRecord]:
        return self._run("monthly_records", {}, DailyRecordService.monthly_records, year, month).value

    def month_summary(self, year: int, month: int) -> dict:
        return self._run("month_summary", {}, DailyRecordService.month_summary, year, month).value


class AsyncHabitStore:
    """Awaitable mirror of HabitStore.

    Calls run on one worker thread, so they never block the event loop and
    still execute strictly one after another.
    """

    def __init__(self, store: HabitStore):
        self.store = store
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="habit-store")

    async def _call(self, fn, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, partial(fn, *args))

    def today(self) -> date:
        return self.store.today()

    def close(self):
        self._executor.shutdown(wait=True)
        self.store.database.dispose()

    async def fetch_habits(self) -> StoreResult:
        return await self._call(self.store.fetch_habits)

    async def list_habits(self) -> list[Habit]:
        return await self._call(self.store.list_habits)

    async def base_habits(self) -> list[Habit]:
        return await self._call(self.store.base_habits)

    async def get_habit(self, habit_id: int) -> Habit | None:
        return await self._call(self.store.get_habit, habit_id)

    async def fetch_habits_for_date(self, day: date) -> StoreResult:
        return await self._call(self.store.fetch_habits_for_date, day)

    async def habits_for_date(self, day: date) -> list[Habit]:
        return await self._call(self.store.habits_for_date, day)

    async def habit_name_exists(self, name: str) -> bool:
        return await self._call(self.store.habit_name_exists, name)

    async def habit_name_exists_on(self, name: str, day: date) -> bool:
        return await self._call(self.store.habit_name_exists_on, name, day)

    async def habit_name_exists_today(self, name: str) -> bool:
        return await self._call(self.store.habit_name_exists_today, name)

    async def add_habit(self, name: str, is_base: bool, created_date: date | None = None) -> int | None:
        return await self._call(self.store.add_habit, name, is_base, created_date)

    async def delete_or_deactivate(self, habit_id: int) -> bool:
        return await self._call(self.store.delete_or_deactivate, habit_id)

    async def remove_from_day(self, habit_id: int, day: date) -> bool:
        return await self._call(self.store.remove_from_day, habit_id, day)

    async def deactivate_base_from_future(self, habit_id: int, today: date | None = None) -> bool:
        return await self._call(self.store.deactivate_base_from_future, habit_id, today)

    async def completion_status(self, habit_id: int, day: date) -> bool:
        return await self._call(self.store.completion_status, habit_id, day)

    async def set_completion(self, habit_id: int, day: date, completed: bool) -> None:
        await self._call(self.store.set_completion, habit_id, day, completed)

    async def daily_record(self, day: date) -> DailyRecord | None:
        return await self._call(self.store.daily_record, day)

    async def save_daily_record(self, record: DailyRecord) -> None:
        await self._call(self.store.save_daily_record, record)

    async def set_mood(self, day: date, mood: int) -> bool:
        return await self._call(self.store.set_mood, day, mood)

    async def fetch_records_in_range(self, start: date, end: date) -> StoreResult:
        return await self._call(self.store.fetch_records_in_range, start, end)

    async def records_in_range(self, start: date, end: date) -> dict[date, DailyRecord]:
        return await self._call(self.store.records_in_range, start, end)

    async def monthly_records(self, year: int, month: int) -> dict[date, DailyRecord]:
        return await self._call(self.store.monthly_records, year, month)

    async def month_summary(self, year: int, month: int) -> dict:
        return await self._call(self.store.month_summary, year, month)
