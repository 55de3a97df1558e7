# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.habit import Habit, HabitKind
from models.habit_exclusion import HabitExclusion
from models.habit_completion import HabitCompletion
from models.daily_record import DailyRecord

__all__ = [
    "Habit",
    "HabitKind",
    "HabitExclusion",
    "HabitCompletion",
    "DailyRecord",
]
