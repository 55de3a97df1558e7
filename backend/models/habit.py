import enum

from sqlalchemy import Column, Integer, String, Date, Boolean
from database import Base


class HabitKind(str, enum.Enum):
    BASE = "base"  # every day from created_date on
    DAY = "day"    # only on created_date


class Habit(Base):
    __tablename__ = "habits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    created_date = Column(Date, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    is_base_habit = Column(Boolean, nullable=False, default=False)
    deactivated_date = Column(Date, nullable=True)  # set by deactivate-from-future

    # ids are never handed out twice, even after a hard delete
    __table_args__ = {"sqlite_autoincrement": True}

    @property
    def kind(self) -> HabitKind:
        return HabitKind.BASE if self.is_base_habit else HabitKind.DAY

    @property
    def is_retired(self) -> bool:
        """A former base habit that still shows on the days before its cutoff."""
        return not self.is_base_habit and self.deactivated_date is not None

    @property
    def is_recurring(self) -> bool:
        return self.is_base_habit or self.is_retired

    def __repr__(self):
        return f"<Habit id={self.id} name={self.name!r} kind={self.kind.value}>"
