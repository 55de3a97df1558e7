from sqlalchemy import Column, Integer, Date, Boolean, ForeignKey, UniqueConstraint
from database import Base


class HabitCompletion(Base):
    __tablename__ = "habit_completions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    habit_id = Column(Integer, ForeignKey("habits.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("habit_id", "date", name="uq_completion_habit_date"),
    )
