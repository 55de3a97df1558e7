from sqlalchemy import Column, Integer, Date, ForeignKey, UniqueConstraint
from database import Base


class HabitExclusion(Base):
    __tablename__ = "habit_exclusions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    habit_id = Column(Integer, ForeignKey("habits.id"), nullable=False, index=True)
    exclusion_date = Column(Date, nullable=False)

    __table_args__ = (
        UniqueConstraint("habit_id", "exclusion_date", name="uq_exclusion_habit_date"),
    )
