from sqlalchemy import Column, Integer, Date
from database import Base

MOOD_UNSET = 0
MOOD_MIN = 1
MOOD_MAX = 7


class DailyRecord(Base):
    __tablename__ = "daily_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    mood = Column(Integer, nullable=False, default=MOOD_UNSET)  # 1-7, 0 = not recorded
    completed_habits = Column(Integer, nullable=False, default=0)
    total_habits = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return (
            f"<DailyRecord {self.date} mood={self.mood} "
            f"{self.completed_habits}/{self.total_habits}>"
        )
