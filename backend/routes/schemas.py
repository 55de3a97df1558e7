from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HabitOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_date: date
    is_active: bool
    is_base_habit: bool
    deactivated_date: Optional[date] = None


class HabitStatusOut(BaseModel):
    habit: HabitOut
    completed: bool


class DailyRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    mood: int
    completed_habits: int
    total_habits: int


class HabitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    is_base: bool = False
    created_date: Optional[date] = None


class CompletionUpdate(BaseModel):
    completed: bool


class MoodUpdate(BaseModel):
    mood: int = Field(..., ge=0, le=7, description="1-7, 0 clears the mood")
