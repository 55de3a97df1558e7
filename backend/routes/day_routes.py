from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from dependencies import get_store
from routes.schemas import DailyRecordOut, MoodUpdate
from services.habit_store import AsyncHabitStore

router = APIRouter(prefix="/api/v1/days", tags=["Days"])


@router.get("/{day}", response_model=DailyRecordOut)
async def get_day(day: date, store: AsyncHabitStore = Depends(get_store)):
    record = await store.daily_record(day)
    if record is None:
        raise HTTPException(status_code=404, detail="No record for this day")
    return record


@router.put("/{day}/mood", response_model=DailyRecordOut)
async def set_mood(day: date, body: MoodUpdate, store: AsyncHabitStore = Depends(get_store)):
    if not await store.set_mood(day, body.mood):
        raise HTTPException(status_code=500, detail="Could not save mood")
    return await store.daily_record(day)
