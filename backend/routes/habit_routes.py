from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from dependencies import get_store
from routes.schemas import HabitOut, HabitStatusOut, HabitCreate, CompletionUpdate
from services.habit_store import AsyncHabitStore

router = APIRouter(prefix="/api/v1/habits", tags=["Habits"])


@router.get("", response_model=list[HabitOut])
async def list_habits(store: AsyncHabitStore = Depends(get_store)):
    result = await store.fetch_habits()
    if not result.ok:
        raise HTTPException(status_code=503, detail="Habit storage unavailable")
    return result.value


@router.get("/base", response_model=list[HabitOut])
async def list_base_habits(store: AsyncHabitStore = Depends(get_store)):
    return await store.base_habits()


@router.get("/day/{day}", response_model=list[HabitStatusOut])
async def habits_for_day(day: date, store: AsyncHabitStore = Depends(get_store)):
    """Habits that apply to `day`, each with its completion flag."""
    result = await store.fetch_habits_for_date(day)
    if not result.ok:
        raise HTTPException(status_code=503, detail="Habit storage unavailable")
    return [
        {"habit": h, "completed": await store.completion_status(h.id, day)}
        for h in result.value
    ]


@router.get("/exists")
async def habit_exists(name: str, day: Optional[date] = None, store: AsyncHabitStore = Depends(get_store)):
    if day is None:
        return {"exists": await store.habit_name_exists(name)}
    return {"exists": await store.habit_name_exists_on(name, day)}


@router.post("", status_code=201)
async def create_habit(habit_data: HabitCreate, store: AsyncHabitStore = Depends(get_store)):
    habit_id = await store.add_habit(habit_data.name, habit_data.is_base, habit_data.created_date)
    if habit_id is None:
        raise HTTPException(status_code=400, detail="Habit name is empty or already taken")
    return {"status": "success", "id": habit_id}


@router.delete("/{habit_id}")
async def delete_habit(habit_id: int, store: AsyncHabitStore = Depends(get_store)):
    if not await store.delete_or_deactivate(habit_id):
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"status": "success"}


@router.post("/{habit_id}/remove-day/{day}")
async def remove_habit_from_day(habit_id: int, day: date, store: AsyncHabitStore = Depends(get_store)):
    if not await store.remove_from_day(habit_id, day):
        raise HTTPException(status_code=404, detail="Habit is not scheduled on this day")
    return {"status": "success"}


@router.post("/{habit_id}/deactivate")
async def deactivate_habit_from_future(habit_id: int, store: AsyncHabitStore = Depends(get_store)):
    if not await store.deactivate_base_from_future(habit_id):
        raise HTTPException(status_code=400, detail="Only an active base habit can be removed from future days")
    return {"status": "success", "deactivated_date": store.today()}


@router.get("/{habit_id}/completion/{day}")
async def get_completion(habit_id: int, day: date, store: AsyncHabitStore = Depends(get_store)):
    return {"habit_id": habit_id, "date": day, "completed": await store.completion_status(habit_id, day)}


@router.put("/{habit_id}/completion/{day}")
async def set_completion(habit_id: int, day: date, body: CompletionUpdate, store: AsyncHabitStore = Depends(get_store)):
    if await store.get_habit(habit_id) is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    await store.set_completion(habit_id, day, body.completed)
    return {"habit_id": habit_id, "date": day, "completed": body.completed}
