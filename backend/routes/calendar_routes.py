from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from dependencies import get_store
from routes.schemas import DailyRecordOut
from services.habit_store import AsyncHabitStore

router = APIRouter(prefix="/api/v1/calendar", tags=["Calendar"])


def _serialize(records: dict) -> dict[str, dict]:
    # days without a record are simply absent
    return {
        d.isoformat(): DailyRecordOut.model_validate(r).model_dump(mode="json")
        for d, r in records.items()
    }


@router.get("")
async def records_in_range(start: date, end: date, store: AsyncHabitStore = Depends(get_store)):
    if end < start:
        raise HTTPException(status_code=400, detail="end must be on or after start")
    result = await store.fetch_records_in_range(start, end)
    if not result.ok:
        raise HTTPException(status_code=503, detail="Calendar storage unavailable")
    return _serialize(result.value)


@router.get("/{year}/{month}")
async def month_view(year: int, month: int, store: AsyncHabitStore = Depends(get_store)):
    if not 1 <= year <= 9999:
        raise HTTPException(status_code=400, detail="year must be 1-9999")
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="month must be 1-12")
    records = await store.monthly_records(year, month)
    summary = await store.month_summary(year, month)
    return {"summary": summary, "records": _serialize(records)}
