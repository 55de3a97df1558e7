"""
Shared FastAPI dependencies
"""
from fastapi import Request

from services.habit_store import AsyncHabitStore


def get_store(request: Request) -> AsyncHabitStore:
    """FastAPI dependency — the store created once at startup."""
    return request.app.state.store
