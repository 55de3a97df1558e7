from datetime import date

import pytest
from fastapi.testclient import TestClient

from database import Database
from main import create_app
from services.habit_store import AsyncHabitStore, HabitStore


class FixedClock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock():
    return FixedClock(date(2024, 1, 10))


@pytest.fixture
def database():
    db = Database("sqlite://")
    yield db
    db.dispose()


@pytest.fixture
def store(database, clock):
    return HabitStore(database, clock=clock)


@pytest.fixture
def client(store):
    async_store = AsyncHabitStore(store)
    with TestClient(create_app(async_store)) as c:
        yield c
    async_store._executor.shutdown(wait=True)


def names(habits):
    return [h.name for h in habits]
