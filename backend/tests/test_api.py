import asyncio
from datetime import date


def test_health_check(client):
    assert client.get("/api/v1/health-check").json()["status"] == "ok"


def test_create_and_list_habits(client):
    r = client.post("/api/v1/habits", json={"name": "Water", "is_base": True, "created_date": "2024-01-01"})
    assert r.status_code == 201
    habit_id = r.json()["id"]

    r = client.get("/api/v1/habits")
    assert r.status_code == 200
    assert [h["id"] for h in r.json()] == [habit_id]

    r = client.get("/api/v1/habits/base")
    assert [h["name"] for h in r.json()] == ["Water"]


def test_duplicate_name_rejected(client):
    client.post("/api/v1/habits", json={"name": "Water", "is_base": True, "created_date": "2024-01-01"})
    r = client.post("/api/v1/habits", json={"name": "water", "is_base": True})
    assert r.status_code == 400


def test_day_view_with_completion(client):
    water = client.post("/api/v1/habits", json={"name": "Water", "is_base": True, "created_date": "2024-01-01"}).json()["id"]
    client.post("/api/v1/habits", json={"name": "OneOff", "created_date": "2024-01-05"})

    r = client.put(f"/api/v1/habits/{water}/completion/2024-01-05", json={"completed": True})
    assert r.status_code == 200

    day = client.get("/api/v1/habits/day/2024-01-05").json()
    assert [(d["habit"]["name"], d["completed"]) for d in day] == [("OneOff", False), ("Water", True)]

    record = client.get("/api/v1/days/2024-01-05").json()
    assert record == {"date": "2024-01-05", "mood": 0, "completed_habits": 1, "total_habits": 2}

    assert client.get("/api/v1/habits/day/2024-01-06").json()[0]["habit"]["name"] == "Water"


def test_completion_for_unknown_habit(client):
    r = client.put("/api/v1/habits/42/completion/2024-01-05", json={"completed": True})
    assert r.status_code == 404


def test_remove_from_day_and_deactivate(client):
    water = client.post("/api/v1/habits", json={"name": "Water", "is_base": True, "created_date": "2024-01-01"}).json()["id"]

    assert client.post(f"/api/v1/habits/{water}/remove-day/2024-01-05").status_code == 200
    assert client.get("/api/v1/habits/day/2024-01-05").json() == []

    r = client.post(f"/api/v1/habits/{water}/deactivate")
    assert r.status_code == 200
    assert r.json()["deactivated_date"] == "2024-01-10"
    assert client.post(f"/api/v1/habits/{water}/deactivate").status_code == 400

    assert len(client.get("/api/v1/habits/day/2024-01-09").json()) == 1
    assert client.get("/api/v1/habits/day/2024-01-10").json() == []


def test_delete_habit(client):
    one_off = client.post("/api/v1/habits", json={"name": "OneOff", "created_date": "2024-01-05"}).json()["id"]
    assert client.delete(f"/api/v1/habits/{one_off}").status_code == 200
    assert client.delete(f"/api/v1/habits/{one_off}").status_code == 404


def test_mood_and_calendar(client):
    assert client.get("/api/v1/days/2024-01-03").status_code == 404

    r = client.put("/api/v1/days/2024-01-03/mood", json={"mood": 6})
    assert r.status_code == 200
    assert r.json()["mood"] == 6
    client.put("/api/v1/days/2024-01-20/mood", json={"mood": 2})

    assert client.put("/api/v1/days/2024-01-03/mood", json={"mood": 8}).status_code == 422

    r = client.get("/api/v1/calendar", params={"start": "2024-01-01", "end": "2024-01-10"})
    assert list(r.json()) == ["2024-01-03"]

    month = client.get("/api/v1/calendar/2024/1").json()
    assert month["summary"]["days_with_data"] == 2
    assert month["summary"]["total_days"] == 31
    assert sorted(month["records"]) == ["2024-01-03", "2024-01-20"]

    assert client.get("/api/v1/calendar", params={"start": "2024-01-10", "end": "2024-01-01"}).status_code == 400
    assert client.get("/api/v1/calendar/2024/13").status_code == 400


def test_habit_exists_endpoint(client):
    client.post("/api/v1/habits", json={"name": "Dentist", "created_date": "2024-01-10"})
    assert client.get("/api/v1/habits/exists", params={"name": "dentist"}).json() == {"exists": True}
    assert client.get("/api/v1/habits/exists", params={"name": "dentist", "day": "2024-01-11"}).json() == {"exists": False}


def test_async_store_runs_calls_in_order(store):
    from services.habit_store import AsyncHabitStore

    async_store = AsyncHabitStore(store)

    async def scenario():
        water = await async_store.add_habit("Water", True, date(2024, 1, 1))
        await asyncio.gather(*[
            async_store.set_completion(water, date(2024, 1, d), True) for d in range(1, 6)
        ])
        return await async_store.records_in_range(date(2024, 1, 1), date(2024, 1, 31))

    records = asyncio.run(scenario())
    async_store._executor.shutdown(wait=True)

    assert sorted(records) == [date(2024, 1, d) for d in range(1, 6)]
    assert all(r.completed_habits == 1 for r in records.values())


def test_month_view_rejects_out_of_range_year(client):
    assert client.get("/api/v1/calendar/0/1").status_code == 400
    assert client.get("/api/v1/calendar/10000/1").status_code == 400
    assert client.get("/api/v1/calendar/9999/12").status_code == 200


def test_remove_day_before_creation_is_not_found(client):
    water = client.post("/api/v1/habits", json={"name": "Water", "is_base": True, "created_date": "2024-01-05"}).json()["id"]
    assert client.post(f"/api/v1/habits/{water}/remove-day/2024-01-01").status_code == 404
