from datetime import date, timedelta

import pytest


@pytest.fixture
def three_habits(store):
    water = store.add_habit("Water", True, date(2024, 1, 1))
    read = store.add_habit("Read", True, date(2024, 1, 1))
    walk = store.add_habit("Walk", True, date(2024, 1, 1))
    return water, read, walk


def assert_counts_match(store, day):
    habits = store.habits_for_date(day)
    record = store.daily_record(day)
    completed = sum(1 for h in habits if store.completion_status(h.id, day))
    assert record.total_habits == len(habits)
    assert record.completed_habits == completed
    assert record.completed_habits <= record.total_habits


def test_completion_updates_daily_record(store, three_habits):
    water, _, _ = three_habits
    day = date(2024, 1, 5)

    store.set_completion(water, day, True)

    record = store.daily_record(day)
    assert (record.completed_habits, record.total_habits) == (1, 3)
    assert record.mood == 0


def test_counts_consistent_after_every_write(store, three_habits):
    water, read, walk = three_habits
    day = date(2024, 1, 5)
    for habit_id, done in [(water, True), (read, True), (water, False), (walk, True)]:
        store.set_completion(habit_id, day, done)
        assert_counts_match(store, day)


def test_completion_on_hidden_habit_not_counted(store, three_habits):
    water, read, _ = three_habits
    day = date(2024, 1, 5)
    store.remove_from_day(water, day)

    store.set_completion(read, day, True)

    record = store.daily_record(day)
    assert (record.completed_habits, record.total_habits) == (1, 2)


def test_no_record_until_mood_or_completion(store, three_habits):
    assert store.daily_record(date(2024, 1, 5)) is None
    store.add_habit("Stretch", True, date(2024, 1, 2))
    assert store.daily_record(date(2024, 1, 5)) is None


def test_set_mood_creates_record_with_counts(store, three_habits):
    day = date(2024, 1, 5)
    assert store.set_mood(day, 5)

    record = store.daily_record(day)
    assert (record.mood, record.completed_habits, record.total_habits) == (5, 0, 3)


def test_set_mood_keeps_counts_and_row(store, three_habits):
    water, _, _ = three_habits
    day = date(2024, 1, 5)
    store.set_completion(water, day, True)
    first = store.daily_record(day)

    store.set_mood(day, 7)

    record = store.daily_record(day)
    assert record.id == first.id
    assert (record.mood, record.completed_habits, record.total_habits) == (7, 1, 3)


@pytest.mark.parametrize("mood", [-1, 8, 10])
def test_set_mood_rejects_out_of_range(store, mood):
    assert store.set_mood(date(2024, 1, 5), mood) is False
    assert store.daily_record(date(2024, 1, 5)) is None


def test_new_habit_refreshes_existing_records(store, three_habits):
    day = date(2024, 1, 5)
    store.set_mood(day, 4)

    store.add_habit("Stretch", True, date(2024, 1, 3))
    assert store.daily_record(day).total_habits == 4

    store.add_habit("Dentist", False, day)
    assert store.daily_record(day).total_habits == 5


def test_deactivate_refreshes_records_from_cutoff(store, three_habits):
    water, _, _ = three_habits
    for d in (date(2024, 1, 9), date(2024, 1, 10), date(2024, 1, 15)):
        store.set_completion(water, d, True)

    store.deactivate_base_from_future(water, date(2024, 1, 10))

    assert store.daily_record(date(2024, 1, 9)).total_habits == 3
    assert store.daily_record(date(2024, 1, 10)).total_habits == 2
    assert store.daily_record(date(2024, 1, 10)).completed_habits == 0
    record = store.daily_record(date(2024, 1, 15))
    assert (record.completed_habits, record.total_habits) == (0, 2)


def test_records_in_range_inclusive_and_sparse(store, three_habits):
    water, _, _ = three_habits
    store.set_completion(water, date(2024, 1, 1), True)
    store.set_mood(date(2024, 1, 3), 2)
    store.set_mood(date(2024, 1, 7), 6)
    store.set_mood(date(2024, 1, 8), 6)

    records = store.records_in_range(date(2024, 1, 1), date(2024, 1, 7))

    assert sorted(records) == [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 7)]
    assert records[date(2024, 1, 3)].mood == 2
    assert date(2024, 1, 2) not in records


def test_records_in_range_reversed_bounds(store):
    store.set_mood(date(2024, 1, 3), 2)
    assert store.records_in_range(date(2024, 1, 5), date(2024, 1, 1)) == {}


def test_record_with_zero_habits_differs_from_no_record(store):
    store.set_mood(date(2024, 1, 3), 4)
    records = store.records_in_range(date(2024, 1, 1), date(2024, 1, 5))
    assert records[date(2024, 1, 3)].total_habits == 0
    assert date(2024, 1, 4) not in records


def test_monthly_records_and_summary(store):
    for day in (1, 15, 29):
        store.set_mood(date(2024, 2, day), 3)
    store.set_mood(date(2024, 3, 1), 3)

    records = store.monthly_records(2024, 2)
    assert sorted(records) == [date(2024, 2, 1), date(2024, 2, 15), date(2024, 2, 29)]
    assert store.month_summary(2024, 2) == {
        "year": 2024, "month": 2, "days_with_data": 3, "total_days": 29,
    }


def test_range_never_leaks_outside_bounds(store):
    start = date(2024, 1, 1)
    for offset in range(0, 20, 3):
        store.set_mood(start + timedelta(days=offset), 1)

    records = store.records_in_range(date(2024, 1, 4), date(2024, 1, 10))
    assert all(date(2024, 1, 4) <= d <= date(2024, 1, 10) for d in records)
    assert sorted(records) == [date(2024, 1, 4), date(2024, 1, 7), date(2024, 1, 10)]
