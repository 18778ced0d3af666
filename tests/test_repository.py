import json
from datetime import date

import pytest

from availability import AvailabilityResolver, ExceptionConflictError, JsonFileRepository, UnreadableResourceError
from generators.data_factory import DataGenerator, default_weekly_patterns, parse_batch, sample_exceptions
from models import ExceptionCreate, ExceptionType, WeeklyPattern


@pytest.fixture
def repo(tmp_path):
    return JsonFileRepository(tmp_path / "data.json")


def holiday(resource_id=1, day="2024-01-16"):
    return ExceptionCreate(resource_id=resource_id, exception_date=day, hours_available="0",
                           hourly_rate="50", exception_type="non-working", notes="Holiday")


def test_missing_file_starts_empty(repo):
    assert repo.load_weekly_patterns(1) == []
    assert repo.load_active_exceptions(1) == []
    assert repo.has_resource(1) is False


def test_round_trip_through_disk(tmp_path):
    path = tmp_path / "data.json"
    repo = JsonFileRepository(path)
    repo.save_weekly_patterns(1, default_weekly_patterns(1, hourly_rate="50.00"))
    exception_id = repo.persist_exception(holiday())

    reloaded = JsonFileRepository(path)
    patterns = reloaded.load_weekly_patterns("1")
    exceptions = reloaded.load_active_exceptions(1)

    assert len(patterns) == 7
    assert patterns[0].total_work_hours == 8
    assert [e.id for e in exceptions] == [exception_id]
    assert exceptions[0].exception_type == ExceptionType.NON_WORKING
    assert "resources" in json.loads(path.read_text())


def test_conflicting_active_exception_rejected(repo):
    repo.persist_exception(holiday())

    with pytest.raises(ExceptionConflictError):
        repo.persist_exception(holiday())


def test_inactive_duplicate_is_allowed(repo):
    repo.persist_exception(holiday())
    inactive = holiday().model_copy(update={"is_active": False})

    repo.persist_exception(inactive)
    assert len(repo.load_active_exceptions(1)) == 1


def test_load_active_exceptions_by_range(repo):
    for day in ["2024-01-10", "2024-01-16", "2024-01-25"]:
        repo.persist_exception(holiday(day=day))

    found = repo.load_active_exceptions(1, date(2024, 1, 15), date(2024, 1, 20))
    assert [e.exception_date for e in found] == [date(2024, 1, 16)]


def test_patch_and_delete(repo):
    exception_id = repo.persist_exception(holiday())

    assert repo.patch_exception(exception_id, {"is_active": False}) is True
    assert repo.load_active_exceptions(1) == []
    assert repo.delete_exception(exception_id) is True
    assert repo.delete_exception(exception_id) is False
    assert repo.patch_exception(exception_id, {"notes": "x"}) is False


def test_patch_cannot_move_onto_an_occupied_date(repo):
    repo.persist_exception(holiday(day="2024-01-16"))
    moved_id = repo.persist_exception(holiday(day="2024-01-17"))

    with pytest.raises(ExceptionConflictError):
        repo.patch_exception(moved_id, {"exception_date": "2024-01-16"})

    dates = sorted(e.exception_date for e in repo.load_active_exceptions(1))
    assert dates == [date(2024, 1, 16), date(2024, 1, 17)]


def test_patch_cannot_reactivate_onto_an_occupied_date(repo):
    repo.persist_exception(holiday())
    inactive_id = repo.persist_exception(holiday().model_copy(update={"is_active": False}))

    with pytest.raises(ExceptionConflictError):
        repo.patch_exception(inactive_id, {"is_active": True})

    assert len(repo.load_active_exceptions(1)) == 1


def test_patch_keeping_its_own_date_is_allowed(repo):
    exception_id = repo.persist_exception(holiday())
    repo.persist_exception(holiday(resource_id=2))

    assert repo.patch_exception(exception_id, {"exception_date": "2024-01-16", "notes": "Moved"}) is True
    assert repo.patch_exception(exception_id, {"is_active": True}) is True
    assert repo.load_active_exceptions(1)[0].notes == "Moved"


def test_invalid_resource_survives_writes_to_others(tmp_path):
    path = tmp_path / "data.json"
    broken = {
        "weekly_patterns": [{"resource_id": 7, "day_of_week": 0, "is_active": True,
                             "total_work_hours": "8", "currency": "usd"}],
        "exceptions": [],
    }
    path.write_text(json.dumps({"resources": {"7": broken}}))

    repo = JsonFileRepository(path)
    repo.persist_exception(holiday(resource_id=1))

    stored = json.loads(path.read_text())["resources"]
    assert stored["7"] == broken
    assert "1" in stored
    assert repo.has_resource(7) is True
    assert repo.load_weekly_patterns(7) == []

    with pytest.raises(UnreadableResourceError):
        repo.save_weekly_patterns(7, default_weekly_patterns(7))
    with pytest.raises(UnreadableResourceError):
        repo.persist_exception(holiday(resource_id=7))
    assert json.loads(path.read_text())["resources"]["7"] == broken


def test_resolver_mirrors_repository_writes(repo):
    repo.save_weekly_patterns(1, default_weekly_patterns(1))
    resolver = AvailabilityResolver(repo.load_weekly_patterns(1), repo.load_active_exceptions(1))
    assert resolver.resolve_day("2024-01-16").hours_available == 8

    create = holiday()
    exception_id = repo.persist_exception(create)
    resolver.add_exception(create.to_exception(exception_id))
    assert resolver.resolve_day("2024-01-16").is_working_day is False

    repo.delete_exception(exception_id)
    resolver.remove_exception(exception_id)
    assert resolver.resolve_day("2024-01-16").is_working_day is True


class TestDataFactory:

    def test_default_week(self):
        patterns = default_weekly_patterns(1, hourly_rate="45")
        resolver = AvailabilityResolver(patterns)

        summary = resolver.summarize("2024-01-15", "2024-01-21")
        assert summary.working_days == 5
        assert summary.total_hours == 40
        assert resolver.resolve_day("2024-01-15").hourly_rate == 45

    def test_sample_exceptions_are_valid_creates(self):
        exceptions = sample_exceptions(1, date(2024, 1, 15))

        assert len(exceptions) == 7
        assert all(isinstance(e, ExceptionCreate) for e in exceptions)
        assert len({e.exception_date for e in exceptions}) == 7

    def test_sample_exception_types_match_hours(self):
        exceptions = sample_exceptions(1, date(2024, 1, 15))

        zero_hour = [e for e in exceptions if e.hours_available == 0]
        assert len(zero_hour) == 6
        assert {e.exception_type for e in zero_hour} == {ExceptionType.NON_WORKING}

        half_day = exceptions[1]
        assert half_day.exception_date == date(2024, 1, 18)
        assert half_day.exception_type == ExceptionType.CUSTOM
        assert half_day.hours_available == 4

    def test_parse_batch_skips_invalid_items(self):
        items = [
            {"day_of_week": 0, "is_active": True, "total_work_hours": "8"},
            {"day_of_week": 9, "is_active": True},
        ]
        assert [p.day_of_week for p in parse_batch(items, WeeklyPattern)] == [0]

    def test_generator_bundle(self):
        patterns, exceptions = DataGenerator(currency="EUR").generate_resource(2, date(2024, 1, 15))

        assert {p.currency for p in patterns} == {"EUR"}
        assert {e.resource_id for e in exceptions} == {2}
