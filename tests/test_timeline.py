from decimal import Decimal

from availability.timeline import (
    AvailabilityStatus,
    TimelineFilters,
    build_timeline,
    filter_timeline,
    total_cost,
)


def test_cost_is_hours_times_rate(week_resolver):
    timeline = build_timeline(week_resolver, "2024-01-15", "2024-01-19")

    assert [d.cost for d in timeline] == [400, 0, 400, 400, 400]
    assert total_cost(timeline) == Decimal("1600")


def test_timeline_keeps_resolution_fields(week_resolver):
    day = build_timeline(week_resolver, "2024-01-16", "2024-01-16")[0]

    assert day.date == "2024-01-16"
    assert day.source == "exception"
    assert day.notes == "New Year"


def test_no_filters_returns_everything(week_resolver):
    timeline = build_timeline(week_resolver, "2024-01-15", "2024-01-21")
    assert len(filter_timeline(timeline)) == 7


def test_status_filters(week_resolver):
    timeline = build_timeline(week_resolver, "2024-01-15", "2024-01-21")

    working = filter_timeline(timeline, TimelineFilters(status=AvailabilityStatus.WORKING))
    off = filter_timeline(timeline, TimelineFilters(status="non-working"))
    overridden = filter_timeline(timeline, TimelineFilters(status="exception"))

    assert [d.date for d in working] == ["2024-01-15", "2024-01-17", "2024-01-18", "2024-01-19"]
    assert [d.date for d in off] == ["2024-01-16", "2024-01-20", "2024-01-21"]
    assert [d.date for d in overridden] == ["2024-01-16"]


def test_hour_bounds(week_resolver):
    timeline = build_timeline(week_resolver, "2024-01-15", "2024-01-21")

    assert len(filter_timeline(timeline, TimelineFilters(min_hours=1))) == 4
    assert len(filter_timeline(timeline, TimelineFilters(max_hours=0))) == 3
    assert filter_timeline(timeline, TimelineFilters(min_hours=9)) == []
