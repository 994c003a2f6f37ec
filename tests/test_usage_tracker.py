"""Tests for the paid-API usage tracker."""

import logging
from datetime import date

import pytest

from entity_suggest.protocols import UsageTracker
from entity_suggest.repositories import ApiUsageTracker


class FakeToday:
    def __init__(self, day: date) -> None:
        self.day = day

    def __call__(self) -> date:
        return self.day


@pytest.fixture
def today():
    return FakeToday(date(2026, 3, 15))


@pytest.fixture
def tracker(today):
    return ApiUsageTracker(budgets={"places": 10}, today=today)


@pytest.mark.asyncio
async def test_counts_by_day_month_and_total(tracker):
    for _ in range(3):
        await tracker.record_external_call("places")

    stats = tracker.get_stats()["places"]
    assert stats["daily"] == {"2026-03-15": 3}
    assert stats["monthly"] == {"2026-03": 3}
    assert stats["total"] == 3


@pytest.mark.asyncio
async def test_old_counts_are_pruned(tracker, today):
    today.day = date(2026, 1, 1)
    await tracker.record_external_call("places")

    today.day = date(2026, 2, 15)
    await tracker.record_external_call("places")
    stats = tracker.get_stats()["places"]
    assert stats["daily"] == {"2026-02-15": 1}
    assert stats["monthly"] == {"2026-01": 1, "2026-02": 1}

    today.day = date(2027, 2, 1)
    await tracker.record_external_call("places")
    stats = tracker.get_stats()["places"]
    assert stats["monthly"] == {"2026-02": 1, "2027-02": 1}
    assert stats["total"] == 3


@pytest.mark.asyncio
async def test_warns_near_monthly_budget(tracker, caplog):
    with caplog.at_level(logging.WARNING, logger="entity_suggest.repositories.usage_tracker"):
        for _ in range(7):
            await tracker.record_external_call("places")
        assert caplog.records == []

        await tracker.record_external_call("places")

    assert "places usage at 8 of 10 monthly calls (80%)" in caplog.text


@pytest.mark.asyncio
async def test_month_analysis(tracker):
    for _ in range(8):
        await tracker.record_external_call("places")
    await tracker.record_external_call("other")

    assert tracker.month_analysis("places") == {
        "usage": 8,
        "limit": 10,
        "remaining_calls": 2,
        "percentage_used": 80.0,
        "within_limit": True,
    }
    assert tracker.month_analysis("other") == {"usage": 1, "limit": None}


def test_default_budget_covers_places():
    stats = ApiUsageTracker().get_stats()

    assert stats["places"]["current_month"]["limit"] == 6250
    assert stats["places"]["total"] == 0


def test_satisfies_protocol(tracker):
    assert isinstance(tracker, UsageTracker)
