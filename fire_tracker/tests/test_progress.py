from __future__ import annotations

from math import isclose

from fire_tracker.core.progress import baseline_from_history, progress_percent
from fire_tracker.schemas.records import NetWorthSnapshot


def snapshot(net_worth: float, date: str) -> NetWorthSnapshot:
    return NetWorthSnapshot(id=date, date=date, netWorth=net_worth)


def test_progress_without_baseline():
    assert progress_percent(250_000, 1_000_000) == 25
    assert progress_percent(1_500_000, 1_000_000) == 100
    assert progress_percent(-50_000, 1_000_000) == 0


def test_progress_relative_to_baseline():
    # (250k - 50k) / (1M - 50k)
    assert isclose(progress_percent(250_000, 1_000_000, 50_000), 21.05, abs_tol=0.01)
    # started in debt: (100k + 50k) / (1M + 50k)
    assert isclose(progress_percent(100_000, 1_000_000, -50_000), 14.29, abs_tol=0.01)


def test_progress_below_baseline_is_zero():
    assert progress_percent(50_000, 1_000_000, 100_000) == 0


def test_target_met_from_any_baseline_is_full():
    assert progress_percent(1_000_000, 1_000_000, 100_000) == 100
    assert progress_percent(1_200_000, 1_000_000, 100_000) == 100
    assert progress_percent(1_000_000, 1_000_000, 1_000_000) == 100


def test_baseline_beyond_target_counts_as_reached():
    assert progress_percent(500_000, 1_000_000, 1_200_000) == 100


def test_break_even_from_debt_baseline():
    assert progress_percent(-25_000, 0, -100_000) == 75
    assert progress_percent(-100_000, 0, -100_000) == 0
    # worse than where we started
    assert progress_percent(-150_000, 0, -100_000) == 0


def test_break_even_after_sliding_into_debt():
    assert progress_percent(-1_000, 0, 5_000) == 0
    assert progress_percent(-1_000, 0) == 0


def test_break_even_reached():
    assert progress_percent(0, 0, -100_000) == 100
    assert progress_percent(20_000, 0, -100_000) == 100


def test_baseline_is_earliest_snapshot():
    history = [
        snapshot(100_000, "2024-01-01T00:00:00.000Z"),
        snapshot(50_000, "2023-01-01T00:00:00.000Z"),
        snapshot(75_000, "2023-06-01T00:00:00.000Z"),
    ]
    assert baseline_from_history(history) == 50_000
    # input order is left alone
    assert [item.netWorth for item in history] == [100_000, 50_000, 75_000]


def test_baseline_mixes_naive_and_aware_dates():
    history = [
        snapshot(10, "2023-02-01T00:00:00Z"),
        snapshot(20, "2023-01-15T00:00:00"),
    ]
    assert baseline_from_history(history) == 20


def test_baseline_defaults_to_zero():
    assert baseline_from_history(None) == 0
    assert baseline_from_history([]) == 0
