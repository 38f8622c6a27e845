from __future__ import annotations

import math
from math import isclose

from fire_tracker.core.metrics import fire_metrics
from fire_tracker.core.milestones import (
    default_milestones,
    fire_milestone_cards,
    upcoming_milestones,
)
from fire_tracker.schemas.records import Milestone, NetWorthSnapshot


def history(*entries):
    return [
        NetWorthSnapshot(id=str(index), date=date, netWorth=net_worth)
        for index, (net_worth, date) in enumerate(entries)
    ]


def test_metrics_without_history(settings):
    result = fire_metrics(250_000, 2000, settings)

    assert result.fireNumber == 1_000_000
    assert result.currentNetWorth == 250_000
    assert result.progressPercentage == 25
    assert 0 < result.yearsToFIRE < 35
    assert result.monthlyContributionNeeded > 0
    assert isclose(result.leanFIRENumber, 600_000)
    assert isclose(result.fatFIRENumber, 1_500_000)
    assert isclose(result.coastFIRENumber, 1_000_000 / 1.04**35)


def test_metrics_use_earliest_snapshot_as_baseline(settings):
    unsorted = history(
        (100_000, "2024-01-01T00:00:00.000Z"),
        (50_000, "2023-01-01T00:00:00.000Z"),
        (75_000, "2023-06-01T00:00:00.000Z"),
    )
    result = fire_metrics(250_000, 2000, settings, unsorted)

    assert isclose(result.progressPercentage, 21.05, abs_tol=0.01)


def test_metrics_with_empty_history(settings):
    assert fire_metrics(250_000, 2000, settings, []).progressPercentage == 25


def test_metrics_with_debt_baseline(settings):
    debt = history(
        (-100_000, "2023-01-01T00:00:00.000Z"),
        (-50_000, "2023-06-01T00:00:00.000Z"),
    )
    result = fire_metrics(100_000, 2000, settings, debt)

    assert isclose(result.progressPercentage, 18.18, abs_tol=0.01)


def test_metrics_below_baseline(settings):
    high_start = history((300_000, "2023-01-01T00:00:00.000Z"))
    assert fire_metrics(250_000, 2000, settings, high_start).progressPercentage == 0


def test_metrics_when_nothing_is_saved(settings):
    result = fire_metrics(100_000, 0, settings)

    assert result.yearsToFIRE == math.inf
    assert result.monthlyContributionNeeded == 0
    # JSON has no infinity
    assert result.model_dump(mode="json")["yearsToFIRE"] is None
    assert result.model_dump()["yearsToFIRE"] == math.inf


def test_metrics_when_target_met(settings):
    result = fire_metrics(1_200_000, 1000, settings)

    assert result.yearsToFIRE == 0
    assert result.monthlyContributionNeeded == 0
    assert result.progressPercentage == 100


def test_fire_milestone_cards(settings):
    metrics = fire_metrics(700_000, 2000, settings)
    cards = fire_milestone_cards(700_000, metrics)

    assert [card.name for card in cards] == ["Lean FIRE", "Coast FIRE", "FIRE", "Fat FIRE"]
    assert [card.achieved for card in cards] == [True, True, False, False]
    assert cards[0].progress == 100
    assert isclose(cards[2].progress, 70)


def test_upcoming_milestones_skip_achieved_and_sort_by_target():
    milestones = [
        Milestone(id="a", name="Half million", targetAmount=500_000),
        Milestone(id="b", name="First 10k", targetAmount=10_000, achieved=True),
        Milestone(id="c", name="Break even", targetAmount=0),
        Milestone(id="d", name="100k", targetAmount=100_000),
        Milestone(id="e", name="Million", targetAmount=1_000_000),
    ]
    cards = upcoming_milestones(milestones, current_net_worth=-25_000, baseline=-100_000)

    assert [card.name for card in cards] == ["Break even", "100k", "Half million"]
    assert cards[0].progress == 75


def test_default_milestones_follow_settings(settings):
    templates = {item.key: item for item in default_milestones(settings)}

    assert templates["break-even"].targetAmount == 0
    assert templates["first-100k"].targetAmount == 100_000
    assert templates["coast-fire"].targetAmount == 253_415
    assert templates["fat-fire"].targetAmount == 1_500_000
