from __future__ import annotations

from fire_tracker.core.projection import project, round_half_up


def values(points):
    return [point.value for point in points]


def test_projection_covers_every_year_inclusive():
    points = project(100_000, 2000, 0.07, 30, years=10)

    assert len(points) == 11
    assert points[0].age == 30
    assert points[0].value == 100_000
    assert points[10].age == 40
    assert points[10].value > 100_000
    assert [point.year for point in points] == list(range(11))


def test_zero_years_returns_starting_point_only():
    points = project(12_345, 500, 0.07, 42, years=0)

    assert len(points) == 1
    assert points[0].value == 12_345
    assert points[0].contributions == 0
    assert points[0].growth == 0


def test_default_horizon_is_forty_years():
    assert len(project(0, 100, 0.05, 25)) == 41


def test_zero_growth_accumulates_contributions_only():
    """
    With zero return, value is the start plus cumulative contributions and growth stays at zero.
    """
    points = project(1000, 100, 0.0, 30, years=2)

    assert values(points) == [1000, 2200, 3400]
    assert [point.contributions for point in points] == [0, 1200, 2400]
    assert [point.growth for point in points] == [0, 0, 0]


def test_contributions_are_added_before_growth():
    points = project(1000, 100, 0.1, 30, years=1)
    # (1000 + 1200) * 1.1
    assert points[1].value == 2420
    assert points[1].growth == 2420 - 1200 - 1000


def test_negative_return_shrinks_the_balance():
    points = project(10_000, 0, -0.1, 30, years=2)
    assert values(points) == [10_000, 9000, 8100]


def test_debt_scenario_pays_down_over_time():
    points = project(-300_000, 2000, 0.05, 30, 10, None, None, True, 0.07)

    assert points[0].value == -300_000
    assert points[5].value > -300_000


def test_debt_persists_while_payments_trail_interest():
    points = project(-10_000, 100, 0.1, 30, years=1)
    # -10000 + 1200 - 1000 interest
    assert points[1].value == -9800


def test_debt_crossover_without_debt_only_flag_does_not_grow_same_year():
    points = project(-1000, 100, 0.1, 30, years=2, investment_return=0.5)
    # -1000 + 1200 - 100 = 100, then a normal growth year
    assert points[1].value == 100
    assert points[2].value == round_half_up((100 + 1200) * 1.5)


def test_debt_only_crossover_invests_the_overshoot_immediately():
    points = project(-1000, 100, 0.1, 30, years=1, is_debt_only=True, investment_return=0.5)
    assert points[1].value == 150


def test_debt_only_without_investment_return_reuses_debt_rate():
    points = project(-1000, 100, 0.1, 30, years=1, is_debt_only=True)
    assert points[1].value == 110


def test_retirement_withdrawal_precedes_growth():
    points = project(500_000, 0, 0.07, 65, 10, retirement_age=65, withdrawal_rate=0.04)

    assert points[1].value < points[0].value * 1.07
    assert points[1].value == round_half_up(500_000 * 0.96 * 1.07)


def test_retirement_without_withdrawal_rate_only_grows():
    points = project(1000, 500, 0.1, 65, years=1, retirement_age=65)
    assert points[1].value == 1100
    assert points[1].contributions == 0


def test_retirement_uses_investment_return_for_positive_balance():
    points = project(1000, 0, 0.1, 65, years=1, retirement_age=65, investment_return=0.2)
    assert points[1].value == 1200


def test_debt_in_retirement_keeps_accruing_interest():
    points = project(-1000, 500, 0.1, 65, years=2, retirement_age=65)
    assert values(points) == [-1000, -1100, -1210]
    assert points[2].contributions == 0


def test_empty_balance_in_retirement_stays_empty():
    points = project(0, 0, 0.07, 70, years=3, retirement_age=65, withdrawal_rate=0.04)
    assert values(points) == [0, 0, 0, 0]


def test_contributions_stop_at_retirement_age():
    points = project(0, 100, 0.0, 63, years=4, retirement_age=65)

    assert values(points) == [0, 1200, 2400, 2400, 2400]
    assert [point.contributions for point in points] == [0, 1200, 2400, 2400, 2400]


def test_growth_is_measured_against_the_starting_value():
    points = project(-300_000, 2000, 0.05, 30, years=3)
    for point in points:
        assert abs(point.growth - (point.value - point.contributions + 300_000)) <= 1


def test_round_half_up_matches_whole_unit_display():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(1056.0000000000002) == 1056
