"""
Closed-form inversions of the future value of an ordinary annuity.

Both solvers work in monthly compounding units (annual return / 12).
"""

from __future__ import annotations

import math


def years_to_target(
    current_net_worth: float,
    monthly_contribution: float,
    target: float,
    annual_return: float,
    current_age: int,
    retirement_age: int,
) -> float:
    """
    Years until ``target`` is reached, or until retirement if that comes first.

    Returns ``0`` when the target is already met and ``math.inf`` when
    nothing is being saved. A target that deposits can never reach
    (returns negative enough to outpace them) reports the years left to
    retirement, not ``math.inf``.
    """
    if current_net_worth >= target:
        return 0
    if monthly_contribution <= 0:
        return math.inf

    monthly_return = annual_return / 12
    shortfall = target - current_net_worth

    if monthly_return == 0:
        months = shortfall / monthly_contribution
    else:
        growth_ratio = shortfall * monthly_return / monthly_contribution + 1
        if growth_ratio <= 0:
            # negative returns eat the deposits faster than they arrive;
            # the retirement cap below turns this into the horizon
            months = math.inf
        else:
            months = math.log(growth_ratio) / math.log(1 + monthly_return)

    financial_years = max(0.0, months / 12)
    years_to_retirement = retirement_age - current_age

    # capped at retirement: callers never show a FIRE age past it
    return min(financial_years, years_to_retirement)


def contribution_needed(
    current_net_worth: float,
    target: float,
    years: float,
    annual_return: float,
) -> float:
    """Level monthly deposit that closes the gap to ``target`` in ``years``."""
    if years <= 0 or current_net_worth >= target:
        return 0
    if math.isinf(years):
        # no finite deadline, so no level deposit is implied
        return 0

    monthly_return = annual_return / 12
    months = years * 12
    compound = (1 + monthly_return) ** months

    remaining = target - current_net_worth * compound
    if remaining <= 0:
        return 0

    if monthly_return == 0:
        annuity_factor = months
    else:
        annuity_factor = (compound - 1) / monthly_return
    return remaining / annuity_factor
