from __future__ import annotations

import math
from typing import List, Optional

from fire_tracker.domain.phases import StepAssumptions, classify, step
from fire_tracker.schemas.fire import ProjectionPoint

DEFAULT_HORIZON_YEARS = 40


def round_half_up(value: float) -> int:
    """Whole-unit rounding where .5 always goes up, including for negatives."""
    return int(math.floor(value + 0.5))


def project(
    starting_value: float,
    monthly_contribution: float,
    annual_return: float,
    current_age: int,
    years: int = DEFAULT_HORIZON_YEARS,
    retirement_age: Optional[int] = None,
    withdrawal_rate: Optional[float] = None,
    is_debt_only: bool = False,
    investment_return: Optional[float] = None,
) -> List[ProjectionPoint]:
    """
    Simulate net worth one year at a time and return ``years + 1`` points.

    Conventions:
      - Each point records the value at the START of its year.
      - Working years add twelve monthly contributions, then compound
        annually. While the value is negative, ``annual_return`` is the
        interest charged on the debt.
      - Retirement years stop contributions; a positive balance pays out
        ``withdrawal_rate`` before growing, a negative one keeps accruing
        interest.
      - ``investment_return`` (default ``annual_return``) is the rate
        earned by positive balances.
    """
    savings_return = investment_return if investment_return is not None else annual_return
    assumptions = StepAssumptions(
        annual_return=annual_return,
        savings_return=savings_return,
        yearly_contribution=monthly_contribution * 12,
        withdrawal_rate=withdrawal_rate,
        is_debt_only=is_debt_only,
    )

    value = float(starting_value)
    total_contributions = 0.0
    points: List[ProjectionPoint] = []

    for year in range(years + 1):
        age = current_age + year
        points.append(
            ProjectionPoint(
                year=year,
                age=age,
                value=round_half_up(value),
                contributions=round_half_up(total_contributions),
                growth=round_half_up(value - total_contributions - starting_value),
            )
        )
        if year == years:
            break

        result = step(classify(age, value, retirement_age), value, assumptions)
        value = result.value
        total_contributions += result.contribution

    return points
