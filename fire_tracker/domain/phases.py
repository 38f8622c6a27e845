from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    ACCUMULATING = "accumulating"
    DEBT_PAYDOWN = "debt-paydown"
    DEBT_PAID_OFF = "debt-paid-off"
    RETIRED_WITH_POSITIVE_WORTH = "retired-positive"
    RETIRED_IN_DEBT = "retired-in-debt"
    RETIRED_EMPTY = "retired-empty"


@dataclass(frozen=True)
class StepAssumptions:
    """Per-projection constants every yearly step reads."""

    annual_return: float
    savings_return: float
    yearly_contribution: float
    withdrawal_rate: Optional[float] = None
    is_debt_only: bool = False


@dataclass(frozen=True)
class StepResult:
    value: float
    contribution: float
    phase: Phase


def is_retired(age: int, retirement_age: Optional[int]) -> bool:
    return retirement_age is not None and age >= retirement_age


def classify(age: int, value: float, retirement_age: Optional[int]) -> Phase:
    """Phase a year starts in, from the simulated age and the sign of the value."""
    if is_retired(age, retirement_age):
        if value > 0:
            return Phase.RETIRED_WITH_POSITIVE_WORTH
        if value < 0:
            return Phase.RETIRED_IN_DEBT
        return Phase.RETIRED_EMPTY
    if value < 0:
        return Phase.DEBT_PAYDOWN
    return Phase.ACCUMULATING


def _accumulate(value: float, assumptions: StepAssumptions) -> StepResult:
    contribution = assumptions.yearly_contribution
    new_value = (value + contribution) * (1 + assumptions.savings_return)
    return StepResult(new_value, contribution, Phase.ACCUMULATING)


def _pay_down_debt(value: float, assumptions: StepAssumptions) -> StepResult:
    contribution = assumptions.yearly_contribution
    # negative balance times a positive rate grows the debt
    debt_interest = value * assumptions.annual_return
    new_value = value + contribution + debt_interest

    if new_value < 0:
        return StepResult(new_value, contribution, Phase.DEBT_PAYDOWN)

    # Only a debt-only projection invests the overshoot within the same
    # year; a mixed net worth starts growing again from the next step.
    if assumptions.is_debt_only:
        new_value *= 1 + assumptions.savings_return
    return StepResult(new_value, contribution, Phase.DEBT_PAID_OFF)


def _withdraw(value: float, assumptions: StepAssumptions) -> StepResult:
    withdrawal = value * assumptions.withdrawal_rate if assumptions.withdrawal_rate else 0.0
    new_value = (value - withdrawal) * (1 + assumptions.savings_return)
    logger.debug(
        "retirement step: before=%s withdrawal=%s after=%s", value, withdrawal, new_value
    )
    return StepResult(new_value, 0.0, Phase.RETIRED_WITH_POSITIVE_WORTH)


def _accrue_debt(value: float, assumptions: StepAssumptions) -> StepResult:
    # no payments after retirement, interest keeps compounding
    return StepResult(value * (1 + assumptions.annual_return), 0.0, Phase.RETIRED_IN_DEBT)


def _hold(value: float, assumptions: StepAssumptions) -> StepResult:
    return StepResult(value, 0.0, Phase.RETIRED_EMPTY)


_STEPS: Dict[Phase, Callable[[float, StepAssumptions], StepResult]] = {
    Phase.ACCUMULATING: _accumulate,
    Phase.DEBT_PAYDOWN: _pay_down_debt,
    Phase.RETIRED_WITH_POSITIVE_WORTH: _withdraw,
    Phase.RETIRED_IN_DEBT: _accrue_debt,
    Phase.RETIRED_EMPTY: _hold,
}


def step(phase: Phase, value: float, assumptions: StepAssumptions) -> StepResult:
    """Advance ``value`` by one simulated year in ``phase``."""
    try:
        handler = _STEPS[phase]
    except KeyError:
        raise ValueError(f"{phase} is an outcome, not a starting phase") from None
    return handler(value, assumptions)
