"""Static FIRE target amounts derived from settings."""

from __future__ import annotations

from fire_tracker.schemas.fire import FireTargets
from fire_tracker.schemas.records import Settings

LEAN_FIRE_RATIO = 0.6
FAT_FIRE_RATIO = 1.5


def fire_number(settings: Settings) -> float:
    return settings.fireTarget


def lean_fire_number(settings: Settings) -> float:
    return settings.fireTarget * LEAN_FIRE_RATIO


def fat_fire_number(settings: Settings) -> float:
    return settings.fireTarget * FAT_FIRE_RATIO


def real_return(nominal_rate: float, inflation_rate: float) -> float:
    """Simple (not Fisher) real return: nominal minus inflation."""
    return nominal_rate - inflation_rate


def coast_fire_number(settings: Settings) -> float:
    """
    Amount that, left untouched at the real rate of return, grows to the
    FIRE target by retirement age.
    """
    years_to_retirement = settings.retirementAge - settings.currentAge
    rate = real_return(settings.expectedReturn, settings.inflationRate)
    return settings.fireTarget / (1 + rate) ** years_to_retirement


def fire_targets(settings: Settings) -> FireTargets:
    return FireTargets(
        fire=fire_number(settings),
        lean=lean_fire_number(settings),
        fat=fat_fire_number(settings),
        coast=coast_fire_number(settings),
    )
