"""Progress toward a target, optionally measured from a historical baseline."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from fire_tracker.schemas.records import NetWorthSnapshot

logger = logging.getLogger(__name__)


def _clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))


def progress_percent(current: float, target: float, baseline: float = 0.0) -> float:
    """
    Percentage (0-100) of the way from ``baseline`` to ``target``.

    A target of zero is the break-even milestone: while still in debt,
    progress runs from the starting debt toward zero.
    """
    if target == 0 and current < 0:
        logger.debug(
            "break-even progress: current=%s baseline=%s", current, baseline
        )
        if baseline < 0:
            return _clamp_percent((current - baseline) / (0 - baseline) * 100)
        # started positive and slid into debt
        return 0.0

    if current >= target:
        return 100.0

    progress_amount = current - baseline
    target_amount = target - baseline
    if target_amount <= 0:
        return 100.0

    return _clamp_percent(progress_amount / target_amount * 100)


def baseline_from_history(history: Optional[Iterable[NetWorthSnapshot]]) -> float:
    """Net worth of the earliest-dated snapshot, or 0 without history."""
    snapshots = sorted(history or [], key=lambda snapshot: snapshot.date)
    if not snapshots:
        return 0.0
    return snapshots[0].netWorth
