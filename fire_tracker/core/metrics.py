"""Summary FIRE metrics for the dashboard."""

from __future__ import annotations

from typing import Iterable, Optional

from fire_tracker.core.progress import baseline_from_history, progress_percent
from fire_tracker.core.solver import contribution_needed, years_to_target
from fire_tracker.core.targets import fire_targets
from fire_tracker.schemas.fire import FIRECalculation
from fire_tracker.schemas.records import NetWorthSnapshot, Settings


def fire_metrics(
    current_net_worth: float,
    monthly_contribution: float,
    settings: Settings,
    history: Optional[Iterable[NetWorthSnapshot]] = None,
) -> FIRECalculation:
    targets = fire_targets(settings)

    years = years_to_target(
        current_net_worth,
        monthly_contribution,
        targets.fire,
        settings.expectedReturn,
        settings.currentAge,
        settings.retirementAge,
    )
    needed = contribution_needed(
        current_net_worth,
        targets.fire,
        years,
        settings.expectedReturn,
    )
    progress = progress_percent(
        current_net_worth,
        targets.fire,
        baseline_from_history(history),
    )

    return FIRECalculation(
        fireNumber=targets.fire,
        currentNetWorth=current_net_worth,
        yearsToFIRE=years,
        monthlyContributionNeeded=needed,
        progressPercentage=progress,
        coastFIRENumber=targets.coast,
        leanFIRENumber=targets.lean,
        fatFIRENumber=targets.fat,
    )
