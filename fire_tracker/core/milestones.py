"""Milestone catalogue and progress cards."""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel

from fire_tracker.core.progress import progress_percent
from fire_tracker.core.projection import round_half_up
from fire_tracker.core.targets import fire_targets
from fire_tracker.schemas.fire import FIRECalculation, MilestoneCard
from fire_tracker.schemas.records import Milestone, Settings


class MilestoneTemplate(BaseModel):
    key: str
    name: str
    targetAmount: float
    description: str


def default_milestones(settings: Settings) -> List[MilestoneTemplate]:
    """Preset milestones offered when creating a new one."""
    targets = fire_targets(settings)
    return [
        MilestoneTemplate(key="break-even", name="Break Even", targetAmount=0,
                          description="Reaching $0 net worth - debt free!"),
        MilestoneTemplate(key="first-10k", name="First $10k", targetAmount=10_000,
                          description="Building initial savings momentum"),
        MilestoneTemplate(key="first-50k", name="First $50k", targetAmount=50_000,
                          description="Significant savings milestone"),
        MilestoneTemplate(key="first-100k", name="First $100k", targetAmount=100_000,
                          description="The hardest milestone - building initial momentum"),
        MilestoneTemplate(key="coast-fire", name="Coast FIRE", targetAmount=round_half_up(targets.coast),
                          description="Let compound interest work until retirement"),
        MilestoneTemplate(key="lean-fire", name="Lean FIRE", targetAmount=round_half_up(targets.lean),
                          description="Minimal lifestyle financial independence"),
        MilestoneTemplate(key="fire", name="FIRE", targetAmount=round_half_up(targets.fire),
                          description="Full financial independence"),
        MilestoneTemplate(key="fat-fire", name="Fat FIRE", targetAmount=round_half_up(targets.fat),
                          description="Comfortable lifestyle financial independence"),
    ]


def fire_milestone_cards(
    current_net_worth: float, metrics: FIRECalculation, baseline: float = 0.0
) -> List[MilestoneCard]:
    """The four fixed FIRE levels, in the order the dashboard shows them."""
    levels = [
        ("Lean FIRE", metrics.leanFIRENumber, "Minimal lifestyle"),
        ("Coast FIRE", metrics.coastFIRENumber, "Stop contributing"),
        ("FIRE", metrics.fireNumber, "Full independence"),
        ("Fat FIRE", metrics.fatFIRENumber, "Comfortable lifestyle"),
    ]
    return [
        MilestoneCard(
            name=name,
            amount=amount,
            description=description,
            achieved=current_net_worth >= amount,
            progress=progress_percent(current_net_worth, amount, baseline),
        )
        for name, amount, description in levels
    ]


def milestone_progress(milestone: Milestone, current_net_worth: float, baseline: float = 0.0) -> float:
    return progress_percent(current_net_worth, milestone.targetAmount, baseline)


def upcoming_milestones(
    milestones: Sequence[Milestone],
    current_net_worth: float,
    baseline: float = 0.0,
    limit: int = 3,
) -> List[MilestoneCard]:
    pending = sorted(
        (milestone for milestone in milestones if not milestone.achieved),
        key=lambda milestone: milestone.targetAmount,
    )
    return [
        MilestoneCard(
            name=milestone.name,
            amount=milestone.targetAmount,
            description=milestone.description or "",
            achieved=False,
            progress=milestone_progress(milestone, current_net_worth, baseline),
        )
        for milestone in pending[:limit]
    ]
