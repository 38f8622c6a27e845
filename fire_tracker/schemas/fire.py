"""Data contracts for the projection and FIRE-metrics engine."""

from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from fire_tracker.schemas.records import NetWorthSnapshot, Settings


class ProjectionPoint(BaseModel):
    """Single year of a net-worth projection, in whole currency units."""

    year: int = Field(..., ge=0)
    age: int
    value: int
    contributions: int
    growth: int


class FireTargets(BaseModel):
    fire: float
    lean: float
    fat: float
    coast: float


class FIRECalculation(BaseModel):
    """Summary metrics shown on the dashboard."""

    fireNumber: float
    currentNetWorth: float
    yearsToFIRE: float
    monthlyContributionNeeded: float
    progressPercentage: float = Field(..., ge=0, le=100)
    coastFIRENumber: float
    leanFIRENumber: float
    fatFIRENumber: float

    @field_serializer("yearsToFIRE", when_used="json")
    def _never_reached(self, value: float) -> Optional[float]:
        # JSON has no infinity; null means "never at the current rate"
        return None if math.isinf(value) else value


class MilestoneCard(BaseModel):
    name: str
    amount: float
    description: str
    achieved: bool
    progress: float


# --- calculation requests ---


class ConvertRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: float
    fromCurrency: str
    toCurrency: str
    rate: Optional[float] = Field(default=None, gt=0)


class MonthlyRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    amount: float
    frequency: str


class YearsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    currentNetWorth: float
    monthlyContribution: float
    target: float
    annualReturn: float
    currentAge: int
    retirementAge: int


class ContributionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    currentNetWorth: float
    target: float
    years: float
    annualReturn: float


class ProgressRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current: float
    target: float
    baseline: float = 0.0


class ProjectionRequest(BaseModel):
    """Inputs of a raw projection; mirrors the engine call one to one."""

    model_config = ConfigDict(extra="forbid")

    startingValue: float
    monthlyContribution: float
    annualReturn: float
    currentAge: int
    years: int = Field(default=40, ge=0, le=120)
    retirementAge: Optional[int] = None
    withdrawalRate: Optional[float] = None
    isDebtOnly: bool = False
    investmentReturn: Optional[float] = None


class MetricsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    currentNetWorth: float
    monthlyContribution: float
    settings: Settings
    history: Optional[List[NetWorthSnapshot]] = None


class ProjectionResponse(BaseModel):
    points: List[ProjectionPoint]
    startingValue: float
    monthlyContribution: float
    annualReturn: float
    isDebtOnly: bool
    fireTarget: float
    leanFire: float
    fatFire: float
    filterSummary: str = ""


class DashboardResponse(BaseModel):
    currency: str
    exchangeRate: float
    totalAssets: float
    totalLiabilities: float
    netWorth: float
    monthlyContribution: float
    baseline: float
    metrics: FIRECalculation
    fireMilestones: List[MilestoneCard]
    upcomingMilestones: List[MilestoneCard]
