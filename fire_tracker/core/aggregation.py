"""
Adapters from stored records to the scalars the engine consumes.

Every currency default is filled in here so the engine only ever sees
explicit amounts in the display currency.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from fire_tracker.core.currency import (
    DEFAULT_CURRENCY,
    asset_currency,
    convert_amount,
    convert_contribution,
)
from fire_tracker.core.frequency import to_monthly
from fire_tracker.core.projection import DEFAULT_HORIZON_YEARS
from fire_tracker.schemas.records import (
    Asset,
    Liability,
    NetWorthSnapshot,
    Settings,
    utc_now,
)


@dataclass(frozen=True)
class Holding:
    """An asset expressed in the display currency."""

    asset_id: str
    currency: str
    value: float
    monthly_contribution: float


@dataclass(frozen=True)
class ProjectionInputs:
    starting_value: float
    monthly_contribution: float
    annual_return: float
    current_age: int
    years: int
    retirement_age: Optional[int]
    withdrawal_rate: Optional[float]
    is_debt_only: bool
    investment_return: float


def normalize_holdings(
    assets: Sequence[Asset],
    settings: Settings,
    rate: Optional[float] = None,
    default_currency: str = DEFAULT_CURRENCY,
) -> List[Holding]:
    holdings: List[Holding] = []
    for asset in assets:
        currency = asset_currency(asset, default_currency)
        monthly = to_monthly(asset.contributions, asset.contributionFrequency)
        holdings.append(
            Holding(
                asset_id=asset.id,
                currency=currency,
                value=convert_amount(asset.value, currency, settings.currency, rate),
                monthly_contribution=convert_contribution(
                    monthly, currency, settings.currency, rate
                ),
            )
        )
    return holdings


def total_assets(
    assets: Sequence[Asset], settings: Settings, rate: Optional[float] = None
) -> float:
    return sum((holding.value for holding in normalize_holdings(assets, settings, rate)), 0.0)


def total_liabilities(liabilities: Sequence[Liability]) -> float:
    # liabilities are recorded in the display currency
    return sum((liability.balance for liability in liabilities), 0.0)


def net_worth(
    assets: Sequence[Asset],
    liabilities: Sequence[Liability],
    settings: Settings,
    rate: Optional[float] = None,
) -> float:
    return total_assets(assets, settings, rate) - total_liabilities(liabilities)


def monthly_asset_contributions(
    assets: Sequence[Asset], settings: Settings, rate: Optional[float] = None
) -> float:
    return sum(
        (holding.monthly_contribution for holding in normalize_holdings(assets, settings, rate)),
        0.0,
    )


def monthly_liability_payments(liabilities: Sequence[Liability]) -> float:
    return sum(
        (to_monthly(item.minimumPayment, item.paymentFrequency or "monthly") for item in liabilities),
        0.0,
    )


def dashboard_monthly_contribution(
    assets: Sequence[Asset],
    liabilities: Sequence[Liability],
    settings: Settings,
    rate: Optional[float] = None,
) -> float:
    """What is left for investing once minimum debt payments are made."""
    available = monthly_asset_contributions(assets, settings, rate) - monthly_liability_payments(
        liabilities
    )
    return max(0.0, available)


def weighted_liability_rate(liabilities: Sequence[Liability]) -> float:
    """Balance-weighted annual interest rate as a fraction."""
    total_balance = total_liabilities(liabilities)
    if total_balance <= 0:
        return 0.0
    return sum(
        (item.interestRate / 100 * (item.balance / total_balance) for item in liabilities),
        0.0,
    )


def projection_inputs(
    assets: Sequence[Asset],
    liabilities: Sequence[Liability],
    settings: Settings,
    rate: Optional[float] = None,
    years: int = DEFAULT_HORIZON_YEARS,
) -> ProjectionInputs:
    """
    Chart inputs for a (possibly filtered) set of records.

    With only liabilities selected the projection starts at the negative
    debt balance, charges the weighted liability rate while in debt and
    switches to the expected return once the debt is gone.
    """
    is_debt_only = not assets and bool(liabilities)
    current = net_worth(assets, liabilities, settings, rate)
    payments = monthly_liability_payments(liabilities)

    if current < 0:
        # minimum payments are what shrinks the debt
        monthly = payments
    elif current == 0 and is_debt_only:
        monthly = 0.0
    else:
        monthly = max(0.0, monthly_asset_contributions(assets, settings, rate) - payments)

    starting_value = -total_liabilities(liabilities) if is_debt_only else current
    annual_return = weighted_liability_rate(liabilities) if is_debt_only else settings.expectedReturn

    return ProjectionInputs(
        starting_value=starting_value,
        monthly_contribution=monthly,
        annual_return=annual_return,
        current_age=settings.currentAge,
        years=years,
        retirement_age=settings.retirementAge,
        withdrawal_rate=settings.withdrawalRate,
        is_debt_only=is_debt_only,
        investment_return=settings.expectedReturn,
    )


def take_snapshot(
    assets: Sequence[Asset],
    liabilities: Sequence[Liability],
    settings: Settings,
    rate: Optional[float] = None,
    now: Optional[datetime] = None,
) -> NetWorthSnapshot:
    assets_total = total_assets(assets, settings, rate)
    liabilities_total = total_liabilities(liabilities)
    return NetWorthSnapshot(
        id=uuid.uuid4().hex,
        date=now or utc_now(),
        assets=assets_total,
        liabilities=liabilities_total,
        netWorth=assets_total - liabilities_total,
    )
