"""Currency conversion between the two supported codes (USD and NZD)."""

from __future__ import annotations

from typing import Iterable, Optional

from fire_tracker.schemas.records import Asset

DEFAULT_USD_TO_NZD = 1.65
DEFAULT_CURRENCY = "NZD"


def get_exchange_rate(stored_rate: Optional[float] = None) -> float:
    """Return the stored USD->NZD rate, or the default when none is stored."""
    return stored_rate or DEFAULT_USD_TO_NZD


def convert_amount(
    amount: float,
    from_currency: str,
    to_currency: str,
    rate: Optional[float] = None,
) -> float:
    """
    Convert ``amount`` using a USD->NZD ``rate``.

    NZD->USD divides by the same rate so a round trip is lossless. Pairs
    other than USD/NZD are returned unchanged.
    """
    if from_currency == to_currency:
        return amount

    usd_to_nzd = get_exchange_rate(rate)
    if from_currency == "USD" and to_currency == "NZD":
        return amount * usd_to_nzd
    if from_currency == "NZD" and to_currency == "USD":
        return amount / usd_to_nzd
    return amount


def convert_contribution(
    amount: float,
    from_currency: str,
    to_currency: str,
    rate: Optional[float] = None,
) -> float:
    """Convert a recurring contribution; same pair rules as point values."""
    return convert_amount(amount, from_currency, to_currency, rate)


def asset_currency(asset: Asset, default_currency: str = DEFAULT_CURRENCY) -> str:
    return asset.stockCurrency or default_currency


def convert_asset_value(
    asset: Asset,
    target_currency: str,
    rate: Optional[float] = None,
    default_currency: str = DEFAULT_CURRENCY,
) -> float:
    return convert_amount(
        asset.value,
        asset_currency(asset, default_currency),
        target_currency,
        rate,
    )


def convert_asset_total(
    assets: Iterable[Asset],
    target_currency: str,
    rate: Optional[float] = None,
    default_currency: str = DEFAULT_CURRENCY,
) -> float:
    """Convert every asset on its own, then sum."""
    return sum(
        (convert_asset_value(asset, target_currency, rate, default_currency) for asset in assets),
        0.0,
    )
