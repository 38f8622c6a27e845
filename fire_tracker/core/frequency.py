"""Periodic amount normalization."""

from __future__ import annotations

from typing import Dict

_LABELS: Dict[str, str] = {
    "weekly": "Weekly",
    "fortnightly": "Fortnightly",
    "monthly": "Monthly",
    "quarterly": "Quarterly",
    "annually": "Annually",
}


def to_monthly(amount: float, frequency: str) -> float:
    """Return the monthly equivalent of ``amount`` paid at ``frequency``.

    Unknown frequencies pass the amount through unchanged.
    """
    if frequency == "weekly":
        return amount * 52 / 12
    if frequency == "fortnightly":
        return amount * 26 / 12
    if frequency == "quarterly":
        return amount / 3
    if frequency == "annually":
        return amount / 12
    return amount


def frequency_label(frequency: str) -> str:
    return _LABELS.get(frequency, "Monthly")
