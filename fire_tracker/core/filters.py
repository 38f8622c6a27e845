"""Asset/liability selection used by the projection chart."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fire_tracker.schemas.records import Asset, AssetType, Liability, LiabilityType


class ChartFilters(BaseModel):
    model_config = ConfigDict(extra="forbid")

    assetTypes: List[AssetType] = Field(default_factory=list)
    liabilityTypes: List[LiabilityType] = Field(default_factory=list)
    selectedAssets: List[str] = Field(default_factory=list)
    selectedLiabilities: List[str] = Field(default_factory=list)

    @property
    def has_asset_filters(self) -> bool:
        return bool(self.assetTypes or self.selectedAssets)

    @property
    def has_liability_filters(self) -> bool:
        return bool(self.liabilityTypes or self.selectedLiabilities)


def filter_assets(assets: List[Asset], filters: Optional[ChartFilters]) -> List[Asset]:
    """Narrow by type, then by id. Filtering only liabilities hides every asset."""
    if filters is None:
        return list(assets)
    if filters.has_liability_filters and not filters.has_asset_filters:
        return []

    selected = list(assets)
    if filters.assetTypes:
        selected = [asset for asset in selected if asset.type in filters.assetTypes]
    if filters.selectedAssets:
        selected = [asset for asset in selected if asset.id in filters.selectedAssets]
    return selected


def filter_liabilities(
    liabilities: List[Liability], filters: Optional[ChartFilters]
) -> List[Liability]:
    if filters is None:
        return list(liabilities)
    if filters.has_asset_filters and not filters.has_liability_filters:
        return []

    selected = list(liabilities)
    if filters.liabilityTypes:
        selected = [item for item in selected if item.type in filters.liabilityTypes]
    if filters.selectedLiabilities:
        selected = [item for item in selected if item.id in filters.selectedLiabilities]
    return selected


def has_active_filters(filters: ChartFilters) -> bool:
    return filters.has_asset_filters or filters.has_liability_filters


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def filter_summary(filters: ChartFilters) -> str:
    """Human readable summary, e.g. ``"2 asset types, 1 liability"``."""
    parts: List[str] = []
    if filters.assetTypes:
        parts.append(_plural(len(filters.assetTypes), "asset type", "asset types"))
    if filters.liabilityTypes:
        parts.append(_plural(len(filters.liabilityTypes), "liability type", "liability types"))
    if filters.selectedAssets:
        parts.append(_plural(len(filters.selectedAssets), "asset", "assets"))
    if filters.selectedLiabilities:
        parts.append(_plural(len(filters.selectedLiabilities), "liability", "liabilities"))
    return ", ".join(parts)
