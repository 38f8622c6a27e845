"""Stored records: assets, liabilities, settings, history and milestones."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

AssetType = Literal[
    "individual-stock",
    "kiwisaver",
    "savings-account",
    "term-deposit",
    "bitcoin",
    "ethereum",
    "other",
]

AccountType = Literal[
    "kiwisaver",
    "investment",
    "savings",
    "term-deposit",
    "shares",
    "managed-funds",
    "property",
    "other",
]

LiabilityType = Literal[
    "mortgage",
    "car-loan",
    "student-loan",
    "credit-card",
    "personal-loan",
    "hire-purchase",
    "overdraft",
    "other",
]

# Frequencies are free text on purpose: anything outside
# weekly/fortnightly/monthly/quarterly/annually is read as monthly.
ContributionFrequency = str

StockCurrency = Literal["NZD", "USD"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AssetFields(BaseModel):
    """Everything a client can set on an asset."""

    name: str
    type: AssetType = "other"
    accountType: Optional[AccountType] = None
    value: float = Field(ge=0)
    contributions: float = Field(default=0.0, ge=0)
    contributionFrequency: ContributionFrequency = "monthly"
    notes: Optional[str] = None

    # type specific details, display only
    stockSymbol: Optional[str] = None
    stockCurrency: Optional[StockCurrency] = None
    quantity: Optional[float] = Field(default=None, ge=0)
    interestRate: Optional[float] = None
    maturityDate: Optional[str] = None
    kiwiSaverProvider: Optional[str] = None
    kiwiSaverFund: Optional[str] = None
    cryptoAddress: Optional[str] = None
    autoUpdate: Optional[bool] = None


class Asset(AssetFields):
    model_config = ConfigDict(extra="ignore")

    id: str
    dateAdded: datetime = Field(default_factory=utc_now)
    lastUpdated: datetime = Field(default_factory=utc_now)


class Liability(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: LiabilityType = "other"
    balance: float = Field(ge=0)
    # annual percentage, 6.5 means 6.5%
    interestRate: float = 0.0
    minimumPayment: float = Field(default=0.0, ge=0)
    paymentFrequency: ContributionFrequency = "monthly"
    notes: Optional[str] = None
    dateAdded: datetime = Field(default_factory=utc_now)
    lastUpdated: datetime = Field(default_factory=utc_now)


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fireTarget: float = 1_500_000.0
    withdrawalRate: float = Field(default=0.04, ge=0, le=1)
    expectedReturn: float = Field(default=0.07, gt=-1)
    inflationRate: float = Field(default=0.03, gt=-1)
    retirementAge: int = 65
    currentAge: int = 30
    currency: str = "NZD"
    usdToNzdRate: Optional[float] = None
    exchangeRateLastUpdated: Optional[datetime] = None

    @model_validator(mode="after")
    def real_return_above_minus_one(self) -> "Settings":
        # coast FIRE discounts by (1 + expectedReturn - inflationRate)
        if 1 + self.expectedReturn - self.inflationRate <= 0:
            raise ValueError("expectedReturn - inflationRate must be greater than -1")
        return self


class NetWorthSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    date: datetime
    assets: float = 0.0
    liabilities: float = 0.0
    netWorth: float

    @field_validator("date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # naive and aware dates have to sort against each other
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Milestone(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    targetAmount: float
    targetDate: Optional[str] = None
    achieved: bool = False
    achievedDate: Optional[datetime] = None
    description: Optional[str] = None


class StoreData(BaseModel):
    """Everything the record store persists, in one document."""

    assets: List[Asset] = Field(default_factory=list)
    liabilities: List[Liability] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)
    history: List[NetWorthSnapshot] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)


# --- write payloads (ids and timestamps are assigned by the store) ---


class AssetInput(AssetFields):
    model_config = ConfigDict(extra="forbid")


class LiabilityInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    type: LiabilityType = "other"
    balance: float = Field(ge=0)
    interestRate: float = 0.0
    minimumPayment: float = Field(default=0.0, ge=0)
    paymentFrequency: ContributionFrequency = "monthly"
    notes: Optional[str] = None


class SettingsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fireTarget: Optional[float] = None
    withdrawalRate: Optional[float] = Field(default=None, ge=0, le=1)
    expectedReturn: Optional[float] = Field(default=None, gt=-1)
    inflationRate: Optional[float] = Field(default=None, gt=-1)
    retirementAge: Optional[int] = None
    currentAge: Optional[int] = None
    currency: Optional[str] = None
    usdToNzdRate: Optional[float] = Field(default=None, gt=0)
    exchangeRateLastUpdated: Optional[datetime] = None


class MilestoneInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    targetAmount: float
    targetDate: Optional[str] = None
    description: Optional[str] = None
    achieved: bool = False


class MilestoneUpdate(BaseModel):
    """Partial milestone edit; only the fields sent are changed."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    targetAmount: Optional[float] = None
    targetDate: Optional[str] = None
    description: Optional[str] = None
    achieved: Optional[bool] = None
