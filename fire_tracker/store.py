"""Record repository: assets, liabilities, settings, history and milestones."""

from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Protocol, TypeVar, Union, runtime_checkable

from pydantic import BaseModel

from fire_tracker.schemas.records import (
    Asset,
    AssetInput,
    Liability,
    LiabilityInput,
    Milestone,
    MilestoneInput,
    MilestoneUpdate,
    NetWorthSnapshot,
    Settings,
    SettingsUpdate,
    StoreData,
    utc_now,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Asset, Liability, Milestone)


class RecordNotFoundError(KeyError):
    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


@runtime_checkable
class RecordStore(Protocol):
    """What the API needs from a repository; all calls are synchronous."""

    def assets(self) -> List[Asset]: ...

    def liabilities(self) -> List[Liability]: ...

    def settings(self) -> Settings: ...

    def history(self) -> List[NetWorthSnapshot]: ...

    def milestones(self) -> List[Milestone]: ...

    def add_asset(self, payload: AssetInput) -> Asset: ...

    def update_asset(self, record_id: str, payload: AssetInput) -> Asset: ...

    def delete_asset(self, record_id: str) -> None: ...

    def add_liability(self, payload: LiabilityInput) -> Liability: ...

    def update_liability(self, record_id: str, payload: LiabilityInput) -> Liability: ...

    def delete_liability(self, record_id: str) -> None: ...

    def update_settings(self, payload: Union[SettingsUpdate, dict]) -> Settings: ...

    def add_snapshot(self, snapshot: NetWorthSnapshot) -> NetWorthSnapshot: ...

    def add_milestone(self, payload: MilestoneInput) -> Milestone: ...

    def update_milestone(self, record_id: str, payload: MilestoneUpdate) -> Milestone: ...

    def delete_milestone(self, record_id: str) -> None: ...

    def achieve_milestone(self, record_id: str) -> Milestone: ...


def _new_id() -> str:
    return uuid.uuid4().hex


def _index_of(items: List[RecordT], record_id: str, kind: str) -> int:
    for index, item in enumerate(items):
        if item.id == record_id:
            return index
    raise RecordNotFoundError(kind, record_id)


class InMemoryRecordStore:
    """
    Last write wins; readers always get copies.

    Writes edit a draft of the whole document. The draft only replaces
    the live data once ``_commit`` has accepted it, so a failed commit
    leaves the store exactly as it was.
    """

    def __init__(self, data: Optional[StoreData] = None) -> None:
        self._data = data or StoreData()
        self._lock = threading.Lock()

    def _commit(self, data: StoreData) -> None:
        """Persist ``data``; nothing to do in memory."""

    @contextmanager
    def _transaction(self) -> Iterator[StoreData]:
        with self._lock:
            draft = self._data.model_copy(deep=True)
            yield draft
            self._commit(draft)
            self._data = draft

    # --- reads ---

    def snapshot(self) -> StoreData:
        with self._lock:
            return self._data.model_copy(deep=True)

    def assets(self) -> List[Asset]:
        with self._lock:
            return [item.model_copy() for item in self._data.assets]

    def liabilities(self) -> List[Liability]:
        with self._lock:
            return [item.model_copy() for item in self._data.liabilities]

    def settings(self) -> Settings:
        with self._lock:
            return self._data.settings.model_copy()

    def history(self) -> List[NetWorthSnapshot]:
        with self._lock:
            return [item.model_copy() for item in self._data.history]

    def milestones(self) -> List[Milestone]:
        with self._lock:
            return [item.model_copy() for item in self._data.milestones]

    # --- assets ---

    def add_asset(self, payload: AssetInput) -> Asset:
        asset = Asset(id=_new_id(), **payload.model_dump())
        with self._transaction() as data:
            data.assets.append(asset)
        logger.info("added asset %s (%s)", asset.id, asset.name)
        return asset.model_copy()

    def update_asset(self, record_id: str, payload: AssetInput) -> Asset:
        with self._transaction() as data:
            index = _index_of(data.assets, record_id, "asset")
            updated = Asset(
                id=record_id,
                dateAdded=data.assets[index].dateAdded,
                lastUpdated=utc_now(),
                **payload.model_dump(),
            )
            data.assets[index] = updated
        return updated.model_copy()

    def delete_asset(self, record_id: str) -> None:
        with self._transaction() as data:
            del data.assets[_index_of(data.assets, record_id, "asset")]
        logger.info("deleted asset %s", record_id)

    # --- liabilities ---

    def add_liability(self, payload: LiabilityInput) -> Liability:
        liability = Liability(id=_new_id(), **payload.model_dump())
        with self._transaction() as data:
            data.liabilities.append(liability)
        logger.info("added liability %s (%s)", liability.id, liability.name)
        return liability.model_copy()

    def update_liability(self, record_id: str, payload: LiabilityInput) -> Liability:
        with self._transaction() as data:
            index = _index_of(data.liabilities, record_id, "liability")
            updated = Liability(
                id=record_id,
                dateAdded=data.liabilities[index].dateAdded,
                lastUpdated=utc_now(),
                **payload.model_dump(),
            )
            data.liabilities[index] = updated
        return updated.model_copy()

    def delete_liability(self, record_id: str) -> None:
        with self._transaction() as data:
            del data.liabilities[_index_of(data.liabilities, record_id, "liability")]
        logger.info("deleted liability %s", record_id)

    # --- settings and history ---

    def update_settings(self, payload: Union[SettingsUpdate, dict]) -> Settings:
        changes = payload.model_dump(exclude_unset=True) if isinstance(payload, BaseModel) else payload
        with self._transaction() as data:
            merged = data.settings.model_dump()
            merged.update(changes)
            settings = Settings.model_validate(merged)
            data.settings = settings
        return settings.model_copy()

    def add_snapshot(self, snapshot: NetWorthSnapshot) -> NetWorthSnapshot:
        with self._transaction() as data:
            data.history.append(snapshot)
        logger.info("recorded net worth snapshot %s: %s", snapshot.id, snapshot.netWorth)
        return snapshot.model_copy()

    # --- milestones ---

    def add_milestone(self, payload: MilestoneInput) -> Milestone:
        milestone = Milestone(
            id=_new_id(),
            achievedDate=utc_now() if payload.achieved else None,
            **payload.model_dump(),
        )
        with self._transaction() as data:
            data.milestones.append(milestone)
        return milestone.model_copy()

    def update_milestone(self, record_id: str, payload: MilestoneUpdate) -> Milestone:
        changes = payload.model_dump(exclude_unset=True)
        with self._transaction() as data:
            index = _index_of(data.milestones, record_id, "milestone")
            merged = data.milestones[index].model_dump()
            merged.update(changes)
            # achievedDate follows the achieved flag
            if not merged["achieved"]:
                merged["achievedDate"] = None
            elif merged["achievedDate"] is None:
                merged["achievedDate"] = utc_now()
            updated = Milestone.model_validate(merged)
            data.milestones[index] = updated
        return updated.model_copy()

    def delete_milestone(self, record_id: str) -> None:
        with self._transaction() as data:
            del data.milestones[_index_of(data.milestones, record_id, "milestone")]

    def achieve_milestone(self, record_id: str) -> Milestone:
        with self._transaction() as data:
            index = _index_of(data.milestones, record_id, "milestone")
            achieved = data.milestones[index].model_copy(
                update={"achieved": True, "achievedDate": utc_now()}
            )
            data.milestones[index] = achieved
        logger.info("milestone %s achieved", record_id)
        return achieved.model_copy()


class JsonFileRecordStore(InMemoryRecordStore):
    """Keeps the whole document in one JSON file, rewritten on every change."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        data = None
        if self.path.exists():
            data = StoreData.model_validate_json(self.path.read_text(encoding="utf-8"))
            logger.info("loaded records from %s", self.path)
        super().__init__(data)

    def _commit(self, data: StoreData) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(data.model_dump_json(indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
