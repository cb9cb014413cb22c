"""
In-memory mirror of the remote content tables.

``ContentState`` is the single application-state container shared by the
public view and the admin console. Reads happen once at startup; afterwards
every change goes through the mutation methods below, which write to the
remote store first and touch the mirror only after the write is confirmed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from pydantic import ValidationError

from apps.store import RemoteStoreClient, RemoteStoreError
from edusite.core import seeds
from edusite.core.models import ContactInfo, GlobalStats, Record

from .collections import (
    COLLECTIONS,
    SINGLETON_ROW_ID,
    CollectionDef,
    CollectionName,
    SingletonName,
    get_collection,
)

LOGGER = logging.getLogger(__name__)

_WRITE_ERRORS = (RemoteStoreError, ValidationError)


@dataclass
class MutationResult:
    """Outcome of one remote write; ``record`` is the confirmed value."""

    ok: bool
    record: Any = None
    error: str | None = None


class ContentState:
    def __init__(self, store: RemoteStoreClient) -> None:
        self._store = store
        self.loading = True
        self.loaded = False
        self._load_lock: asyncio.Lock | None = None
        self._collections: Dict[CollectionName, List[Record]] = {name: [] for name in CollectionName}
        self.stats: GlobalStats = seeds.default_stats()
        self.contact_info: ContactInfo = seeds.default_contact_info()
        self.teacher_image: str = seeds.DEFAULT_TEACHER_IMAGE

    # ------------------------------------------------------------------
    # read access

    def items(self, name: CollectionName | str) -> List[Record]:
        """Return a copy of one collection; callers never mutate the mirror."""
        return list(self._collections[get_collection(name).name])

    def find(self, name: CollectionName | str, record_id: str) -> Record | None:
        for record in self._collections[get_collection(name).name]:
            if record.id == str(record_id):
                return record
        return None

    @property
    def courses(self) -> List[Record]:
        return self.items(CollectionName.COURSES)

    @property
    def news(self) -> List[Record]:
        return self.items(CollectionName.NEWS)

    @property
    def achievements(self) -> List[Record]:
        return self.items(CollectionName.ACHIEVEMENTS)

    @property
    def messages(self) -> List[Record]:
        return self.items(CollectionName.MESSAGES)

    @property
    def enrollments(self) -> List[Record]:
        return self.items(CollectionName.ENROLLMENTS)

    def counts(self) -> Dict[str, int]:
        return {name.value: len(records) for name, records in self._collections.items()}

    # ------------------------------------------------------------------
    # startup

    async def load(self) -> None:
        """Read every table concurrently; each read falls back independently."""
        self.loading = True
        try:
            await asyncio.gather(
                *(self._load_collection(entry) for entry in COLLECTIONS.values()),
                self._load_stats(),
                self._load_contact_info(),
                self._load_teacher_image(),
            )
        finally:
            self.loading = False
        self.loaded = True
        LOGGER.info("Content state loaded", extra={"counts": self.counts()})

    async def ensure_loaded(self) -> None:
        """Run the startup load once, however many callers wait on it."""
        if self.loaded:
            return
        if self._load_lock is None:
            self._load_lock = asyncio.Lock()
        async with self._load_lock:
            if not self.loaded:
                await self.load()

    async def _load_collection(self, entry: CollectionDef) -> None:
        try:
            rows = await self._store.select(entry.table, order=entry.order)
        except RemoteStoreError as exc:
            LOGGER.warning("Reading %s failed (%s); using seed data", entry.table, exc)
            rows = []
        if not rows:
            self._collections[entry.name] = entry.seed()
            return
        records = []
        for row in rows:
            try:
                records.append(entry.model.model_validate(row))
            except ValidationError as exc:
                LOGGER.warning("Skipping malformed %s row %s: %s", entry.table, row.get("id"), exc)
        self._collections[entry.name] = records

    async def _read_singleton_row(self, table: str, columns: str = "*") -> Mapping[str, Any] | None:
        try:
            rows = await self._store.select(table, columns=columns, limit=1)
        except RemoteStoreError as exc:
            LOGGER.warning("Reading %s failed (%s); using default", table, exc)
            return None
        return rows[0] if rows else None

    async def _load_stats(self) -> None:
        row = await self._read_singleton_row(SingletonName.STATS.value)
        if not row:
            return
        try:
            self.stats = GlobalStats.model_validate(row)
        except ValidationError as exc:
            LOGGER.warning("Ignoring malformed %s row: %s", SingletonName.STATS.value, exc)

    async def _load_contact_info(self) -> None:
        row = await self._read_singleton_row(SingletonName.CONTACT_INFO.value)
        if not row:
            return
        try:
            self.contact_info = ContactInfo.model_validate(row)
        except ValidationError as exc:
            LOGGER.warning("Ignoring malformed %s row: %s", SingletonName.CONTACT_INFO.value, exc)

    async def _load_teacher_image(self) -> None:
        row = await self._read_singleton_row(SingletonName.TEACHER_IMAGE.value, columns="image_url")
        image_url = row.get("image_url") if row else None
        if isinstance(image_url, str) and image_url:
            self.teacher_image = image_url

    # ------------------------------------------------------------------
    # mutations

    async def create(self, name: CollectionName | str, draft: Record | Mapping[str, Any]) -> MutationResult:
        """Insert ``draft`` and prepend the row the store hands back."""
        entry = get_collection(name)
        try:
            if not isinstance(draft, entry.model):
                draft = entry.model.model_validate(draft)
            rows = await self._store.insert(entry.table, draft.to_wire())
            if not rows:
                raise RemoteStoreError("insert returned no rows", table=entry.table)
            record = entry.model.model_validate(rows[0])
            if record.id is None:
                raise RemoteStoreError("insert returned a row without an id", table=entry.table)
        except _WRITE_ERRORS as exc:
            return self._write_failed("create", entry.table, exc)
        self._collections[entry.name].insert(0, record)
        return MutationResult(ok=True, record=record)

    async def update(self, name: CollectionName | str, record: Record | Mapping[str, Any]) -> MutationResult:
        """Replace the whole record with the same id, keeping its position."""
        entry = get_collection(name)
        try:
            if not isinstance(record, entry.model):
                record = entry.model.model_validate(record)
            if record.id is None:
                raise ValueError(f"Cannot update a {entry.table} record without an id")
            await self._store.update(entry.table, record.to_wire(), match={"id": record.id})
        except (RemoteStoreError, ValueError) as exc:
            return self._write_failed("update", entry.table, exc)
        records = self._collections[entry.name]
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                break
        else:
            LOGGER.debug("Updated %s/%s is not mirrored locally", entry.table, record.id)
        return MutationResult(ok=True, record=record)

    async def delete(self, name: CollectionName | str, record_id: str) -> MutationResult:
        entry = get_collection(name)
        record_id = str(record_id)
        try:
            await self._store.delete(entry.table, match={"id": record_id})
        except _WRITE_ERRORS as exc:
            return self._write_failed("delete", entry.table, exc)
        self._collections[entry.name] = [record for record in self._collections[entry.name] if record.id != record_id]
        return MutationResult(ok=True, record=record_id)

    async def update_stats(self, stats: GlobalStats | Mapping[str, Any]) -> MutationResult:
        try:
            if not isinstance(stats, GlobalStats):
                stats = GlobalStats.model_validate(stats)
            await self._update_singleton(SingletonName.STATS, stats.to_wire())
        except _WRITE_ERRORS as exc:
            return self._write_failed("update", SingletonName.STATS.value, exc)
        self.stats = stats
        return MutationResult(ok=True, record=stats)

    async def update_contact_info(self, info: ContactInfo | Mapping[str, Any]) -> MutationResult:
        try:
            if not isinstance(info, ContactInfo):
                info = ContactInfo.model_validate(info)
            await self._update_singleton(SingletonName.CONTACT_INFO, info.to_wire())
        except _WRITE_ERRORS as exc:
            return self._write_failed("update", SingletonName.CONTACT_INFO.value, exc)
        self.contact_info = info
        return MutationResult(ok=True, record=info)

    async def update_teacher_image(self, image_url: str) -> MutationResult:
        try:
            await self._update_singleton(SingletonName.TEACHER_IMAGE, {"image_url": image_url})
        except RemoteStoreError as exc:
            return self._write_failed("update", SingletonName.TEACHER_IMAGE.value, exc)
        self.teacher_image = image_url
        return MutationResult(ok=True, record=image_url)

    async def _update_singleton(self, name: SingletonName, values: Mapping[str, Any]) -> None:
        await self._store.update(name.value, values, match={"id": SINGLETON_ROW_ID})

    @staticmethod
    def _write_failed(operation: str, table: str, exc: Exception) -> MutationResult:
        LOGGER.warning(
            "Remote %s on %s failed; mirror left unchanged",
            operation,
            table,
            extra={"table": table, "operation": operation, "error": str(exc)},
        )
        return MutationResult(ok=False, error=str(exc))


__all__ = ["ContentState", "MutationResult"]
