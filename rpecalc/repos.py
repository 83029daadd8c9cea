from __future__ import annotations

import json
import sqlite3
import time
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Protocol

import pandas as pd
from pydantic import ValidationError

from .config import db_path, history_slot, persist_target
from .logger import logger
from .models import CalculationInput, HistoryEntry
from .utils import FILTER_ALL, HISTORY_CAPACITY, HISTORY_COLUMNS


class SlotStorage(Protocol):
    def get(self, slot: str) -> Optional[str]: ...
    def set(self, slot: str, value: str) -> None: ...


class SQLiteSlotStorage:
    """Named text slots in a SQLite file, one row per slot."""

    def __init__(self, path: str | None = None):
        self.path = path or db_path()
        self._init_db()
        logger.info(f"SQLiteSlotStorage initialized at {self.path}")

    def _conn(self):
        return sqlite3.connect(self.path, check_same_thread=False)

    def _init_db(self):
        with self._conn() as con:
            con.execute("""
                CREATE TABLE IF NOT EXISTS Slots (
                    name TEXT PRIMARY KEY,
                    value TEXT
                )""")

    def get(self, slot: str) -> Optional[str]:
        logger.debug(f"SQLite read slot: {slot}")
        with self._conn() as con:
            row = con.execute("SELECT value FROM Slots WHERE name = ?", (slot,)).fetchone()
        return row[0] if row else None

    def set(self, slot: str, value: str) -> None:
        # The connection context manager commits before returning
        with self._conn() as con:
            con.execute(
                "INSERT OR REPLACE INTO Slots (name, value) VALUES (?, ?)",
                (slot, value),
            )
        logger.debug(f"SQLite wrote slot {slot} ({len(value)} chars)")


class MemorySlotStorage:
    """Process-local slots; nothing survives a restart."""

    def __init__(self, initial: Dict[str, str] | None = None):
        self.slots: Dict[str, str] = dict(initial or {})

    def get(self, slot: str) -> Optional[str]:
        return self.slots.get(slot)

    def set(self, slot: str, value: str) -> None:
        self.slots[slot] = value


def storage_factory() -> SlotStorage:
    """Return the slot storage selected by PERSIST_TARGET.

    An unopenable DB_PATH degrades to in-memory storage instead of
    failing the session.
    """
    target = persist_target()
    if target == "memory":
        logger.info("Using in-memory history storage; history will not survive a restart")
        return MemorySlotStorage()
    try:
        return SQLiteSlotStorage()
    except sqlite3.Error:
        logger.warning(
            f"Cannot open SQLite history at {db_path()}; falling back to in-memory storage",
            exc_info=True,
        )
        return MemorySlotStorage()


class IdFactory:
    """Millisecond ids that never repeat or go backwards within a session.

    Two saves in the same millisecond (or a clock step backwards) get
    `last + 1` instead of the clock value.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._last = 0

    def observe(self, ids: Iterable[str]) -> None:
        for raw in ids:
            try:
                self._last = max(self._last, int(raw))
            except (TypeError, ValueError):
                continue

    def __call__(self) -> str:
        now_ms = self._clock() // 1_000_000
        self._last = max(now_ms, self._last + 1)
        return str(self._last)


# --- Wire format ---
def serialize_history(entries: Iterable[HistoryEntry]) -> str:
    return json.dumps([e.to_payload() for e in entries])


def deserialize_history(raw: Optional[str]) -> List[HistoryEntry]:
    """Parse the stored JSON array.

    Returns [] for an absent slot. Raises ValueError (json or pydantic)
    when the content is not an array of entries.
    """
    if raw is None or not raw.strip():
        return []
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"History must be a JSON list, got {type(data).__name__}")
    return [HistoryEntry.model_validate(item) for item in data]


def filter_history(entries: Iterable[HistoryEntry], lift_type: str) -> List[HistoryEntry]:
    if lift_type == FILTER_ALL:
        return list(entries)
    return [e for e in entries if e.lift_type == lift_type]


def _validate_entry(entry: HistoryEntry) -> None:
    """Validate an entry against the save-boundary model.

    Raises ValidationError if invalid.
    """
    try:
        CalculationInput(
            weight=entry.weight,
            reps=entry.reps,
            rpe=entry.rpe,
            lift_type=entry.lift_type,
        )
    except ValidationError:
        logger.warning(f"Validation failed for entry {entry.to_payload()}")
        raise


class HistoryStore:
    """Bounded, newest-first history of saved calculations.

    Every mutation writes the whole log to `storage` before the in-memory
    list is replaced, so a failed write leaves both sides unchanged.
    """

    def __init__(
        self,
        storage: SlotStorage,
        slot: str | None = None,
        capacity: int = HISTORY_CAPACITY,
        id_factory: IdFactory | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.slot = slot or history_slot()
        self.capacity = capacity
        self.id_factory = id_factory or IdFactory()
        self.clock = clock
        self._entries: List[HistoryEntry] = []

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def load(self) -> List[HistoryEntry]:
        try:
            entries = deserialize_history(self.storage.get(self.slot))
        except (ValueError, TypeError, RecursionError, sqlite3.Error):
            logger.warning(f"History slot {self.slot} is unreadable; starting empty", exc_info=True)
            entries = []
        self._entries = entries[: self.capacity]
        self.id_factory.observe(e.id for e in self._entries)
        logger.info(f"Loaded {len(self._entries)} history entries from slot {self.slot}")
        return self.entries

    def create_entry(
        self,
        weight: float,
        reps: int,
        rpe: float,
        lift_type: str,
        one_rep_max: float,
    ) -> HistoryEntry:
        return HistoryEntry(
            id=self.id_factory(),
            weight=weight,
            reps=reps,
            rpe=rpe,
            one_rep_max=one_rep_max,
            date=self.clock().isoformat(timespec="seconds"),
            lift_type=lift_type,
        )

    def append(self, entry: HistoryEntry) -> bool:
        """Insert `entry` at the head. Returns False if it was rejected."""
        try:
            _validate_entry(entry)
        except ValidationError:
            return False
        updated = [entry, *self._entries][: self.capacity]
        self._persist(updated)
        logger.info(f"Saved history entry id={entry.id} ({entry.lift_type} {entry.one_rep_max})")
        return True

    def remove_by_id(self, entry_id: str) -> None:
        updated = [e for e in self._entries if e.id != entry_id]
        found = len(updated) != len(self._entries)
        self._persist(updated)
        if found:
            logger.info(f"Removed history entry id={entry_id}")
        else:
            logger.debug(f"History entry id={entry_id} not found; nothing removed")

    def clear(self) -> None:
        self._persist([])
        logger.info(f"Cleared history slot {self.slot}")

    def filter(self, lift_type: str = FILTER_ALL) -> List[HistoryEntry]:
        return filter_history(self._entries, lift_type)

    def read_df(self, lift_type: str = FILTER_ALL) -> pd.DataFrame:
        entries = self.filter(lift_type)
        if not entries:
            return pd.DataFrame(columns=HISTORY_COLUMNS)
        return pd.DataFrame([e.to_payload() for e in entries], columns=HISTORY_COLUMNS)

    def _persist(self, entries: List[HistoryEntry]) -> None:
        self.storage.set(self.slot, serialize_history(entries))
        self._entries = entries
