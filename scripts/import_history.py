#!/usr/bin/env python3
"""
Import a history export (the JSON array kept under the "rpeHistory" key in
the browser's localStorage) into the calculator database.

Entries are appended oldest first so the newest export entry ends up at the
head; the store keeps at most 10 entries.

Usage:
    python scripts/import_history.py path/to/rpeHistory.json
"""
import sqlite3
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv  # noqa: E402

from rpecalc.repos import HistoryStore, SQLiteSlotStorage, deserialize_history  # noqa: E402


def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__)
        return 1

    load_dotenv(Path(__file__).parent.parent / ".env", override=False)

    src = Path(argv[1])
    if not src.exists():
        print(f"❌ Export not found at {src}")
        return 1

    print(f"📂 Loading history export from {src}")
    try:
        entries = deserialize_history(src.read_text(encoding="utf-8"))
    except ValueError as e:
        print(f"❌ Export is not a valid history array: {e}")
        return 2
    print(f"✅ Found {len(entries)} records")

    try:
        storage = SQLiteSlotStorage()
    except sqlite3.Error as e:
        print(f"❌ Cannot open history database: {e}")
        return 2
    store = HistoryStore(storage)
    store.load()
    known = {e.id for e in store.entries}

    imported = 0
    for entry in reversed(entries):
        if entry.id in known:
            print(f"  • Skipped {entry.id} (already stored)")
            continue
        if store.append(entry):
            print(f"  ✓ Imported {entry.id} ({entry.date})")
            imported += 1
        else:
            print(f"  ✗ Rejected {entry.id}: values out of range")

    print(f"\n🎉 Import complete! {imported}/{len(entries)} records imported, {len(store)} in history.")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
