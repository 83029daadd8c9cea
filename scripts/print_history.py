#!/usr/bin/env python3
"""
Super-simple script: read the saved history slot, build a pandas DataFrame,
then print columns and all values to the terminal.

Reads .env for:
- DB_PATH (defaults to ./rpe_calculator.db)
- HISTORY_SLOT (defaults to rpeHistory)

Usage:
    python scripts/print_history.py
"""

import os
import sys

import pandas as pd
from dotenv import load_dotenv

# Put project root on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)

from rpecalc.repos import HistoryStore, SQLiteSlotStorage  # noqa: E402


def main():
    load_dotenv(os.path.join(ROOT, ".env"), override=False)

    store = HistoryStore(SQLiteSlotStorage())
    store.load()
    df = store.read_df()

    print(f"[INFO] Slot: {store.slot} in {store.storage.path}")
    print("[INFO] Columns:")
    print(" | ".join(map(str, df.columns)))
    print(f"[INFO] Rows: {len(df)}")

    if df.empty:
        print("[INFO] History is empty.")
        return 0

    pd.set_option('display.max_rows', None)
    pd.set_option('display.max_columns', None)
    pd.set_option('display.width', 200)
    print("[INFO] DataFrame:")
    print(df.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
