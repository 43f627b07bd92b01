"""
Thai Government Lottery Last-Two-Digit Data Collection

Fetches draw results from the rayriffy lottery API and keeps them in a JSON
history file (DATA_DIR/history.json), one entry per draw:

    {"id": "16012568", "dateTh": "...", "last2": "31", "endpoint": "...",
     "fetchedAt": "...", "source": "..."}

Draw ids are DDMMYYYY with a Buddhist-era year (year CE = year BE - 543).
"""
import json
import os
from datetime import datetime, timezone

import numpy as np
import pandas as pd
import requests

from lotto2d.config import API_BASE, BE_OFFSET, HISTORY_PATH, REQUEST_TIMEOUT
from lotto2d.errors import FetchError, HistoryNotFoundError, HistoryReadError

HEADERS = {"User-Agent": "lotto-scraper/1.0"}
FRAME_COLUMNS = ["id", "last2", "day", "month", "year_ce"]
_TRACKED_FIELDS = ("dateTh", "last2", "endpoint")


# ── Draw ids ─────────────────────────────────────────────────────────────

def parse_draw_id(draw_id):
    """
    Split a DDMMYYYY (Buddhist era) id into its date parts.

    Returns None if the id is not exactly 8 digits or the day/month is out
    of range.
    """
    if not isinstance(draw_id, str) or len(draw_id) != 8 or not draw_id.isdigit():
        return None
    day = int(draw_id[0:2])
    month = int(draw_id[2:4])
    if not (1 <= day <= 31 and 1 <= month <= 12):
        return None
    year_be = int(draw_id[4:8])
    return {"day": day, "month": month, "year_ce": year_be - BE_OFFSET, "year_be": year_be}


def _parse_last2(value):
    if value is None:
        return None
    try:
        last2 = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return last2 if 0 <= last2 <= 99 else None


def records_to_frame(records):
    """
    Build the newest-first history frame from raw entries.

    Non-dict entries and entries with an unparseable id or a
    missing/out-of-range last2 are dropped; a repeated id keeps its last
    occurrence.
    """
    rows = {}
    for entry in records:
        if not isinstance(entry, dict):
            continue
        meta = parse_draw_id(entry.get("id"))
        if meta is None:
            continue
        last2 = _parse_last2(entry.get("last2"))
        if last2 is None:
            continue
        rows[entry["id"]] = {
            "id": entry["id"],
            "last2": last2,
            "day": meta["day"],
            "month": meta["month"],
            "year_ce": meta["year_ce"],
        }

    df = pd.DataFrame(list(rows.values()), columns=FRAME_COLUMNS)
    df = df.astype({"id": str, "last2": np.int64, "day": np.int64,
                    "month": np.int64, "year_ce": np.int64})
    # Chronological order; the raw DDMMYYYY text does not sort by date
    df = df.sort_values(["year_ce", "month", "day"], ascending=False, kind="stable")
    return df.reset_index(drop=True)


# ── Local history file ───────────────────────────────────────────────────

def _read_entries(path):
    with open(path, "r", encoding="utf-8") as f:
        arr = json.load(f)
    return arr if isinstance(arr, list) else []


def load_history(path=None):
    """Load the history file as a newest-first DataFrame of usable draws."""
    path = path or HISTORY_PATH
    if not os.path.exists(path):
        raise HistoryNotFoundError(
            f"History file not found at {path}. "
            "Run scripts/update_data.py --backfill N first."
        )
    try:
        with open(path, "r", encoding="utf-8") as f:
            arr = json.load(f)
    except (OSError, ValueError) as e:
        raise HistoryReadError(f"Cannot read history file {path}: {e}") from e
    if not isinstance(arr, list):
        raise HistoryReadError(
            f"History file {path} must hold a JSON list, got {type(arr).__name__}"
        )
    return records_to_frame(arr)


def get_history_count(path=None):
    """Number of raw entries in the history file (0 if missing or unreadable)."""
    path = path or HISTORY_PATH
    if not os.path.exists(path):
        return 0
    try:
        return len(_read_entries(path))
    except (OSError, ValueError):
        return 0


def save_history(entries, path=None):
    """Write entries newest first."""
    path = path or HISTORY_PATH
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    def _key(e):
        meta = parse_draw_id(e.get("id"))
        return (meta["year_ce"], meta["month"], meta["day"]) if meta else (0, 0, 0)

    ordered = sorted(entries, key=_key, reverse=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(ordered, f, indent=2, ensure_ascii=False)


def upsert(history, entry):
    """
    Insert or update *entry* by id.

    Returns (history, changed). An existing entry keeps its other fields and
    has the fetched ones overwritten (e.g. a last2 that used to be null);
    it is left untouched when dateTh, last2 and endpoint are all unchanged.
    """
    if not entry or not entry.get("id"):
        return history, False
    normalized = {
        "id": entry["id"],
        "dateTh": entry.get("dateTh") or "",
        "last2": entry.get("last2"),
        "endpoint": entry.get("endpoint") or "",
        "fetchedAt": datetime.now(timezone.utc).isoformat(),
        "source": entry.get("source") or "",
    }
    for i, existing in enumerate(history):
        if existing.get("id") == entry["id"]:
            if all(existing.get(key) == normalized[key] for key in _TRACKED_FIELDS):
                return history, False
            history[i] = {**existing, **normalized}
            return history, True
    history.append(normalized)
    return history, True


# ── Remote API ───────────────────────────────────────────────────────────

def _get_json(url):
    try:
        resp = requests.get(url, headers=HEADERS, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as e:
        raise FetchError(f"GET {url} failed: {e}") from e


def extract_last_two(resp):
    """The last-two-digit prize from a lotto response, zero padded, or None."""
    nodes = ((resp or {}).get("response") or {}).get("runningNumbers") or []
    for node in nodes:
        if node.get("id") == "runningNumberBackTwo":
            numbers = node.get("number") or []
            if not numbers:
                return None
            return str(numbers[0]).zfill(2)
    return None


def fetch_list_page(page=1):
    """Draw ids on one page of the draw list (newest first, ~20 per page)."""
    data = _get_json(f"{API_BASE}/list/{page}")
    return [x["id"] for x in (data.get("response") or []) if x.get("id")]


def fetch_by_id(draw_id):
    """Fetch one draw by id."""
    url = f"{API_BASE}/lotto/{draw_id}"
    data = _get_json(url)
    body = data.get("response") or {}
    return {
        "id": draw_id,
        "dateTh": body.get("date", ""),
        "last2": extract_last_two(data),
        "endpoint": body.get("endpoint", ""),
        "source": url,
    }


def fetch_latest():
    """Fetch the latest draw; its id comes from the first entry of list page 1."""
    url = f"{API_BASE}/latest"
    data = _get_json(url)
    body = data.get("response") or {}
    ids = fetch_list_page(1)
    if not ids:
        raise FetchError("draw list is empty; cannot determine the latest id")
    return {
        "id": ids[0],
        "dateTh": body.get("date", ""),
        "last2": extract_last_two(data),
        "endpoint": body.get("endpoint", ""),
        "source": url,
    }


def _load_entries_or_empty(path):
    if not os.path.exists(path):
        return []
    try:
        return [e for e in _read_entries(path) if isinstance(e, dict)]
    except (OSError, ValueError):
        return []


def run_latest(path=None):
    """Fetch the latest draw and store it."""
    path = path or HISTORY_PATH
    history = _load_entries_or_empty(path)
    latest = fetch_latest()
    history, changed = upsert(history, latest)
    if changed:
        save_history(history, path)
        print(f"[Scraper] Saved latest draw: id={latest['id']}, "
              f"date=\"{latest['dateTh']}\", last2={latest['last2']}")
    else:
        print("[Scraper] No change (latest already recorded).")
    return latest


def run_backfill(pages=1, path=None):
    """
    Walk list pages 1..pages and store every draw on them.

    A failing id is reported and skipped; progress is saved after every
    change. Returns the number of new/updated entries.
    """
    path = path or HISTORY_PATH
    history = _load_entries_or_empty(path)
    total_changed = 0

    for page in range(1, pages + 1):
        print(f"[Scraper] Fetching list page {page} ...")
        for draw_id in fetch_list_page(page):
            try:
                row = fetch_by_id(draw_id)
            except FetchError as e:
                print(f"  ! error id={draw_id}: {e}")
                continue
            history, changed = upsert(history, row)
            if changed:
                total_changed += 1
                save_history(history, path)
            print(f"  • id={draw_id} date=\"{row['dateTh']}\" last2={row['last2']}")

    print(f"[Scraper] Backfill done. New/updated entries: {total_changed}")
    return total_changed
