# steambox/steam.py
"""
Steam Web API helpers.

Public API (used by steambox/main.py):
- get_recently_played(steam_id, api_key, count=5)    # raw "response" payload
- get_recent_playtime(steam_id, api_key, count=5)    # list[PlayRecord]

Retry & backoff for 429/5xx and transport errors; the last error is raised
once the retry budget is spent.
"""

from __future__ import annotations

import random
import time
from typing import Any, Dict, List, Optional

import requests

from . import config as C
from .summary import PlayRecord

RECENTLY_PLAYED_URL = "https://api.steampowered.com/IPlayerService/GetRecentlyPlayedGames/v1/"

SESSION = requests.Session()
SESSION.headers.update({"User-Agent": C.USER_AGENT})


# ---------- HTTP helpers ----------

def _should_retry(status: int) -> bool:
    # Retry for 429 and transient 5xx
    return status == 429 or 500 <= status < 600

def _get(url: str, *, params: Optional[dict] = None) -> requests.Response:
    last_exc: Optional[Exception] = None
    for attempt in range(C.HTTP_RETRIES + 1):
        last_try = attempt == C.HTTP_RETRIES
        try:
            r = SESSION.get(url, params=params, timeout=C.HTTP_TIMEOUT)

            if _should_retry(r.status_code):
                last_exc = requests.HTTPError(f"{r.status_code} {r.reason}", response=r)
                if not last_try:
                    time.sleep(0.8 + attempt * 0.7 + random.random() * 0.3)
            else:
                r.raise_for_status()
                if C.HTTP_PAUSE:
                    time.sleep(C.HTTP_PAUSE)
                return r
        except requests.HTTPError:
            raise
        except requests.RequestException as e:
            last_exc = e
            if not last_try:
                time.sleep(0.6 + attempt * 0.5)
    raise last_exc or RuntimeError("Steam request failed")


# ---------- Fetchers ----------

def get_recently_played(steam_id: str, api_key: str, count: int = C.DEFAULT_RECENT_COUNT) -> Dict[str, Any]:
    params = {"key": api_key, "steamid": steam_id, "count": count, "format": "json"}
    r = _get(RECENTLY_PLAYED_URL, params=params)
    return (r.json() or {}).get("response") or {}

def _to_record(game: Dict[str, Any]) -> PlayRecord:
    forever = game.get("playtime_forever")
    return PlayRecord(
        appid=int(game.get("appid") or 0),
        name=(game.get("name") or f"App {game.get('appid')}").strip(),
        minutes_recent=int(game.get("playtime_2weeks") or 0),
        minutes_forever=int(forever) if forever is not None else None,
    )

def get_recent_playtime(steam_id: str, api_key: str, count: int = C.DEFAULT_RECENT_COUNT) -> List[PlayRecord]:
    """Recently played games for `steam_id`, in the order Steam returns them."""
    payload = get_recently_played(steam_id, api_key, count=count)
    if not payload.get("total_count"):
        return []
    return [_to_record(g) for g in (payload.get("games") or [])]
