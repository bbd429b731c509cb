# steambox/summary.py
"""
Turn recently played games into the fixed-width lines shown in the box.

Games are ranked by all-time playtime (when Steam reports it) but the
duration printed next to each name is the two-week figure.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, List, Optional, Sequence

NO_RECENT_GAMES = "Haven't played games recently"

NAME_WIDTH     = 35
DURATION_WIDTH = 16

# Decorative prefixes for a few well-known appids.
NAME_EMOJI = MappingProxyType({
    730:    "🔫 ",  # Counter-Strike
    222880: "🔫 ",  # Insurgency
    265630: "🔫 ",  # Fistful of Frags
    271590: "🚓 ",  # GTA V
    578080: "🍳 ",  # PUBG
    431960: "💻 ",  # Wallpaper Engine
    8930:   "🌏 ",  # Civilization V
    644560: "🔞 ",  # Mirror
    359550: "🔫 ",  # Rainbow Six Siege
})


@dataclass(frozen=True)
class PlayRecord:
    appid: int
    name: str
    minutes_recent: int
    minutes_forever: Optional[int] = None


# ---------- Ranking keys ----------

def by_total_playtime(record: PlayRecord) -> int:
    if record.minutes_forever is None:
        return record.minutes_recent
    return record.minutes_forever

def by_recent_playtime(record: PlayRecord) -> int:
    return record.minutes_recent


# ---------- Formatting ----------

def pad(s: str, fill: str, width: int) -> str:
    """Right-pad to `width` codepoints. Never truncates."""
    missing = width - len(s)
    if missing <= 0 or not fill:
        return s
    return s + fill * missing

def format_duration(minutes: int) -> str:
    return f"{minutes // 60} hrs {minutes % 60} mins"

def emoji_prefix(appid: int) -> str:
    return NAME_EMOJI.get(appid, "")

def decorate_name(appid: int, name: str) -> str:
    return emoji_prefix(appid) + name

def format_line(
    record: PlayRecord,
    *,
    name_width: int = NAME_WIDTH,
    duration_width: int = DURATION_WIDTH,
) -> str:
    name = pad(decorate_name(record.appid, record.name), " ", name_width)
    duration = pad(format_duration(record.minutes_recent), "", duration_width)
    return name + " " + duration


def summarize(
    records: Sequence[PlayRecord],
    max_lines: int = 3,
    *,
    name_width: int = NAME_WIDTH,
    duration_width: int = DURATION_WIDTH,
    rank_key: Callable[[PlayRecord], int] = by_total_playtime,
) -> List[str]:
    """
    Rank `records` (highest first, ties keep input order) and render at most
    `max_lines` of them. An empty input yields the single placeholder line.
    """
    if max_lines < 0:
        raise ValueError(f"max_lines must be >= 0, got {max_lines}")
    if not records:
        return [NO_RECENT_GAMES]

    ranked = sorted(records, key=rank_key, reverse=True)
    return [
        format_line(r, name_width=name_width, duration_width=duration_width)
        for r in ranked[:max_lines]
    ]
