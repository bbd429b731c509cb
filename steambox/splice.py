# steambox/splice.py
from __future__ import annotations

from typing import Sequence, Union

START_MARKER = b"<!-- steam-box start -->"
END_MARKER   = b"<!-- steam-box end -->"
ATTRIBUTION  = "<!-- Powered by https://github.com/YouEclipse/steam-box . -->"

FENCE_OPEN  = "```text"
FENCE_CLOSE = "```"


class MarkerNotFound(ValueError):
    """A sentinel marker is missing from the document."""

    def __init__(self, marker: bytes, message: str | None = None):
        self.marker = marker
        super().__init__(message or f"marker {marker.decode('utf-8', 'replace')!r} not found")


class MarkersOutOfOrder(MarkerNotFound):
    """The end marker only appears before the start marker."""

    def __init__(self, marker: bytes):
        super().__init__(
            marker, f"marker {marker.decode('utf-8', 'replace')!r} appears before the start marker"
        )


def splice(
    document: bytes,
    title: str,
    body: Union[str, Sequence[str]],
    *,
    start_marker: bytes = START_MARKER,
    end_marker: bytes = END_MARKER,
    attribution: str = ATTRIBUTION,
) -> bytes:
    """
    Replace everything between `start_marker` and `end_marker` with a titled,
    fenced text block. Bytes outside the markers (and the markers themselves)
    are kept as-is, so splicing the result again replaces rather than appends.
    """
    start = document.find(start_marker)
    if start < 0:
        raise MarkerNotFound(start_marker)
    head_end = start + len(start_marker)

    end = document.find(end_marker, head_end)
    if end < 0:
        if end_marker in document:
            raise MarkersOutOfOrder(end_marker)
        raise MarkerNotFound(end_marker)

    if not isinstance(body, str):
        body = "\n".join(body)

    section = "\n" + title + "\n" + FENCE_OPEN + "\n" + body + "\n" + FENCE_CLOSE + "\n" + attribution + "\n"
    return document[:head_end] + section.encode("utf-8") + document[end:]
