# steambox/gist.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter, Retry

from . import config as C

GIST_URL = "https://api.github.com/gists/{gist_id}"


class DocumentNotFound(LookupError):
    """The gist has no file with the requested name."""


def _session(token: str, user: Optional[str] = None) -> requests.Session:
    s = requests.Session()
    s.headers.update({
        "User-Agent": C.USER_AGENT,
        "Accept": "application/vnd.github+json",
    })
    if user:
        s.auth = (user.strip(), token.strip())
    else:
        s.headers["Authorization"] = f"Bearer {token.strip()}"
    # only idempotent reads are retried; the PATCH goes out once
    retries = Retry(
        total=C.HTTP_RETRIES, connect=C.HTTP_RETRIES, read=C.HTTP_RETRIES,
        backoff_factor=0.8,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=["GET", "HEAD"],
        raise_on_status=False,
    )
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def get_gist(gist_id: str, *, token: str, user: Optional[str] = None) -> Dict[str, Any]:
    with _session(token, user) as s:
        r = s.get(GIST_URL.format(gist_id=gist_id), timeout=C.HTTP_TIMEOUT)
        r.raise_for_status()
        return r.json() or {}


def _pick_file(gist: Dict[str, Any], filename: Optional[str]) -> Tuple[str, Dict[str, Any]]:
    """Return (name, file entry); the name falls back to the key in `files`."""
    files = gist.get("files") or {}
    if filename is None:
        if not files:
            raise DocumentNotFound(f"gist {gist.get('id')!r} has no files")
        # first file holds the box
        key, entry = next(iter(files.items()))
    elif filename in files:
        key, entry = filename, files[filename]
    else:
        raise DocumentNotFound(f"gist {gist.get('id')!r} has no file named {filename!r}")
    entry = entry or {}
    return entry.get("filename") or key, entry


def get_document(
    gist_id: str,
    filename: Optional[str] = None,
    *,
    token: str,
    user: Optional[str] = None,
) -> tuple[str, bytes]:
    """
    Return (filename, content) of one gist file. Without a filename the first
    file is used. Truncated files are re-read from their raw_url.
    """
    gist = get_gist(gist_id, token=token, user=user)
    name, f = _pick_file(gist, filename)
    if f.get("truncated") and f.get("raw_url"):
        with _session(token, user) as s:
            r = s.get(f["raw_url"], timeout=C.HTTP_TIMEOUT)
            r.raise_for_status()
            return name, r.content
    return name, (f.get("content") or "").encode("utf-8")


def put_document(
    gist_id: str,
    filename: str,
    content: bytes,
    *,
    token: str,
    user: Optional[str] = None,
) -> None:
    payload = {"files": {filename: {"content": content.decode("utf-8")}}}
    with _session(token, user) as s:
        r = s.patch(GIST_URL.format(gist_id=gist_id), json=payload, timeout=C.HTTP_TIMEOUT)
        r.raise_for_status()
