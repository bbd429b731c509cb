# steambox/storage.py
from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


# --------------------
# Local markdown files
# --------------------
def read_document(path: Path) -> bytes:
    return Path(path).read_bytes()


def _target_mode(path: Path) -> int:
    """Mode of the file being replaced, or 0o666 minus the umask for a new one."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _atomic_write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = None
    try:
        with tempfile.NamedTemporaryFile("wb", delete=False, dir=str(path.parent)) as f:
            tmp = Path(f.name)
            f.write(data)
        os.chmod(tmp, _target_mode(path))
        tmp.replace(path)
    except BaseException:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
        raise


def write_document(path: Path, data: bytes) -> None:
    """Replace the file in one step so a failed run never leaves half a README."""
    _atomic_write(Path(path), data)
