from __future__ import annotations

import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def read_text(path: Path, encoding: str = "utf-8") -> str:
    # newline="" keeps CRLF files byte-for-byte on the way back out
    with open(path, "r", encoding=encoding, newline="") as fh:
        return fh.read()


def write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Replace *path* with *content*, leaving the old file intact on failure."""
    path = Path(path)
    data = content.encode(encoding)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
