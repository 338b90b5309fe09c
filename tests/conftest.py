from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    (tmp_path / "a.txt").write_text("foo bar foo", encoding="utf-8")
    (tmp_path / "b.txt").write_text("baz", encoding="utf-8")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.txt").write_text("foo in a subfolder", encoding="utf-8")
    (sub / "d.log").write_text("foo log", encoding="utf-8")
    return tmp_path
