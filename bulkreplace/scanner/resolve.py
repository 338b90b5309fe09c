from __future__ import annotations

import fnmatch
import glob
import logging
import os
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from bulkreplace.errors import ResolutionError

logger = logging.getLogger(__name__)

GLOB_CHARS = re.compile(r"[*?[]")


class PathResolver:
    """Expand files, directories and globs into an ordered list of files.

    Directories contribute their direct child files only; recursion is
    requested with ``**`` in a glob. Output is absolute, deduplicated and
    follows the order of the entries, lexical within one expansion.
    """

    DEFAULT_IGNORES = {
        ".git",
        ".hg",
        ".svn",
        ".idea",
        ".vscode",
        "node_modules",
        ".venv",
        "venv",
        "__pycache__",
    }

    def resolve(
        self,
        entries: Sequence[str],
        ignore: Iterable[str] = (),
        cwd: Optional[str] = None,
        allow_empty: bool = False,
    ) -> List[Path]:
        base = Path(cwd).expanduser() if cwd else Path.cwd()
        if not self._stat(base, "is_dir"):
            raise ResolutionError(f"Working directory does not exist: {base}")

        seen: Dict[Path, None] = {}
        for entry in entries:
            for path in self._expand(entry, base):
                seen.setdefault(path, None)

        ignore = list(ignore)
        files = [p for p in seen if not self._is_ignored(p, ignore, base)]
        logger.debug(
            "Resolved %d entries to %d files (%d ignored)",
            len(entries),
            len(files),
            len(seen) - len(files),
        )
        if not files and not allow_empty:
            raise ResolutionError(
                "No files matched: " + ", ".join(str(e) for e in entries)
            )
        return files

    def _expand(self, entry: str, base: Path) -> List[Path]:
        if not isinstance(entry, str) or not entry.strip():
            raise ResolutionError(f"Invalid path entry: {entry!r}")
        if "\x00" in entry:
            raise ResolutionError(f"Invalid path entry: {entry!r}")

        expanded = os.path.expanduser(entry)
        if GLOB_CHARS.search(expanded):
            return self._expand_glob(expanded, base)

        path = Path(expanded)
        if not path.is_absolute():
            path = base / path
        if self._stat(path, "is_dir"):
            return self._expand_dir(path)
        if self._stat(path, "is_file"):
            return [path.resolve()]
        raise ResolutionError(f"Path does not exist: {entry}")

    def _expand_glob(self, pattern: str, base: Path) -> List[Path]:
        try:
            matches = glob.glob(pattern, root_dir=base, recursive=True)
        except (OSError, ValueError) as exc:
            raise ResolutionError(f"Invalid glob '{pattern}': {exc}") from exc

        # only the components the wildcards matched are checked against DEFAULT_IGNORES
        fixed = self._fixed_prefix_len(pattern)
        files: List[Path] = []
        for match in sorted(matches):
            path = base / match
            if not self._stat(path, "is_file"):
                continue
            if self._in_ignored_dir(Path(match), fixed):
                continue
            files.append(path.resolve())
        if not files:
            logger.warning("Glob matched no files: %s", pattern)
        return files

    def _expand_dir(self, directory: Path) -> List[Path]:
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise ResolutionError(f"Cannot list directory {directory}: {exc}") from exc
        return [p.resolve() for p in children if self._stat(p, "is_file")]

    def _stat(self, path: Path, check: str) -> bool:
        try:
            return getattr(path, check)()
        except OSError as exc:
            raise ResolutionError(f"Cannot access {path}: {exc}") from exc

    def _fixed_prefix_len(self, pattern: str) -> int:
        count = 0
        for part in Path(pattern).parts:
            if GLOB_CHARS.search(part):
                break
            count += 1
        return count

    def _in_ignored_dir(self, path: Path, fixed: int = 0) -> bool:
        return any(part in self.DEFAULT_IGNORES for part in path.parts[fixed:-1])

    def _is_ignored(self, path: Path, patterns: List[str], base: Path) -> bool:
        for pattern in patterns:
            if os.path.isabs(pattern):
                if fnmatch.fnmatch(str(path), pattern):
                    return True
                continue
            if path.match(pattern):
                return True
            if fnmatch.fnmatch(str(path), str(base / pattern)):
                return True
        return False
