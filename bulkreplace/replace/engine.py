from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from bulkreplace.errors import FileOperationError, InvalidPattern, ResolutionError
from bulkreplace.models import (
    ErrorDescription,
    FileResult,
    JobOutcome,
    ReplaceFlags,
    SelectionConfig,
)
from bulkreplace.replace.matcher import Substitution
from bulkreplace.scanner import PathResolver
from bulkreplace.utils import read_text, write_text

logger = logging.getLogger("bulkreplace")


class ReplaceEngine:
    """Run one search-and-replace job over a resolved set of files.

    Files are processed independently on a thread pool; results come back
    in resolution order. Read, replacement and write failures stay with
    their file; resolution and pattern failures fail the whole job.
    """

    def __init__(
        self, resolver: PathResolver | None = None, max_workers: Optional[int] = None
    ) -> None:
        self.resolver = resolver or PathResolver()
        self.max_workers = max_workers

    async def execute(self, config: SelectionConfig) -> JobOutcome:
        return await asyncio.to_thread(self.run, config)

    def run(self, config: SelectionConfig) -> JobOutcome:
        if not config.paths:
            logger.debug("No paths given, nothing to do")
            return JobOutcome(success=True, results=[])

        flags = config.flags
        try:
            substitution = Substitution.from_config(config)
            files = self.resolver.resolve(
                config.paths,
                ignore=flags.ignore,
                cwd=config.cwd,
                allow_empty=flags.allow_empty_paths,
            )
        except (InvalidPattern, ResolutionError) as exc:
            logger.error("Replace job failed: %s", exc)
            return JobOutcome.failure(exc)

        logger.info(
            "Processing %d files%s", len(files), " (dry run)" if flags.dry_run else ""
        )
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            results: List[FileResult] = list(
                pool.map(lambda p: self._process(p, substitution, flags), files)
            )

        changed = sum(1 for r in results if r.has_changed)
        failed = sum(1 for r in results if r.failed)
        logger.info("%d changed, %d failed, %d files total", changed, failed, len(results))
        return JobOutcome(success=True, results=results)

    def _process(
        self, path: Path, substitution: Substitution, flags: ReplaceFlags
    ) -> FileResult:
        try:
            original = read_text(path, flags.encoding)
        except (OSError, UnicodeError) as exc:
            return self._failed(path, "read", exc, has_changed=False)

        try:
            updated, matches, replaced = substitution.apply(original)
        except Exception as exc:
            logger.warning("Replacement failed for %s: %s", path, exc)
            return FileResult(
                file=str(path),
                has_changed=False,
                error=ErrorDescription(
                    kind=type(exc).__name__, message=str(exc), path=str(path)
                ),
            )
        has_changed = updated != original
        result = FileResult(
            file=str(path),
            has_changed=has_changed,
            num_matches=matches,
            num_replacements=replaced,
        )
        if not has_changed or flags.dry_run:
            logger.debug("%s: %d matches, changed=%s", path, matches, has_changed)
            return result

        try:
            write_text(path, updated, flags.encoding)
        except (OSError, UnicodeError) as exc:
            failed = self._failed(path, "write", exc, has_changed=True)
            failed.num_matches = matches
            failed.num_replacements = replaced
            return failed
        logger.debug("%s: wrote %d replacements", path, replaced)
        return result

    def _failed(
        self, path: Path, operation: str, exc: Exception, has_changed: bool
    ) -> FileResult:
        error = FileOperationError(path, operation, str(exc))
        logger.warning("%s", error)
        return FileResult(
            file=str(path),
            has_changed=has_changed,
            error=ErrorDescription.from_exception(error),
        )
