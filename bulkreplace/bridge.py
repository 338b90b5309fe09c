from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Tuple, Union

from bulkreplace.errors import ReplaceError
from bulkreplace.models import ErrorDescription, SelectionConfig
from bulkreplace.replace import ReplaceEngine
from bulkreplace.selector import DirectorySelector, TkDirectorySelector

logger = logging.getLogger("bulkreplace")

Submission = Union[SelectionConfig, Mapping[str, Any]]


class ReplaceBridge:
    """The two operations a front-end calls: pick folders, submit a job."""

    def __init__(
        self,
        selector: DirectorySelector | None = None,
        engine: ReplaceEngine | None = None,
    ) -> None:
        self.selector = selector or TkDirectorySelector()
        self.engine = engine or ReplaceEngine()

    def open_directories(self) -> List[str]:
        return self.selector.select()

    async def submit(self, submission: Submission) -> Tuple[bool, Any]:
        try:
            config = self._coerce(submission)
            logger.debug("Submitting job: %r", config)
            outcome = await self.engine.execute(config)
        except Exception as exc:
            logger.error("Error occurred: %s", exc, exc_info=not isinstance(exc, ReplaceError))
            return False, ErrorDescription.from_exception(exc)
        return outcome.as_pair()

    def submit_sync(self, submission: Submission) -> Tuple[bool, Any]:
        return asyncio.run(self.submit(submission))

    def _coerce(self, submission: Submission) -> SelectionConfig:
        if isinstance(submission, SelectionConfig):
            return submission
        return SelectionConfig.from_payload(submission)
