from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from bulkreplace.errors import ConfigurationError, FileOperationError

ReplacementFn = Callable[[str, Tuple[Optional[str], ...]], str]
Replacement = Union[str, ReplacementFn]

PAYLOAD_ALIASES = {
    "files": "paths",
    "from": "pattern",
    "to": "replacement",
    "dry": "dry_run",
}
FLAG_FIELDS = (
    "ignore_case",
    "ignore",
    "dry_run",
    "replace_all",
    "allow_empty_paths",
    "encoding",
)


@dataclass(frozen=True)
class ReplaceFlags:
    regex: bool = False
    ignore_case: bool = False
    ignore: Tuple[str, ...] = ()
    dry_run: bool = False
    replace_all: bool = True
    allow_empty_paths: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if isinstance(self.ignore, str):
            object.__setattr__(self, "ignore", (self.ignore,))
        else:
            object.__setattr__(self, "ignore", tuple(self.ignore))


@dataclass(frozen=True)
class SelectionConfig:
    paths: Tuple[str, ...]
    pattern: Union[str, re.Pattern[str]]
    replacement: Replacement
    flags: ReplaceFlags = field(default_factory=ReplaceFlags)
    cwd: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.paths, str):
            object.__setattr__(self, "paths", (self.paths,))
        else:
            object.__setattr__(self, "paths", tuple(str(p) for p in self.paths))

    @property
    def is_regex(self) -> bool:
        return self.flags.regex or isinstance(self.pattern, re.Pattern)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SelectionConfig":
        """Build a config from a front-end payload.

        The payload carries exactly one of ``pattern`` (literal text) or
        ``regex`` (expression source). ``files``/``from``/``to``/``dry`` are
        accepted for ``paths``/``pattern``/``replacement``/``dry_run``.
        """
        if not isinstance(payload, Mapping):
            raise ConfigurationError(
                f"Payload must be a mapping, got {type(payload).__name__}"
            )
        for alias, name in PAYLOAD_ALIASES.items():
            if alias in payload and name in payload:
                raise ConfigurationError(
                    f"'{alias}' and '{name}' name the same option; give only one"
                )
        data = {PAYLOAD_ALIASES.get(k, k): v for k, v in payload.items()}

        has_text = data.get("pattern") not in (None, "")
        if isinstance(data.get("regex"), bool):
            # {"pattern": ..., "regex": true} marks the pattern as an expression
            has_regex = False
            is_regex = data.pop("regex")
        else:
            has_regex = data.get("regex") not in (None, "")
            is_regex = has_regex
        if has_text == has_regex:
            raise ConfigurationError(
                "Exactly one of 'pattern' or 'regex' is required"
            )
        if "replacement" not in data:
            raise ConfigurationError("'replacement' is required")

        paths = data.get("paths") or ()
        if isinstance(paths, str):
            paths = [paths]
        if not isinstance(paths, Sequence):
            raise ConfigurationError("'paths' must be a list of strings")

        flag_values = {k: data[k] for k in FLAG_FIELDS if data.get(k) is not None}
        flags = ReplaceFlags(regex=is_regex, **flag_values)
        return cls(
            paths=tuple(paths),
            pattern=data["regex"] if has_regex else data["pattern"],
            replacement=data["replacement"],
            flags=flags,
            cwd=data.get("cwd"),
        )


@dataclass
class ErrorDescription:
    kind: str
    message: str
    path: Optional[str] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorDescription":
        path = None
        if isinstance(exc, FileOperationError):
            path = str(exc.path)
        return cls(kind=type(exc).__name__, message=str(exc), path=path)


@dataclass
class FileResult:
    file: str
    has_changed: bool
    num_matches: int = 0
    num_replacements: int = 0
    error: Optional[ErrorDescription] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class JobOutcome:
    success: bool
    results: List[FileResult] = field(default_factory=list)
    error: Optional[ErrorDescription] = None

    @classmethod
    def failure(cls, exc: BaseException) -> "JobOutcome":
        return cls(success=False, error=ErrorDescription.from_exception(exc))

    @property
    def changed(self) -> List[FileResult]:
        return [r for r in self.results if r.has_changed and not r.failed]

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.results if r.failed]

    def as_pair(self) -> Tuple[bool, Any]:
        if self.success:
            return True, self.results
        return False, self.error
