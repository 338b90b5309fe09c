from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

from bulkreplace.errors import ConfigurationError
from bulkreplace.models import SelectionConfig

logger = logging.getLogger(__name__)

KNOWN_FIELDS = {
    "name",
    "paths",
    "pattern",
    "regex",
    "replacement",
    "ignore_case",
    "ignore",
    "dry_run",
    "replace_all",
    "allow_empty_paths",
    "encoding",
    "cwd",
}
BOOL_FIELDS = {"ignore_case", "dry_run", "replace_all", "allow_empty_paths"}


@dataclass
class Job:
    name: str
    config: SelectionConfig


@dataclass
class JobFile:
    path: Path
    jobs: List[Job]

    @classmethod
    def load_from_path(cls, path: Path) -> "JobFile":
        """Load one job mapping, or a ``jobs:`` list of them, from YAML.

        Relative ``cwd`` values resolve against the file's directory, which
        is also the default ``cwd`` for a job that does not set one.
        """
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML parse error in '{path}': {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read job file {path}: {e}") from e

        if isinstance(raw, dict) and "jobs" in raw:
            raw_jobs = raw["jobs"]
            if not isinstance(raw_jobs, list) or not raw_jobs:
                raise ConfigurationError(
                    f"Invalid job file '{path}': 'jobs' must be a non-empty list."
                )
        elif isinstance(raw, dict):
            raw_jobs = [raw]
        else:
            raise ConfigurationError(
                f"Invalid job file '{path}': expected a mapping or a 'jobs' list."
            )

        base_dir = path.resolve().parent
        jobs: List[Job] = []
        for idx, item in enumerate(raw_jobs):
            jobs.append(cls._parse_job(idx, item, base_dir))

        logger.info("Loaded %d job(s) from %s", len(jobs), path.name)
        return cls(path=path, jobs=jobs)

    @staticmethod
    def _parse_job(idx: int, item: Any, base_dir: Path) -> Job:
        if not isinstance(item, dict):
            raise ConfigurationError(f"Job #{idx} must be a mapping, got {item!r}")
        label = item.get("name") or f"job-{idx + 1}"

        unknown = set(item) - KNOWN_FIELDS
        if unknown:
            logger.warning(
                "Job '%s': ignoring unknown fields: %s", label, ", ".join(sorted(unknown))
            )

        paths = item.get("paths")
        if isinstance(paths, str):
            paths = [paths]
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            raise ConfigurationError(
                f"Job #{idx} ({label}): 'paths' must be a list of strings."
            )

        for field in BOOL_FIELDS & set(item):
            if not isinstance(item[field], bool):
                raise ConfigurationError(
                    f"Job #{idx} ({label}): '{field}' must be true or false."
                )

        replacement = item.get("replacement")
        if not isinstance(replacement, str):
            raise ConfigurationError(
                f"Job #{idx} ({label}): 'replacement' must be a string."
            )

        payload: Dict[str, Any] = {k: v for k, v in item.items() if k in KNOWN_FIELDS}
        payload.pop("name", None)
        payload["paths"] = paths
        cwd = Path(str(item.get("cwd") or ".")).expanduser()
        payload["cwd"] = str(cwd if cwd.is_absolute() else base_dir / cwd)

        try:
            config = SelectionConfig.from_payload(payload)
        except ConfigurationError as e:
            raise ConfigurationError(f"Job #{idx} ({label}): {e}") from e
        return Job(name=label, config=config)
