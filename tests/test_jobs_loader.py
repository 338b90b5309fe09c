from __future__ import annotations

from pathlib import Path

import pytest

from bulkreplace.errors import ConfigurationError
from bulkreplace.jobs import JobFile


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "jobs.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestJobFile:
    def test_single_job_mapping(self, tmp_path: Path):
        path = _write(
            tmp_path,
            "paths: ['**/*.py']\npattern: old_name\nreplacement: new_name\ndry_run: true\n",
        )
        loaded = JobFile.load_from_path(path)
        assert len(loaded.jobs) == 1
        job = loaded.jobs[0]
        assert job.name == "job-1"
        assert job.config.paths == ("**/*.py",)
        assert job.config.flags.dry_run
        assert job.config.cwd == str(tmp_path.resolve())

    def test_jobs_list(self, tmp_path: Path):
        path = _write(
            tmp_path,
            """
jobs:
  - name: rename
    paths: [src]
    regex: 'v(\\d+)'
    replacement: 'version \\1'
    ignore: ['*.lock']
    cwd: project
  - paths: docs
    pattern: Foo
    replacement: Bar
    ignore_case: true
""",
        )
        first, second = JobFile.load_from_path(path).jobs
        assert first.name == "rename"
        assert first.config.flags.regex
        assert first.config.flags.ignore == ("*.lock",)
        assert first.config.cwd == str(tmp_path.resolve() / "project")
        assert second.name == "job-2"
        assert second.config.paths == ("docs",)
        assert second.config.flags.ignore_case

    def test_missing_pattern_names_job(self, tmp_path: Path):
        path = _write(tmp_path, "jobs:\n  - paths: [a]\n    replacement: b\n")
        with pytest.raises(ConfigurationError, match="Job #0"):
            JobFile.load_from_path(path)

    def test_bool_fields_checked(self, tmp_path: Path):
        path = _write(tmp_path, "paths: [a]\npattern: x\nreplacement: y\ndry_run: 'yes'\n")
        with pytest.raises(ConfigurationError, match="dry_run"):
            JobFile.load_from_path(path)

    def test_replacement_must_be_string(self, tmp_path: Path):
        path = _write(tmp_path, "paths: [a]\npattern: x\nreplacement: 3\n")
        with pytest.raises(ConfigurationError, match="replacement"):
            JobFile.load_from_path(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write(tmp_path, "paths: [a\n")
        with pytest.raises(ConfigurationError, match="YAML"):
            JobFile.load_from_path(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError):
            JobFile.load_from_path(tmp_path / "nope.yaml")

    def test_empty_jobs_list(self, tmp_path: Path):
        path = _write(tmp_path, "jobs: []\n")
        with pytest.raises(ConfigurationError):
            JobFile.load_from_path(path)
