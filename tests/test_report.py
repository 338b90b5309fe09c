from __future__ import annotations

import json

from bulkreplace.errors import ResolutionError
from bulkreplace.models import ErrorDescription, FileResult, JobOutcome
from bulkreplace.report import ReportWriter


def _outcome() -> JobOutcome:
    return JobOutcome(
        success=True,
        results=[
            FileResult(file="/w/a.txt", has_changed=True, num_matches=2, num_replacements=2),
            FileResult(file="/w/b.txt", has_changed=False),
            FileResult(
                file="/w/c.txt",
                has_changed=True,
                error=ErrorDescription(kind="FileOperationError", message="Cannot write /w/c.txt: denied", path="/w/c.txt"),
            ),
        ],
    )


class TestReportWriter:
    def test_markdown_summary(self):
        md = ReportWriter().to_markdown(_outcome())
        assert "2 of 3 files processed without error, 1 changed." in md
        assert "## Changed (1)" in md
        assert "`/w/a.txt`: 2 replacement(s), 2 match(es)" in md
        assert "## Failed (1)" in md
        assert "denied" in md
        assert "## Unchanged (1)" in md

    def test_markdown_job_failure(self):
        md = ReportWriter().to_markdown(JobOutcome.failure(ResolutionError("No files matched: x")))
        assert "Job failed" in md
        assert "ResolutionError" in md

    def test_markdown_empty(self):
        md = ReportWriter().to_markdown(JobOutcome(success=True), title="noop")
        assert md.startswith("# noop")
        assert "No files processed." in md

    def test_json(self):
        data = json.loads(ReportWriter().to_json(_outcome()))
        assert data["success"] is True
        assert [r["has_changed"] for r in data["results"]] == [True, False, True]
        assert data["results"][2]["error"]["kind"] == "FileOperationError"
        assert "generated_at" in data
