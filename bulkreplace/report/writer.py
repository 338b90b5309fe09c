from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from bulkreplace.models import FileResult, JobOutcome
from bulkreplace.utils import utc_now_iso, write_text


class ReportWriter:
    def to_json(self, outcome: JobOutcome) -> str:
        payload = asdict(outcome)
        payload["generated_at"] = utc_now_iso()
        return json.dumps(payload, indent=2, ensure_ascii=True)

    def to_markdown(self, outcome: JobOutcome, title: Optional[str] = None) -> str:
        lines = [f"# {title or 'Replace Report'}", ""]

        if not outcome.success:
            error = outcome.error
            lines.append("**Job failed.**")
            if error is not None:
                lines.append("")
                lines.append(f"- **{error.kind}**: {error.message}")
            lines.append("")
            return "\n".join(lines)

        results = outcome.results
        if not results:
            lines.append("No files processed.\n")
            return "\n".join(lines)

        failed = outcome.failed
        changed = outcome.changed
        ok = len(results) - len(failed)
        lines.append(f"{ok} of {len(results)} files processed without error, {len(changed)} changed.")
        lines.append("")

        if changed:
            lines.append(f"## Changed ({len(changed)})")
            lines.extend(self._result_lines(changed))
            lines.append("")

        if failed:
            lines.append(f"## Failed ({len(failed)})")
            for r in failed:
                message = r.error.message if r.error else "unknown error"
                lines.append(f"- `{r.file}`: {message}")
            lines.append("")

        unchanged = len(results) - len(changed) - len(failed)
        if unchanged:
            lines.append(f"## Unchanged ({unchanged})")
            lines.append("")

        return "\n".join(lines)

    def _result_lines(self, results: List[FileResult]) -> List[str]:
        return [
            f"- `{r.file}`: {r.num_replacements} replacement(s), {r.num_matches} match(es)"
            for r in results
        ]

    def write(self, path: Path, content: str) -> None:
        write_text(path, content)
