from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from bulkreplace.errors import InvalidPattern
from bulkreplace.models import Replacement, SelectionConfig


@dataclass(frozen=True)
class Substitution:
    """A compiled pattern plus the replacement applied to each match.

    Literal patterns are escaped and their string replacement is inserted
    verbatim. Regex patterns take a Python template (``\\1``, ``\\g<name>``).
    Callables get ``(match_text, groups)`` and return the text to insert.
    """

    regex: re.Pattern[str]
    replacement: Replacement
    literal: bool = True
    replace_all: bool = True

    @classmethod
    def from_config(cls, config: SelectionConfig) -> "Substitution":
        flags = config.flags
        pattern = config.pattern
        re_flags = re.IGNORECASE if flags.ignore_case else 0

        if isinstance(pattern, re.Pattern):
            regex = pattern
            if re_flags and not regex.flags & re.IGNORECASE:
                regex = re.compile(regex.pattern, regex.flags | re_flags)
        elif not isinstance(pattern, str) or not pattern:
            raise InvalidPattern("Pattern must be a non-empty string")
        else:
            source = pattern if flags.regex else re.escape(pattern)
            try:
                regex = re.compile(source, re_flags)
            except re.error as exc:
                raise InvalidPattern(f"Invalid regular expression {pattern!r}: {exc}") from exc

        replacement = config.replacement
        literal = not config.is_regex
        if isinstance(replacement, str):
            if not literal:
                # group references are checked when the template is compiled
                try:
                    regex.sub(replacement, "")
                except (re.error, IndexError) as exc:
                    raise InvalidPattern(
                        f"Invalid replacement {replacement!r}: {exc}"
                    ) from exc
        elif not callable(replacement):
            raise InvalidPattern(
                f"Replacement must be a string or callable, got {type(replacement).__name__}"
            )
        return cls(
            regex=regex,
            replacement=replacement,
            literal=literal,
            replace_all=flags.replace_all,
        )

    def apply(self, text: str) -> Tuple[str, int, int]:
        """Return ``(updated, num_matches, num_replacements)`` for *text*."""
        num_matches = sum(1 for _ in self.regex.finditer(text))
        if num_matches == 0:
            return text, 0, 0

        replaced = 0

        def _sub(match: re.Match[str]) -> str:
            nonlocal replaced
            new = self._render(match)
            if new != match.group(0):
                replaced += 1
            return new

        updated = self.regex.sub(_sub, text, count=0 if self.replace_all else 1)
        return updated, num_matches, replaced

    def _render(self, match: re.Match[str]) -> str:
        if callable(self.replacement):
            result = self.replacement(match.group(0), match.groups())
            if not isinstance(result, str):
                raise TypeError(
                    f"Replacement callable returned {type(result).__name__}, expected str"
                )
            return result
        if self.literal:
            return self.replacement
        return match.expand(self.replacement)
