"""
Job model plus the pure helpers that sit on top of a job listing:
color-code mapping, filtering, listing format and reference resolution.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

STATE_DISABLED = "DISA"
STATE_FAILING = "FAIL"
STATE_SUCCEEDING = "SUCC"

_INDEX_RE = re.compile(r"\A[-+]?\d+\Z")


def color_to_state(color: str | None) -> str:
    """Collapse a Jenkins color code into a four-letter state.

    'disabled' wins over 'red'; every other code (blue, yellow, notbuilt,
    aborted, *_anime variants of those) counts as succeeding.
    """
    color = color or ""
    if "disabled" in color:
        return STATE_DISABLED
    if "red" in color:
        return STATE_FAILING
    return STATE_SUCCEEDING


@dataclass(frozen=True)
class Job:
    name: str
    color: str
    url: str

    @classmethod
    def from_api(cls, entry: dict) -> Job:
        return cls(
            name=entry.get("name", ""),
            color=entry.get("color") or "",
            url=entry.get("url", ""),
        )

    @property
    def state(self) -> str:
        return color_to_state(self.color)


def _compile_filter(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error:
        return re.compile(re.escape(pattern), re.IGNORECASE)


def filter_jobs(jobs: list[Job], pattern: str | None = None) -> list[tuple[int, Job]]:
    """Return ``(index, job)`` pairs whose ``state + name`` matches *pattern*.

    Indexes are 1-based positions in the unfiltered list so they stay usable
    with ``find_job``. An invalid regex is matched literally.
    """
    numbered = list(enumerate(jobs, start=1))
    if not pattern:
        return numbered
    regex = _compile_filter(pattern)
    return [(i, job) for i, job in numbered if regex.search(job.state + job.name)]


def format_job(index: int, job: Job) -> str:
    return f"[{index}] {job.state} {job.name}\n"


def find_job(jobs: list[Job], reference: str) -> Job | None:
    """Resolve a 1-based index or an exact job name against *jobs*.

    Names resolve to the last job carrying that name.
    """
    reference = reference.strip()
    if _INDEX_RE.match(reference):
        index = int(reference)
        if 1 <= index <= len(jobs):
            return jobs[index - 1]
        return None

    matches = [job for job in jobs if job.name == reference]
    return matches[-1] if matches else None
