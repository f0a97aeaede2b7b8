"""
Chat command dispatcher.

A chat adapter hands over the text addressed to the bot and gets the reply
text back:

  jenkins list [<filter>]                      -> numbered job listing
  jenkins b(uild) <id or name>[, k=v, k=v]     -> trigger a build
  jenkins help                                 -> usage

'j' is accepted as a short form of 'jenkins'. Text that is not a Jenkins
command yields None so the adapter can route it elsewhere.
"""

from __future__ import annotations

import logging
import re

import requests

from utils import jenkins_api
from utils.jobs import filter_jobs, find_job, format_job
from utils.params import ParameterError, parse_params

logger = logging.getLogger(__name__)

_LIST_RE = re.compile(r"j(?:enkins)?\s+list(?:\s+(?P<filter>.+))?", re.IGNORECASE)
_BUILD_RE = re.compile(
    r"j(?:enkins)?\s+b(?:uild)?\s+(?P<job>[\w.\- ]+?)\s*(?:,\s*(?P<params>.*))?",
    re.IGNORECASE,
)
_HELP_RE = re.compile(r"j(?:enkins)?\s+help", re.IGNORECASE)

HELP = {
    "jenkins list <filter>": "lists Jenkins jobs",
    "jenkins b(uild) <job_id or job_name>[, key=value, ...]": (
        "builds the job specified by ID or name. List jobs to get ID."
    ),
}

JOB_NOT_FOUND = "I couldn't find that job. Try `jenkins list` to get a list."


def _handle_error(exc: Exception, context: str) -> str:
    """Convert common exceptions into readable reply text."""
    if isinstance(exc, requests.HTTPError):
        status = exc.response.status_code
        if status == 401:
            return f"[{context}] Authentication failed (401). Check JENKINS_USER and JENKINS_TOKEN."
        if status == 403:
            return f"[{context}] Permission denied (403). The Jenkins user may lack Job/Read or Job/Build."
        if status == 404:
            return f"[{context}] Not found (404). Verify JENKINS_URL points at the Jenkins root."
        return f"[{context}] Jenkins API error {status}: {exc.response.text[:300]}"
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return f"[{context}] {exc}"
    return f"[{context}] Unexpected error: {exc}"


def help_text() -> str:
    return "\n".join(f"{usage} - {description}" for usage, description in HELP.items())


def jenkins_list(pattern: str | None = None) -> str:
    """Numbered listing of every job, optionally narrowed by a regex filter."""
    try:
        jobs = jenkins_api.get_jobs()
    except Exception as exc:
        return _handle_error(exc, "jenkins list")

    if not jobs:
        return "No jobs found."

    matched = filter_jobs(jobs, pattern)
    if not matched:
        return f"No jobs matched '{pattern}'."
    return "".join(format_job(index, job) for index, job in matched)


def jenkins_build(reference: str, input_params: str | None = None) -> str:
    """Trigger a build for the job named or numbered by *reference*."""
    reference = reference.strip()
    input_params = (input_params or "").strip() or None

    try:
        params = parse_params(input_params) if input_params else None
    except ParameterError as exc:
        return str(exc)

    try:
        job = find_job(jenkins_api.get_jobs(), reference)
        if job is None:
            return JOB_NOT_FOUND
        result = jenkins_api.trigger_build(job, params)
    except Exception as exc:
        return _handle_error(exc, "jenkins build")

    if result.started:
        reply = f"({result.status_code}) Build started for {job.name} {job.url}"
        if input_params:
            reply += f", Params: '{input_params}'"
        logger.info("Build started for %s", job.name)
        return reply

    logger.info("Build of %s not started (HTTP %s)", job.name, result.status_code)
    return result.body or f"({result.status_code}) Jenkins returned an empty response."


def handle_command(text: str) -> str | None:
    """Dispatch one chat message; None means it is not a Jenkins command."""
    text = text.strip()

    match = _LIST_RE.fullmatch(text)
    if match:
        return jenkins_list(match.group("filter"))

    match = _BUILD_RE.fullmatch(text)
    if match:
        return jenkins_build(match.group("job"), match.group("params"))

    if _HELP_RE.fullmatch(text):
        return help_text()

    return None
