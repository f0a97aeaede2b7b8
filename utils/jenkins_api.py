"""
Thin wrappers for the Jenkins REST calls behind the chat commands.

All functions raise meaningful exceptions rather than returning error strings,
so callers (the command dispatcher, MCP tools) decide how to surface failures.
"""

import logging
import os
from dataclasses import dataclass

import requests
from dotenv import load_dotenv

from utils.jobs import Job

load_dotenv()

logger = logging.getLogger(__name__)

_JENKINS_URL = os.environ.get("JENKINS_URL", "").rstrip("/")
_JENKINS_USER = os.environ.get("JENKINS_USER", "")
_JENKINS_TOKEN = os.environ.get("JENKINS_TOKEN", "")

if not _JENKINS_URL:
    raise EnvironmentError(
        "Missing required environment variable: JENKINS_URL. "
        "Copy .env.example to .env and fill in your Jenkins details."
    )

_AUTH = (_JENKINS_USER, _JENKINS_TOKEN) if _JENKINS_USER and _JENKINS_TOKEN else None
_TIMEOUT = float(os.environ.get("JENKINS_TIMEOUT", "30"))

_VERIFY_SSL = os.environ.get("JENKINS_VERIFY_SSL", "true").lower() not in ("false", "0", "no")

if not _VERIFY_SSL:
    import urllib3
    urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

_JOB_TREE = "jobs[name,color,url]"

_STATUS_CREATED = 201
_STATUS_NEEDS_EMPTY_PARAMS = 400


@dataclass(frozen=True)
class BuildResult:
    status_code: int
    body: str

    @property
    def started(self) -> bool:
        return self.status_code == _STATUS_CREATED


def _absolute(path_or_url: str) -> str:
    if path_or_url.startswith(("http://", "https://")):
        return path_or_url
    return f"{_JENKINS_URL}/{path_or_url.lstrip('/')}"


def _send(method: str, path_or_url: str, **kwargs) -> requests.Response:
    """Issue one request, translating transport failures into builtin errors."""
    url = _absolute(path_or_url)
    try:
        return requests.request(
            method, url, auth=_AUTH, timeout=_TIMEOUT, verify=_VERIFY_SSL, **kwargs,
        )
    except requests.Timeout:
        raise TimeoutError(
            f"Jenkins did not respond within {_TIMEOUT:g} seconds ({url})."
        )
    except requests.ConnectionError:
        raise ConnectionError(
            f"Cannot reach Jenkins at {_JENKINS_URL}. "
            "Verify the server is running and JENKINS_URL is correct."
        )


def _get(path_or_url: str, **kwargs) -> requests.Response:
    response = _send("GET", path_or_url, **kwargs)
    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        logger.debug("Jenkins HTTP %s for %s", exc.response.status_code, path_or_url)
        raise
    return response


def _post(path_or_url: str, **kwargs) -> requests.Response:
    """HTTP POST that leaves status interpretation to the caller."""
    return _send("POST", path_or_url, **kwargs)


def _api_path(url: str) -> str:
    return f"{url.rstrip('/')}/api/json?tree={_JOB_TREE}"


# ---------------------------------------------------------------------------
# Job discovery
# ---------------------------------------------------------------------------


def get_subjobs(url: str) -> list[Job]:
    """Return the buildable jobs under *url*, descending into folders.

    Entries carrying a ``color`` are jobs; anything without one (folders,
    multibranch projects, organisation folders) is walked recursively and its
    jobs spliced in place, so the result keeps the API's depth-first order.
    """
    data = _get(_api_path(url)).json()

    jobs: list[Job] = []
    for entry in data.get("jobs") or []:
        if "color" in entry:
            jobs.append(Job.from_api(entry))
        else:
            logger.debug("Descending into folder %s", entry.get("name", entry.get("url")))
            jobs.extend(get_subjobs(entry["url"]))
    return jobs


def get_jobs() -> list[Job]:
    """Flat list of every buildable job on the server, in traversal order."""
    return get_subjobs(_JENKINS_URL)


# ---------------------------------------------------------------------------
# Build trigger
# ---------------------------------------------------------------------------


def build_url(job_url: str, with_parameters: bool) -> str:
    endpoint = "buildWithParameters" if with_parameters else "build"
    return f"{job_url.rstrip('/')}/{endpoint}"


def trigger_build(
    job: Job,
    params: dict[str, str] | None = None,
    empty_params: bool = False,
) -> BuildResult:
    """POST a build request for *job*.

    Jenkins answers 400 on ``/build`` for parameterised jobs; that case is
    retried exactly once against ``/buildWithParameters`` with no parameters,
    which builds with the job's defaults.
    """
    url = build_url(job.url, params is not None or empty_params)
    response = _post(url, params=params)
    logger.debug("Build request for %s returned %s", job.name, response.status_code)

    if (
        response.status_code == _STATUS_NEEDS_EMPTY_PARAMS
        and params is None
        and not empty_params
    ):
        logger.debug("Issuing rebuild of %s with empty parameters", job.name)
        return trigger_build(job, empty_params=True)

    return BuildResult(status_code=response.status_code, body=response.text or "")
