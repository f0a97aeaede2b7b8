"""Parse ``key=value, key=value`` build parameter text."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class ParameterError(ValueError):
    """Raised when build parameter text cannot be parsed."""


def parse_params(text: str) -> dict[str, str]:
    """Split *text* on commas into an ordered ``{key: value}`` mapping.

    Only the first '=' of each pair separates key from value, so values may
    themselves contain '='. Empty segments (trailing commas) are ignored.
    """
    params: dict[str, str] = {}
    for segment in text.split(","):
        if not segment.strip():
            continue
        key, sep, value = segment.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ParameterError(
                f"Could not parse build parameter '{segment.strip()}'. "
                "Use key=value pairs separated by commas."
            )
        params[key] = value.strip()

    logger.debug("parse_params: %s", params)
    return params
