# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
SDK version and API compatibility checks.

API_VERSION_RANGE is a space-separated list of comparators, each a
``major.minor.patch`` version prefixed by one of ``>=``, ``>``, ``<=``, ``<``
or ``==``. A version is compatible when it satisfies every comparator.

Example:
    >>> health = await client.health()
    >>> if not is_compatible(health.version):
    ...     logger.warning(f"Server {health.version} is outside {API_VERSION_RANGE}")
"""

from __future__ import annotations

import logging
import operator
import re
from collections.abc import Callable

logger = logging.getLogger(__name__)

SDK_VERSION = "0.1.0"
"""Version of this client library."""

API_VERSION_RANGE = ">=0.3.0 <1.0.0"
"""Server API versions this client is tested against."""

_VERSION_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?(?:\.(\d+))?")
_OPERATORS: dict[str, Callable[[tuple[int, ...], tuple[int, ...]], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
}


def parse_version(version: str) -> tuple[int, int, int] | None:
    """
    Parse ``major.minor.patch`` ignoring any pre-release or build suffix.

    Returns None for strings that do not start with a version number.

    Example:
        >>> parse_version("0.4.1-beta.2")
        (0, 4, 1)
    """
    match = _VERSION_RE.match(version.strip())
    if match is None:
        return None
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return major, minor, patch


def is_compatible(api_version: str, version_range: str = API_VERSION_RANGE) -> bool:
    """
    True if ``api_version`` satisfies every comparator in ``version_range``.

    Unparseable versions are reported as incompatible.

    Example:
        >>> is_compatible("0.3.2")
        True
        >>> is_compatible("1.0.0")
        False
    """
    actual = parse_version(api_version)
    if actual is None:
        logger.debug(f"Unparseable API version: {api_version!r}")
        return False

    for comparator in version_range.split():
        for symbol, compare in _OPERATORS.items():
            if comparator.startswith(symbol):
                expected = parse_version(comparator[len(symbol) :])
                break
        else:
            compare = operator.eq
            expected = parse_version(comparator)
        if expected is None:
            raise ValueError(f"Invalid version comparator: {comparator!r}")
        if not compare(actual, expected):
            return False
    return True


__all__ = [
    "API_VERSION_RANGE",
    "SDK_VERSION",
    "is_compatible",
    "parse_version",
]
