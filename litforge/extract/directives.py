# litforge/extract/directives.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Directives:
    """Where an import/reference block gets its content from."""

    path: Optional[str] = None
    line_start: Optional[int] = None
    line_end: Optional[int] = None
    tag: Optional[str] = None


def _parse_line_number(key: str, value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        log.warning("Ignoring non-integer %s=%r", key, value)
        return None


def parse_directives(body: str) -> Directives:
    """
    Parse the ``key=value`` lines of an import or reference block body.

    Recognized keys are ``path``, ``line_start``, ``line_end`` and ``tag``.
    Lines without '=' and unknown keys are ignored; later lines overwrite
    earlier ones.
    """
    values: dict = {}
    for line in body.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key, value = key.strip(), value.strip()
        if key in ("path", "tag"):
            values[key] = value or None
        elif key in ("line_start", "line_end"):
            number = _parse_line_number(key, value)
            if number is not None:
                values[key] = number
        else:
            log.debug("Ignoring unknown directive '%s'", key)
    return Directives(**values)
