"""
Opt-in logging for the chattier parts of the library.

Orchestration and writer modules log through a plain module-level
``logging.getLogger(__name__)``. The resolution engine can trace every
substitution it makes; that output is only produced when the caller asks for
it:

    from litforge._logging import resolve_logger

    def expand(..., logger=None, log: bool = False):
        log = resolve_logger(logger=logger, enabled=log, name=__name__)
        log.debug("expanding")  # no-op unless enabled or logger passed
"""
from __future__ import annotations

import logging


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Return a usable logger according to opt-in policy.

    - If `logger` is provided, use it.
    - Else if `enabled` is True, create/get a named logger.
    - Else return a NoopLogger that ignores calls.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "litforge")
        lg.setLevel(level)
        # Bubble to the root so the CLI handler (and pytest's caplog) see it.
        lg.propagate = True
        return lg
    return NoopLogger()
