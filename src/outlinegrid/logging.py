"""Logging utilities.

Log records carry the id of the extraction pass they were emitted from and the
pass step (``poll``, ``extract``), so interleaved refreshes can be told apart.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from dataclasses import dataclass, replace
from typing import Iterator

from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s %(levelname)s [%(pass_id)s/%(step)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class PassLogContext:
    pass_id: str = "-"
    step: str = "-"


_context: contextvars.ContextVar[PassLogContext] = contextvars.ContextVar(
    "outlinegrid_pass", default=PassLogContext()
)


class PassContextFilter(logging.Filter):
    """Copy the active pass context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        ctx = _context.get()
        record.pass_id = ctx.pass_id  # type: ignore[attr-defined]
        record.step = ctx.step  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def pass_context(*, pass_id: str, step: str = "-") -> Iterator[PassLogContext]:
    """Bind an extraction pass to log records emitted inside the block.

    Args:
        pass_id: Extraction pass identifier.
        step: Initial step name.
    """

    token = _context.set(PassLogContext(pass_id=pass_id, step=step))
    try:
        yield _context.get()
    finally:
        _context.reset(token)


def set_step(step: str) -> None:
    """Switch the step of the active pass."""

    _context.set(replace(_context.get(), step=step))


def _rich_handler(root: logging.Logger) -> RichHandler:
    for h in root.handlers:
        if isinstance(h, RichHandler):
            return h
    handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
    root.addHandler(handler)
    return handler


def configure_logging(level: str = "INFO") -> None:
    """Route logs through a single rich handler tagged with pass context.

    Safe to call repeatedly: the handler and its filter are installed once.

    Args:
        level: Logging level name.
    """

    root = logging.getLogger()
    root.setLevel(level)

    handler = _rich_handler(root)
    if not any(isinstance(f, PassContextFilter) for f in handler.filters):
        handler.addFilter(PassContextFilter())
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
