"""Poll-until-stable readiness detection.

Lazily loaded outlines keep materializing items for a while after they are
opened. `StabilityPoller` checks the source on a fixed interval and completes
once the source reports itself stable, or once the materialized item count has
not grown for a number of consecutive checks.
"""

from __future__ import annotations

import time
from typing import Callable

from outlinegrid.ingest.protocol import OutlineSource
from outlinegrid.logging import get_logger
from outlinegrid.models.item import RawItem

logger = get_logger(__name__)


class StabilityPoller:
    """Cooperative poll loop over an `OutlineSource`.

    `tick()` performs a single check and can be driven by an external
    scheduler; `run()` drives it synchronously, sleeping between checks.
    """

    def __init__(
        self,
        source: OutlineSource,
        *,
        interval_s: float = 0.5,
        stable_checks: int = 3,
        max_checks: int = 120,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if stable_checks < 1:
            raise ValueError("stable_checks must be >= 1")
        if max_checks < 1:
            raise ValueError("max_checks must be >= 1")
        self.source = source
        self.interval_s = interval_s
        self.stable_checks = stable_checks
        self.max_checks = max_checks
        self._sleep = sleep

        self.checks = 0
        self._last_count = -1
        self._unchanged = 0
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def cancel(self) -> None:
        """Stop polling; a pending `run()` returns without completing."""

        self._cancelled = True

    def tick(self) -> bool:
        """Perform one stability check.

        Returns:
            True once polling is finished (stable, or out of checks).
        """

        if self._done or self._cancelled:
            return True

        self.checks += 1
        if self.source.is_stable():
            logger.debug("Source reports stable after %d check(s)", self.checks)
            self._done = True
            return True

        count = self.source.item_count()
        if count > self._last_count:
            self._unchanged = 0
            self._last_count = count
        else:
            self._unchanged += 1

        if self._unchanged >= self.stable_checks:
            logger.debug("Item count settled at %d after %d check(s)", count, self.checks)
            self._done = True
        elif self.checks >= self.max_checks:
            logger.warning(
                "Outline still growing after %d check(s); proceeding with %d item(s)",
                self.checks,
                count,
            )
            self._done = True
        return self._done

    def run(self, on_complete: Callable[[list[RawItem]], None]) -> bool:
        """Poll until stable, then hand the materialized items to `on_complete`.

        Returns:
            True if `on_complete` was invoked, False if the poll was cancelled.
        """

        while not self.tick():
            self._sleep(self.interval_s)
        if self._cancelled:
            logger.debug("Poll cancelled after %d check(s)", self.checks)
            return False
        on_complete(self.source.list_items())
        return True
