"""Fixed-interval loop that repeats the sync cycle."""

import logging
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class SyncScheduler:
    """Runs a cycle immediately, then again ``interval`` seconds after each one ends.

    The wait starts when a cycle finishes, so the effective period is the
    cycle duration plus the interval. The loop only ends when ``stop()`` is
    called, ``max_cycles`` is reached, or a cycle raises while
    ``continue_on_error`` is off.
    """

    def __init__(
        self,
        cycle: Callable[[], Any],
        interval: float,
        stop_event: threading.Event | None = None,
        continue_on_error: bool = False,
        max_cycles: int | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.cycle = cycle
        self.interval = interval
        self.stop_event = stop_event or threading.Event()
        self.continue_on_error = continue_on_error
        self.max_cycles = max_cycles
        self.cycles_run = 0
        self.failures = 0

    def stop(self) -> None:
        """Request the loop to end; an ongoing wait returns immediately."""
        self.stop_event.set()

    @property
    def stopped(self) -> bool:
        return self.stop_event.is_set()

    def _run_one(self) -> None:
        try:
            self.cycle()
        except Exception:
            self.failures += 1
            if not self.continue_on_error:
                raise
            logger.exception("Sync cycle %d failed, retrying in %.0fs", self.cycles_run + 1, self.interval)
        finally:
            self.cycles_run += 1

    def run(self) -> int:
        """Run cycles until stopped and return how many were executed."""
        logger.info("Scheduler started, interval %.0fs", self.interval)
        while not self.stopped:
            self._run_one()

            if self.max_cycles is not None and self.cycles_run >= self.max_cycles:
                break
            # wait() returns True as soon as stop() is called
            if self.stop_event.wait(self.interval):
                break

        logger.info("Scheduler stopped after %d cycles", self.cycles_run)
        return self.cycles_run
