"""
Background loop that applies due registration auto-disable schedules.

The loop only polls; all state lives in the settings store, so the schedule
survives restarts and several workers may poll the same store.
"""

import asyncio
import logging
from contextlib import suppress
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AutoDisableScheduler:
    """Periodically runs a blocking ``check`` callable in a worker thread."""

    def __init__(self, check: Callable[[], bool], interval_seconds: float = 30.0):
        """
        Initialize the scheduler.

        Args:
            check: Callable applying a due schedule, returning True when it
                disabled registration (e.g. RegistrationControl.apply_due)
            interval_seconds: Delay between checks
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.check = check
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> bool:
        """Run one check. Errors are logged, never raised."""
        try:
            return await asyncio.to_thread(self.check)
        except Exception as e:
            logger.error(f"Registration auto-disable check failed: {e}", exc_info=True)
            return False

    async def _run(self) -> None:
        while True:
            await self.tick()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Start the polling task on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info(
            f"Registration auto-disable scheduler started "
            f"(interval={self.interval_seconds}s)"
        )

    async def stop(self) -> None:
        """Cancel the polling task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Registration auto-disable scheduler stopped")
