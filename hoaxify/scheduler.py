"""Periodic background tasks.

Each sweep is owned by a PeriodicTask that lives on the event loop for as
long as the application runs. The sweeps themselves are synchronous
database work and run in a worker thread with a session of their own.
"""

import asyncio
import contextlib
import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from hoaxify.config import get_settings
from hoaxify.services.file import get_file_service
from hoaxify.services.token import get_token_service

logger = logging.getLogger("hoaxify")


class PeriodicTask:
    """Runs func every interval_seconds on the running event loop."""

    def __init__(self, name: str, interval_seconds: float, func: Callable[[], object], run_at_start: bool = False) -> None:
        self.name = name
        self.interval_seconds = interval_seconds
        self.func = func
        self.run_at_start = run_at_start
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the loop. Calling start on a running task does nothing."""
        if self.running:
            logger.debug("Scheduled task %s already running", self.name)
            return
        self._task = asyncio.get_running_loop().create_task(self._loop(), name=self.name)
        logger.info("Scheduled task %s started (every %ss)", self.name, self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Scheduled task %s stopped", self.name)

    async def run_once(self) -> None:
        try:
            await asyncio.to_thread(self.func)
        except Exception:
            logger.exception("Scheduled task %s failed", self.name)

    async def _loop(self) -> None:
        if self.run_at_start:
            await self.run_once()
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.run_once()


def _with_session(session_factory: Callable[[], Session], work: Callable[[Session], int]) -> Callable[[], int]:
    def run() -> int:
        db = session_factory()
        try:
            return work(db)
        finally:
            db.close()

    return run


def build_cleanup_tasks(session_factory: Callable[[], Session]) -> list[PeriodicTask]:
    """Token sweep (hourly) and unused attachment sweep (at start, then daily)."""
    settings = get_settings()
    return [
        PeriodicTask(
            "token-cleanup",
            settings.TOKEN_CLEANUP_INTERVAL_SECONDS,
            _with_session(session_factory, get_token_service().remove_expired_tokens),
        ),
        PeriodicTask(
            "attachment-cleanup",
            settings.ATTACHMENT_CLEANUP_INTERVAL_SECONDS,
            _with_session(session_factory, get_file_service().remove_unused_attachments),
            run_at_start=True,
        ),
    ]
