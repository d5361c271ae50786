"""
Scheduling Module for AC Digest.

DigestRunner performs one pipeline -> batch -> send sequence and refuses to
overlap with itself. DailyScheduler triggers it once a day at a fixed local
hour through an APScheduler cron job.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from .batcher import NOBODY_SOLVED_MESSAGE, build_pages
from .config import DAILY_RUN_HOUR, SCHEDULER_TIMEZONE
from .errors import NotConfiguredError, RunInProgressError
from .judge_client import JudgeClient
from .notifier import Notifier
from .pipeline import run_pipeline
from .store import ConfigStore

logger = logging.getLogger(__name__)

DAILY_JOB_ID = "daily-digest"


@dataclass
class RunReport:
    """Summary of one completed digest run."""
    accounts: int
    problems: int
    pages: int


class DigestRunner:
    """Runs the digest end to end, one run at a time."""

    def __init__(self, store: ConfigStore, client: JudgeClient, notifier: Notifier):
        self.store = store
        self.client = client
        self.notifier = notifier
        self._run_lock = threading.Lock()

    def run(self, now: Optional[float] = None) -> RunReport:
        """
        Fetch, batch and deliver one digest.

        Raises:
            RunInProgressError: Another run has not finished yet
            NotConfiguredError: No destination channel is set
            UpstreamError: A judge fetch failed
            NotificationError: Delivery failed
        """
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Digest run rejected: another run is in progress")
            raise RunInProgressError()

        try:
            start = time.time()
            # One snapshot drives both the roster and the destination
            config = self.store.snapshot()
            if config.channel is None:
                raise NotConfiguredError()

            results = run_pipeline(self.store, self.client, now=now, config=config)
            pages = build_pages(results)

            if pages:
                self.notifier.send_pages(config.channel, pages)
            else:
                self.notifier.send_text(config.channel, NOBODY_SOLVED_MESSAGE)

            report = RunReport(
                accounts=len(results),
                problems=sum(len(details) for _, details in results),
                pages=len(pages),
            )
            logger.info(
                f"Digest run complete: accounts={report.accounts} "
                f"problems={report.problems} pages={report.pages} "
                f"duration={time.time() - start:.1f}s"
            )
            return report
        finally:
            self._run_lock.release()


def daily_trigger(hour: int = DAILY_RUN_HOUR, timezone=SCHEDULER_TIMEZONE) -> CronTrigger:
    """Cron trigger firing every day at hour:00:00 (local time when timezone is None)."""
    return CronTrigger(hour=hour, minute=0, second=0, timezone=timezone)


class DailyScheduler:
    """
    Runs the digest daily on a background APScheduler job.

    The cron trigger computes each fire time from the wall clock, so
    suspension or drift never accumulates. A failed cycle is logged and
    later cycles still run.
    """

    def __init__(
        self,
        runner: DigestRunner,
        hour: int = DAILY_RUN_HOUR,
        timezone=SCHEDULER_TIMEZONE,
    ):
        self.runner = runner
        self.hour = hour
        self._scheduler = BackgroundScheduler(timezone=timezone)
        self._scheduler.add_job(
            self.run_cycle,
            daily_trigger(hour, timezone),
            id=DAILY_JOB_ID,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=60 * 60,
        )

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def next_run_time(self):
        """Next scheduled fire time, or None when the scheduler is stopped."""
        job = self._scheduler.get_job(DAILY_JOB_ID)
        return getattr(job, "next_run_time", None)

    def start(self) -> None:
        if self._scheduler.running:
            return
        self._scheduler.start()
        logger.info(f"Daily scheduler started (hour={self.hour}), next run: {self.next_run_time()}")

    def stop(self) -> None:
        if not self._scheduler.running:
            return
        self._scheduler.shutdown(wait=False)
        logger.info("Daily scheduler stopped")

    def run_cycle(self) -> None:
        """Run the digest once, containing any failure."""
        try:
            self.runner.run()
        except Exception:
            logger.exception("Daily digest run failed")
