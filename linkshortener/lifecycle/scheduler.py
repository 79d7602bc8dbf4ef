"""Background scheduling of periodic jobs (the expired-link sweep)."""

import logging
from datetime import UTC
from collections.abc import Callable

from apscheduler.schedulers.background import BackgroundScheduler

from linkshortener.constants import Sweep


logger = logging.getLogger(__name__)


def build_scheduler(job: Callable[[], object], interval: float, name: str = 'periodic-job') -> BackgroundScheduler:
    """Return a stopped BackgroundScheduler running `job` every `interval` seconds.

    The interval trigger fires first one interval after start(). Overlapping
    runs are not allowed and missed runs are coalesced into one. Exceptions
    raised by the job are logged by APScheduler and the schedule continues.

    Example:
        >>> scheduler = build_scheduler(engine.sweep, interval=300, name='link-sweep')
        >>> scheduler.start()
        >>> ...
        >>> scheduler.shutdown(wait=True)
    """
    if interval <= 0:
        raise ValueError(f'Interval must be positive (given value: {interval}).')

    scheduler = BackgroundScheduler(timezone=UTC)
    scheduler.add_job(
        job,
        'interval',
        seconds=interval,
        id=name,
        name=name,
        max_instances=1,
        coalesce=True,
        misfire_grace_time=Sweep.MISFIRE_GRACE_TIME,
    )
    logger.debug('Scheduled periodic job.', extra={'job': name, 'interval': interval})
    return scheduler
