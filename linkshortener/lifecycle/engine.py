"""Link lifecycle engine

Each link follows a one-way state machine:

    ACTIVE ──(now > expires_at)──────> EXPIRED
    ACTIVE ──(clicks_remaining == 0)─> QUOTA_EXHAUSTED

Both terminal states make the link unresolvable. Transitions are detected
lazily, on every resolve()/consume() call, and eagerly by a periodic sweep.

Expired links are reclaimed (removed from the link store and detached from
their owner) on detection, by whichever path sees them first; the
`on_expired` hook fires only for the path that actually removed the link.
Quota-exhausted links are NOT reclaimed: they stay stored, unresolvable,
until their lifetime runs out and the sweep removes them.

Classes:
    LinkState:
        Lifecycle state of a link at a given moment.
    LifecycleEngine:
        Resolution checks, click consumption, sweep and its scheduling.

Example:
    >>> engine = LifecycleEngine(links, notifier=ConsoleNotifier(), interval=300)
    >>> engine.start()
    >>> engine.consume('k3Xa9Q').target_url
    'https://example.com'
    >>> engine.stop()
"""

import logging
from enum import StrEnum
from datetime import datetime
from collections.abc import Callable

from apscheduler.schedulers.background import BackgroundScheduler

from linkshortener.models import LinkModel
from linkshortener.types import Clock
from linkshortener.constants import Sweep
from linkshortener.dao.base import LinkBaseDAO
from linkshortener.dao.exceptions import LinkExpiredError, LinkQuotaExhaustedError
from linkshortener.lifecycle.notifications import Notifier, ConsoleNotifier
from linkshortener.lifecycle.scheduler import build_scheduler
from linkshortener.utils.helpers import utcnow


logger = logging.getLogger(__name__)


class LinkState(StrEnum):
    ACTIVE = 'active'
    EXPIRED = 'expired'
    QUOTA_EXHAUSTED = 'quota_exhausted'


class LifecycleEngine:
    """Evaluate expiry and quota on resolution and reclaim expired links.

    Args:
        links (LinkBaseDAO):
            Link store the engine checks and reclaims from.

        notifier (Notifier, optional):
            Lifecycle hooks. Defaults to ConsoleNotifier.

        interval (float, optional):
            Sweep period in seconds. Defaults to 5 minutes.

        clock (Callable[[], datetime], optional):
            Source of "now". Defaults to UTC time truncated to seconds.
    """

    def __init__(
        self,
        links: LinkBaseDAO,
        notifier: Notifier | None = None,
        interval: float = Sweep.INTERVAL,
        clock: Clock = utcnow,
    ):
        if interval <= 0:
            raise ValueError(f'Sweep interval must be positive (given value: {interval}).')

        self.links = links
        self.notifier = notifier if notifier is not None else ConsoleNotifier()
        self.clock = clock
        self.interval = interval
        self._scheduler: BackgroundScheduler | None = None

    def __enter__(self) -> 'LifecycleEngine':
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @staticmethod
    def state(link: LinkModel, now: datetime) -> LinkState:
        """Return the lifecycle state of `link` as of `now` (expiry takes precedence)."""
        if link.is_expired(now):
            return LinkState.EXPIRED
        if link.is_exhausted:
            return LinkState.QUOTA_EXHAUSTED
        return LinkState.ACTIVE

    def resolve(self, code: str) -> LinkModel:
        """Look up a resolvable link without consuming a click.

        Raises:
            LinkNotFoundError: If the code doesn't exist.
            LinkExpiredError: If the link expired (it is reclaimed on the spot).
            LinkQuotaExhaustedError: If the link has no clicks remaining.
        """
        now = self.clock()
        link = self.links.get(code)

        state = self.state(link, now)
        if state is LinkState.EXPIRED:
            self._reclaim(link, now)
            raise LinkExpiredError(f"Link with code '{code}' expired at {link.expires_at.isoformat()}.", link)
        elif state is LinkState.QUOTA_EXHAUSTED:
            self._notify(self.notifier.on_quota_exhausted, link)
            raise LinkQuotaExhaustedError(f"Link with code '{code}' has no clicks remaining.", link)
        else:
            return link

    def consume(self, code: str) -> LinkModel:
        """Consume one click of a link and return the updated link.

        Raises:
            LinkNotFoundError: If the code doesn't exist.
            LinkExpiredError: If the link expired (it is reclaimed on the spot).
            LinkQuotaExhaustedError: If the link has no clicks remaining.
        """
        now = self.clock()
        try:
            return self.links.hit(code, now=now)
        except LinkExpiredError as e:
            logger.info('Rejected click on expired link.', extra={'shortcode': code, 'event': LinkState.EXPIRED})
            self._reclaim(e.link, now)
            raise
        except LinkQuotaExhaustedError as e:
            logger.info('Rejected click on exhausted link.', extra={'shortcode': code, 'event': LinkState.QUOTA_EXHAUSTED})
            self._notify(self.notifier.on_quota_exhausted, e.link)
            raise

    def sweep(self, now: datetime | None = None) -> list[LinkModel]:
        """Reclaim every expired link and return the links this sweep removed."""
        if now is None:
            now = self.clock()

        removed = [link for link in self.links.expired(now) if self._reclaim(link, now)]
        if removed:
            logger.info('Swept expired links.', extra={'removed': len(removed)})
        else:
            logger.debug('Sweep found no expired links.')
        return removed

    def start(self) -> None:
        """Start sweeping every `interval` seconds, first one interval from now."""
        if self.running:
            return
        self._scheduler = build_scheduler(self.sweep, interval=self.interval, name='link-sweep')
        self._scheduler.start()
        logger.info('Started background sweep.', extra={'interval': self.interval})

    def stop(self) -> None:
        """Stop the sweep, waiting for a run in progress to finish."""
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is None or not scheduler.running:
            return
        scheduler.shutdown(wait=True)
        logger.info('Stopped background sweep.')

    def _reclaim(self, link: LinkModel, now: datetime) -> bool:
        removed = self.links.delete(link.code, if_expired=now)
        if removed is None:
            # Already reclaimed by a concurrent path
            return False
        self._notify(self.notifier.on_expired, removed)
        return True

    def _notify(self, hook: Callable[[str, str], None], link: LinkModel) -> None:
        try:
            hook(link.owner_token, link.code)
        except Exception:
            logger.exception('Notifier failed; ignoring.', extra={'shortcode': link.code})
