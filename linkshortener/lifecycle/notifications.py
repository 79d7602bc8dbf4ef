"""Link lifecycle notifications

Classes:
    Notifier:
        Abstract callbacks fired when a link becomes unresolvable.
    ConsoleNotifier:
        Default notifier writing a console (log) message per event.

NOTE:
    Notifications are fire-and-forget: the lifecycle engine calls each hook
    exactly once per event, never retries, and logs (then ignores) any
    exception a notifier raises.
"""

import logging
from abc import ABC, abstractmethod

from linkshortener.utils.helpers import get_short_url
from linkshortener.constants import DEFAULT_BASE_URL


logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Callbacks for link lifecycle transitions."""

    @abstractmethod
    def on_expired(self, owner_token: str, code: str) -> None:
        """Called once when an expired link is detected and reclaimed."""
        pass

    @abstractmethod
    def on_quota_exhausted(self, owner_token: str, code: str) -> None:
        """Called when a resolution is rejected because the link has no clicks left."""
        pass


class ConsoleNotifier(Notifier):
    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url

    def on_expired(self, owner_token: str, code: str) -> None:
        logger.warning(
            'Link %s is no longer available: its lifetime has expired.',
            get_short_url(code, self.base_url),
            extra={'shortcode': code, 'owner': owner_token, 'event': 'LINK_EXPIRED'},
        )

    def on_quota_exhausted(self, owner_token: str, code: str) -> None:
        logger.warning(
            'Link %s is no longer available: its click limit is exhausted.',
            get_short_url(code, self.base_url),
            extra={'shortcode': code, 'owner': owner_token, 'event': 'LINK_QUOTA_EXHAUSTED'},
        )
