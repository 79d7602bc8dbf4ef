"""In-memory, thread-safe short link DAO

This module provides the link store: the single owner of the code -> LinkModel
mapping. All reads and writes go through one re-entrant lock, so a click
decrement can never be lost to a concurrent decrement or removal of the same
code.

Responsibilities:
    - Create links with a collision-free generated code;
    - Consume clicks atomically (existence -> expiry -> quota);
    - Remove links and detach them from their owner in the same critical section;
    - Report every change to an `on_change` listener (persistence flush).

Classes:
    LinkMemoryDAO:
        Link store implementing LinkBaseDAO.

Example:
    >>> users = UserMemoryDAO()
    >>> alice = users.register('alice', 'pw1')
    >>> dao = LinkMemoryDAO(users=users)
    >>> link = dao.create('https://example.com/page', alice.token, 1)
    >>> dao.hit(link.code).clicks_remaining
    0
    >>> dao.hit(link.code)
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.LinkQuotaExhaustedError: Link with code '...' has no clicks remaining.

NOTE:
    Lock ordering is always link store -> user store. The user store never
    calls back into the link store, so the two locks can't deadlock.
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timedelta
from collections.abc import Callable

from beartype import beartype

from linkshortener.models import LinkModel
from linkshortener.types import Clock, ChangeListener
from linkshortener.constants import TTL, Shortcode
from linkshortener.dao.base import LinkBaseDAO, UserBaseDAO
from linkshortener.dao.exceptions import (
    LinkNotFoundError,
    LinkAlreadyExistsError,
    LinkExpiredError,
    LinkQuotaExhaustedError,
    ShortcodeGenerationError,
)
from linkshortener.exceptions import InvalidInputError
from linkshortener.utils.helpers import utcnow, is_valid_url
from linkshortener.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class LinkMemoryDAO(LinkBaseDAO):
    """In-memory link store

    Args:
        users (UserBaseDAO):
            Account store notified when codes are created (attach) or removed (detach).

        links (dict[str, LinkModel], optional):
            Initial links keyed by code (e.g. from a loaded snapshot).

        on_change (Callable[[], None], optional):
            Called after each successful mutation, outside the lock.

        clock (Callable[[], datetime], optional):
            Source of "now". Defaults to UTC time truncated to seconds.

        generator (Callable[[str], str], optional):
            Shortcode generator taking the owner token. Defaults to generate_shortcode.

        max_attempts (int, optional):
            Number of codes tried before raising ShortcodeGenerationError.
    """

    def __init__(
        self,
        users: UserBaseDAO,
        links: dict[str, LinkModel] | None = None,
        on_change: ChangeListener | None = None,
        clock: Clock = utcnow,
        generator: Callable[[str], str] = generate_shortcode,
        max_attempts: int = Shortcode.MAX_ATTEMPTS,
    ):
        self._users = users
        self._links: dict[str, LinkModel] = dict(links or {})
        self._lock = threading.RLock()
        self._clock = clock
        self._generator = generator
        self._max_attempts = max_attempts
        self.on_change = on_change

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._links

    @beartype
    def create(self, target_url: str, owner_token: str, click_limit: int, **kwargs) -> LinkModel:
        if not is_valid_url(target_url):
            raise InvalidInputError(f'Malformed URL: {target_url!r}.')
        if isinstance(click_limit, bool) or click_limit < 0:
            raise InvalidInputError(f'Click limit must be a non-negative integer (given value: {click_limit!r}).')

        created_at = self._clock()
        expires_at = created_at + timedelta(seconds=TTL.LINK)

        with self._lock:
            for attempt in range(1, self._max_attempts + 1):
                link = LinkModel(
                    code=self._generator(owner_token),
                    target_url=target_url,
                    owner_token=owner_token,
                    clicks_remaining=click_limit,
                    created_at=created_at,
                    expires_at=expires_at,
                )
                try:
                    self._put(link)
                except LinkAlreadyExistsError:
                    logger.warning('Shortcode collision, regenerating.', extra={'shortcode': link.code, 'attempt': attempt})
                else:
                    break
            else:
                raise ShortcodeGenerationError(f'No free shortcode found after {self._max_attempts} attempts.')

        logger.info('Created link.', extra={'shortcode': link.code, 'clicks_remaining': click_limit})
        self._changed()
        return link

    @beartype
    def insert(self, link: LinkModel, **kwargs) -> 'LinkMemoryDAO':
        with self._lock:
            self._put(link)
        self._changed()
        return self

    @beartype
    def get(self, code: str, **kwargs) -> LinkModel:
        with self._lock:
            link = self._links.get(code)
        if link is None:
            raise LinkNotFoundError(f"Link with code '{code}' not found.")
        return link

    @beartype
    def hit(self, code: str, now: datetime | None = None, **kwargs) -> LinkModel:
        if now is None:
            now = self._clock()

        with self._lock:
            link = self._links.get(code)
            if link is None:
                raise LinkNotFoundError(f"Link with code '{code}' not found.")
            if link.is_expired(now):
                raise LinkExpiredError(f"Link with code '{code}' expired at {link.expires_at.isoformat()}.", link)
            if link.is_exhausted:
                raise LinkQuotaExhaustedError(f"Link with code '{code}' has no clicks remaining.", link)

            link = replace(link, clicks_remaining=link.clicks_remaining - 1)
            self._links[code] = link

        logger.debug('Consumed link click.', extra={'shortcode': code, 'clicks_remaining': link.clicks_remaining})
        self._changed()
        return link

    @beartype
    def delete(self, code: str, if_expired: datetime | None = None, **kwargs) -> LinkModel | None:
        with self._lock:
            link = self._links.get(code)
            if link is None:
                return None
            if if_expired is not None and not link.is_expired(if_expired):
                return None
            del self._links[code]
            self._users.detach_code(link.owner_token, code)

        logger.info('Removed link.', extra={'shortcode': code})
        self._changed()
        return link

    @beartype
    def links_for_user(self, owner_token: str, **kwargs) -> list[LinkModel]:
        codes = self._users.owned_codes(owner_token)
        with self._lock:
            return [self._links[code] for code in codes if code in self._links]

    @beartype
    def expired(self, now: datetime | None = None, **kwargs) -> list[LinkModel]:
        if now is None:
            now = self._clock()
        with self._lock:
            return [link for link in self._links.values() if link.is_expired(now)]

    def snapshot(self) -> dict[str, LinkModel]:
        with self._lock:
            return dict(self._links)

    def _put(self, link: LinkModel) -> None:
        # Caller holds self._lock
        if link.code in self._links:
            raise LinkAlreadyExistsError(f"Link with code '{link.code}' already exists.")
        self._links[link.code] = link
        self._users.attach_code(link.owner_token, link.code)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
