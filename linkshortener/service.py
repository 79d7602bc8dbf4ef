"""Link shortener service facade

Wires the account store, link store, lifecycle engine and snapshot DAO
into the operations a front end (see `linkshortener.cli`) dispatches onto.

Control flow:
    - register()/login() go to the account store;
    - create_link() generates a code and inserts the link (link store), which
      attaches it to the owner (account store);
    - resolve()/open_link() go through the lifecycle engine (expiry/quota checks,
      click consumption, lazy reclamation of expired links);
    - a background sweep reclaims expired links every `sweep_interval` seconds.

Every store mutation triggers a synchronous flush of the full snapshot.
Flush failures are logged and swallowed: the in-memory state stays
authoritative for the running process.

Example:
    >>> from linkshortener.dao.file import SnapshotFileDAO
    >>> with ShortenerService(SnapshotFileDAO('/tmp/linkshortener')) as service:
    ...     service.register('alice', 'pw1')
    ...     token = service.login('alice', 'pw1')
    ...     link = service.create_link(token, 'https://example.com', 2)
    ...     service.open_link(service.short_url(link.code)).target_url
    'https://example.com'
"""

import logging
import threading
from dataclasses import replace
from collections.abc import Callable

from linkshortener.models import LinkModel, UserModel, SnapshotModel
from linkshortener.types import Clock
from linkshortener.constants import Sweep, DEFAULT_BASE_URL
from linkshortener.dao import UserMemoryDAO, LinkMemoryDAO, create_snapshot_dao
from linkshortener.dao.base import SnapshotBaseDAO
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import InvalidInputError
from linkshortener.lifecycle import LifecycleEngine, Notifier, ConsoleNotifier
from linkshortener.utils import config
from linkshortener.utils.helpers import utcnow, get_short_url, strip_base_url
from linkshortener.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class ShortenerService:
    """Single-process link shortener

    Args:
        snapshot_dao (SnapshotBaseDAO):
            Persistence backend. Loaded once here, saved after every mutation.

        notifier (Notifier, optional):
            Lifecycle hooks. Defaults to ConsoleNotifier.

        sweep_interval (float, optional):
            Background sweep period in seconds. Defaults to 5 minutes.

        base_url (str, optional):
            Display prefix of short links. Defaults to 'clck.ru/'.

        clock (Callable[[], datetime], optional):
            Source of "now" shared by the link store and the engine.

        generator (Callable[[str], str], optional):
            Shortcode generator taking the owner token.
    """

    def __init__(
        self,
        snapshot_dao: SnapshotBaseDAO,
        notifier: Notifier | None = None,
        sweep_interval: float = Sweep.INTERVAL,
        base_url: str = DEFAULT_BASE_URL,
        clock: Clock = utcnow,
        generator: Callable[[str], str] = generate_shortcode,
    ):
        self.snapshot_dao = snapshot_dao
        self.base_url = base_url
        self._flush_lock = threading.Lock()

        snapshot = self._load()
        self.users = UserMemoryDAO(users=snapshot.users, on_change=self.flush)
        self.links = LinkMemoryDAO(
            users=self.users,
            links=snapshot.links,
            on_change=self.flush,
            clock=clock,
            generator=generator,
        )
        self.engine = LifecycleEngine(
            self.links,
            notifier=notifier if notifier is not None else ConsoleNotifier(base_url),
            interval=sweep_interval,
            clock=clock,
        )

    @classmethod
    def from_config(cls, app_config: dict | None = None, **kwargs) -> 'ShortenerService':
        """Build a service from environment configuration (see linkshortener.utils.config).

        Keyword arguments override the environment.
        """
        if app_config is None:
            app_config = config.load_config()
        kwargs.setdefault('sweep_interval', config.sweep_interval())
        kwargs.setdefault('base_url', config.base_url())
        return cls(create_snapshot_dao(app_config), **kwargs)

    def __enter__(self) -> 'ShortenerService':
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    # -------------------------------
    # Accounts
    # -------------------------------

    def register(self, login: str, password: str) -> UserModel:
        return self.users.register(login, password)

    def login(self, login: str, password: str) -> str:
        return self.users.authenticate(login, password)

    # -------------------------------
    # Links
    # -------------------------------

    def create_link(self, token: str, target_url: str, click_limit: int | str) -> LinkModel:
        """Create a short link for an authenticated user.

        Args:
            token (str): session token returned by login().
            target_url (str): syntactically well-formed URI.
            click_limit (int | str): number of allowed resolutions; numeric strings are accepted.

        Raises:
            UserDoesNotExistError: If the session token is unknown.
            InvalidInputError: If the URL is malformed or the limit isn't a non-negative integer.
            ShortcodeGenerationError: If no free code was found.
        """
        self.users.get(token)
        return self.links.create(target_url, token, self._parse_click_limit(click_limit))

    def resolve(self, code_or_url: str) -> LinkModel:
        return self.engine.resolve(strip_base_url(code_or_url, self.base_url))

    def open_link(self, code_or_url: str) -> LinkModel:
        """Consume one click and return the link to redirect to.

        Accepts a bare code or a full short URL ('clck.ru/k3Xa9Q').
        """
        return self.engine.consume(strip_base_url(code_or_url, self.base_url))

    def my_links(self, token: str) -> list[LinkModel]:
        return self.links.links_for_user(token)

    def short_url(self, code: str) -> str:
        return get_short_url(code, self.base_url)

    def sweep(self) -> list[LinkModel]:
        return self.engine.sweep()

    # -------------------------------
    # Lifecycle
    # -------------------------------

    def start(self) -> None:
        self.engine.start()

    def stop(self) -> None:
        self.engine.stop()

    def flush(self) -> bool:
        """Persist the current state. Returns False (and logs) on failure."""
        with self._flush_lock:
            snapshot = SnapshotModel(users=self.users.snapshot(), links=self.links.snapshot())
            try:
                self.snapshot_dao.save(snapshot)
            except DataStoreError:
                logger.exception('Failed to persist snapshot; keeping in-memory state.')
                return False
        return True

    def _load(self) -> SnapshotModel:
        try:
            snapshot = self.snapshot_dao.load()
        except DataStoreError:
            logger.exception('Failed to load snapshot; starting with empty state.')
            return SnapshotModel()

        # Drop owned codes whose link is gone (left behind by older data files)
        users = {}
        dangling = 0
        for token, user in snapshot.users.items():
            owned_codes = tuple(code for code in user.owned_codes if code in snapshot.links)
            dangling += len(user.owned_codes) - len(owned_codes)
            users[token] = replace(user, owned_codes=owned_codes)
        if dangling:
            logger.info('Detached dangling link codes from users.', extra={'detached': dangling})

        logger.info('Loaded snapshot.', extra={'users': len(users), 'links': len(snapshot.links)})
        return SnapshotModel(users=users, links=snapshot.links)

    @staticmethod
    def _parse_click_limit(click_limit: int | str) -> int:
        if isinstance(click_limit, bool):
            raise InvalidInputError(f'Click limit must be an integer (given value: {click_limit!r}).')
        if isinstance(click_limit, str):
            try:
                click_limit = int(click_limit.strip())
            except ValueError as e:
                raise InvalidInputError(f'Click limit must be an integer (given value: {click_limit!r}).') from e
        if not isinstance(click_limit, int):
            raise InvalidInputError(f'Click limit must be an integer (given type: {type(click_limit)}).')
        return click_limit
