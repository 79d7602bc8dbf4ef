"""In-memory, thread-safe user account DAO

Users are kept in a dict keyed by session token and guarded by a single
re-entrant lock, so every operation is linearizable.

Classes:
    UserMemoryDAO:
        Account store implementing UserBaseDAO.

Example:
    >>> dao = UserMemoryDAO()
    >>> user = dao.register('alice', 'pw1')
    >>> dao.authenticate('alice', 'pw1') == user.token
    True
"""

import uuid
import logging
import threading
from dataclasses import replace
from collections.abc import Callable

from beartype import beartype

from linkshortener.models import UserModel
from linkshortener.types import ChangeListener
from linkshortener.dao.base import UserBaseDAO
from linkshortener.dao.exceptions import UserAlreadyExistsError, InvalidCredentialsError, UserDoesNotExistError
from linkshortener.exceptions import InvalidInputError
from linkshortener.utils.helpers import hash_password


logger = logging.getLogger(__name__)


def _new_token() -> str:
    return str(uuid.uuid4())


class UserMemoryDAO(UserBaseDAO):
    """In-memory account store

    Args:
        users (dict[str, UserModel], optional):
            Initial users keyed by session token (e.g. from a loaded snapshot).

        on_change (Callable[[], None], optional):
            Called after each registration, outside the lock. Used to flush
            the persistence layer.

        token_factory (Callable[[], str], optional):
            Session token generator. Defaults to UUID4 strings.

    NOTE:
        attach_code() and detach_code() do not call `on_change`: they are
        invoked by the link store, which reports the change itself once
        the whole link operation is done.
    """

    def __init__(
        self,
        users: dict[str, UserModel] | None = None,
        on_change: ChangeListener | None = None,
        token_factory: Callable[[], str] = _new_token,
    ):
        self._users: dict[str, UserModel] = dict(users or {})
        self._lock = threading.RLock()
        self._token_factory = token_factory
        self.on_change = on_change

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    @beartype
    def register(self, login: str, password: str, **kwargs) -> UserModel:
        if not login or not password:
            raise InvalidInputError('Login and password must be non-empty.')

        with self._lock:
            # Linear scan: logins are not indexed
            if any(user.login == login for user in self._users.values()):
                raise UserAlreadyExistsError(f"User with login '{login}' already exists.")

            token = self._token_factory()
            while token in self._users:
                token = self._token_factory()

            user = UserModel(login=login, password_hash=hash_password(password), token=token)
            self._users[token] = user

        logger.info('Registered user.', extra={'login': login})
        self._changed()
        return user

    @beartype
    def authenticate(self, login: str, password: str, **kwargs) -> str:
        password_hash = hash_password(password)
        with self._lock:
            for user in self._users.values():
                if user.login == login and user.password_hash == password_hash:
                    return user.token

        logger.info('Rejected login attempt.', extra={'login': login})
        raise InvalidCredentialsError(f"Invalid credentials for login '{login}'.")

    @beartype
    def get(self, token: str, **kwargs) -> UserModel:
        with self._lock:
            user = self._users.get(token)
        if user is None:
            raise UserDoesNotExistError(f"User with token '{token}' does not exist.")
        return user

    @beartype
    def owned_codes(self, token: str, **kwargs) -> list[str]:
        with self._lock:
            user = self._users.get(token)
            return list(user.owned_codes) if user is not None else []

    @beartype
    def attach_code(self, token: str, code: str, **kwargs) -> None:
        with self._lock:
            user = self._users.get(token)
            if user is None:
                logger.debug('Not attaching code to unknown user.', extra={'shortcode': code})
                return
            self._users[token] = replace(user, owned_codes=(*user.owned_codes, code))

    @beartype
    def detach_code(self, token: str, code: str, **kwargs) -> None:
        with self._lock:
            user = self._users.get(token)
            if user is None or code not in user.owned_codes:
                return
            owned_codes = tuple(owned for owned in user.owned_codes if owned != code)
            self._users[token] = replace(user, owned_codes=owned_codes)

    def snapshot(self) -> dict[str, UserModel]:
        with self._lock:
            return dict(self._users)

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
