"""Unit tests for the UserMemoryDAO

Test coverage includes:

1. Registration
   - Ensures registration stores the hashed password and issues a token.
   - Confirms duplicate logins raise UserAlreadyExistsError.
   - Confirms empty login or password raise InvalidInputError.
   - Ensures token collisions are retried.
   - Ensures the change listener fires once per registration.

2. Authentication
   - Ensures matching credentials return the user's token.
   - Confirms wrong passwords and unknown logins raise InvalidCredentialsError.

3. Lookup
   - Ensures get() returns users and raises UserDoesNotExistError otherwise.

4. Owned codes
   - Ensures attach/detach keep creation order and are tolerant of unknown tokens.
   - Ensures attach/detach don't fire the change listener.

5. Concurrency
   - Ensures concurrent registrations of the same login admit exactly one.
"""

import threading
from unittest.mock import MagicMock

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from linkshortener.dao.memory import UserMemoryDAO
from linkshortener.dao.exceptions import UserAlreadyExistsError, InvalidCredentialsError, UserDoesNotExistError
from linkshortener.exceptions import InvalidInputError
from linkshortener.utils.helpers import hash_password


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def on_change():
    return MagicMock()


@pytest.fixture
def dao(on_change):
    return UserMemoryDAO(on_change=on_change)


# -------------------------------
# 1. Registration
# -------------------------------


def test_register(dao, on_change):
    """Ensure registration stores the password hash and a fresh token."""
    user = dao.register('alice', 'pw1')

    assert user.login == 'alice'
    assert user.password_hash == hash_password('pw1')
    assert user.token
    assert user.owned_codes == ()
    assert dao.get(user.token) == user
    assert len(dao) == 1
    on_change.assert_called_once_with()


def test_register_issues_distinct_tokens(dao):
    """Ensure every user gets a distinct session token."""
    alice = dao.register('alice', 'pw1')
    bob = dao.register('bob', 'pw1')
    assert alice.token != bob.token


def test_register_duplicate_login(dao, on_change):
    """Ensure duplicate logins raise UserAlreadyExistsError without side effects."""
    dao.register('alice', 'pw1')
    with pytest.raises(UserAlreadyExistsError, match="User with login 'alice' already exists."):
        dao.register('alice', 'other')

    assert len(dao) == 1
    assert on_change.call_count == 1


@pytest.mark.parametrize('login, password', [('', 'pw1'), ('alice', '')])
def test_register_with_empty_credentials(dao, login, password):
    """Ensure empty logins or passwords raise InvalidInputError."""
    with pytest.raises(InvalidInputError):
        dao.register(login, password)
    assert len(dao) == 0


def test_register_with_invalid_type(dao):
    """Ensure non-string credentials raise a Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.register('alice', 1234)


def test_register_retries_token_collision():
    """Ensure a token already in use is regenerated."""
    tokens = iter(['t1', 't1', 't2'])
    dao = UserMemoryDAO(token_factory=lambda: next(tokens))

    assert dao.register('alice', 'pw1').token == 't1'
    assert dao.register('bob', 'pw2').token == 't2'


# -------------------------------
# 2. Authentication
# -------------------------------


def test_authenticate(dao):
    """Ensure matching credentials return the user's token."""
    user = dao.register('alice', 'pw1')
    assert dao.authenticate('alice', 'pw1') == user.token


@pytest.mark.parametrize('login, password', [('alice', 'wrong'), ('bob', 'pw1'), ('ALICE', 'pw1')])
def test_authenticate_with_invalid_credentials(dao, login, password):
    """Ensure wrong passwords and unknown logins raise InvalidCredentialsError."""
    dao.register('alice', 'pw1')
    with pytest.raises(InvalidCredentialsError):
        dao.authenticate(login, password)


# -------------------------------
# 3. Lookup
# -------------------------------


def test_get_unknown_token(dao):
    """Ensure unknown tokens raise UserDoesNotExistError."""
    with pytest.raises(UserDoesNotExistError):
        dao.get('missing')


# -------------------------------
# 4. Owned codes
# -------------------------------


def test_attach_and_detach_codes(dao, on_change):
    """Ensure owned codes keep creation order and detach removes one code."""
    user = dao.register('alice', 'pw1')
    on_change.reset_mock()

    dao.attach_code(user.token, 'aaaaaa')
    dao.attach_code(user.token, 'bbbbbb')
    dao.attach_code(user.token, 'cccccc')
    dao.detach_code(user.token, 'bbbbbb')

    assert dao.owned_codes(user.token) == ['aaaaaa', 'cccccc']
    assert dao.get(user.token).owned_codes == ('aaaaaa', 'cccccc')
    on_change.assert_not_called()


def test_detach_code_is_idempotent(dao):
    """Ensure detaching an absent code is a no-op."""
    user = dao.register('alice', 'pw1')
    dao.detach_code(user.token, 'aaaaaa')
    dao.detach_code('missing', 'aaaaaa')
    assert dao.owned_codes(user.token) == []


def test_attach_code_to_unknown_token(dao):
    """Ensure attaching to an unknown token is tolerated."""
    dao.attach_code('missing', 'aaaaaa')
    assert dao.owned_codes('missing') == []
    assert len(dao) == 0


def test_snapshot_is_a_copy(dao):
    """Ensure snapshots don't change with later registrations."""
    dao.register('alice', 'pw1')
    snapshot = dao.snapshot()
    dao.register('bob', 'pw2')
    assert len(snapshot) == 1


def test_initial_users(dao):
    """Ensure users passed at construction are served."""
    alice = dao.register('alice', 'pw1')
    restored = UserMemoryDAO(users=dao.snapshot())
    assert restored.authenticate('alice', 'pw1') == alice.token


# -------------------------------
# 5. Concurrency
# -------------------------------


def test_concurrent_registrations_of_same_login(dao):
    """Ensure exactly one of many concurrent registrations succeeds."""
    barrier = threading.Barrier(16)
    results = []

    def register():
        barrier.wait()
        try:
            dao.register('alice', 'pw1')
        except UserAlreadyExistsError:
            results.append('duplicate')
        else:
            results.append('ok')

    threads = [threading.Thread(target=register) for _ in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count('ok') == 1
    assert results.count('duplicate') == 15
    assert len(dao) == 1
