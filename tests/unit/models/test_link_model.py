"""Unit tests for LinkModel and UserModel.

Test coverage includes:

1. Expiry boundary
   - A link is still valid at exactly its expiry moment and expired one second later.

2. Quota exhaustion
   - A link with zero clicks remaining is exhausted.

3. Immutability
   - Models are frozen; updates go through dataclasses.replace().
"""

import dataclasses
from datetime import datetime, timedelta, UTC

import pytest

from linkshortener.models import LinkModel, UserModel, SnapshotModel


CREATED_AT = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def link():
    return LinkModel(
        code='k3Xa9Q',
        target_url='https://example.com',
        owner_token='6f1c2d3e-0000-4000-8000-000000000000',
        clicks_remaining=2,
        created_at=CREATED_AT,
        expires_at=CREATED_AT + timedelta(hours=24),
    )


# -------------------------------
# 1. Expiry boundary
# -------------------------------


def test_link_is_not_expired_at_expiry_moment(link):
    """Ensure expiry is strict: now == expires_at is still valid."""
    assert link.is_expired(link.expires_at) is False


def test_link_is_expired_after_expiry_moment(link):
    """Ensure one second past expires_at the link is expired."""
    assert link.is_expired(link.expires_at + timedelta(seconds=1)) is True


# -------------------------------
# 2. Quota exhaustion
# -------------------------------


@pytest.mark.parametrize('clicks, exhausted', [(2, False), (1, False), (0, True)])
def test_link_is_exhausted(link, clicks, exhausted):
    """Ensure a link is exhausted exactly when no clicks remain."""
    assert dataclasses.replace(link, clicks_remaining=clicks).is_exhausted is exhausted


# -------------------------------
# 3. Immutability
# -------------------------------


def test_link_is_frozen(link):
    """Ensure fields can't be reassigned in place."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        link.clicks_remaining = 10


def test_user_defaults_to_no_owned_codes():
    """Ensure new users own no codes and are frozen."""
    user = UserModel(login='alice', password_hash='00' * 32, token='t1')
    assert user.owned_codes == ()
    with pytest.raises(dataclasses.FrozenInstanceError):
        user.login = 'bob'


def test_snapshot_defaults_are_independent():
    """Ensure each empty snapshot gets its own mappings."""
    first, second = SnapshotModel(), SnapshotModel()
    first.users['t1'] = UserModel(login='alice', password_hash='00' * 32, token='t1')
    assert second.users == {}
