"""Unit tests for the snapshot document codec.

Test coverage includes:

1. Document layout
   - Ensures users and links are written with their on-disk field names.
   - Ensures timestamps are UTC, second precision, without offset.

2. Decoding
   - Ensures documents written by older versions (no shortLinks) still load.
   - Confirms malformed JSON, missing fields and bad timestamps raise DataStoreError.
"""

import json
from datetime import datetime, timedelta, timezone, UTC

import pytest

from linkshortener.models import LinkModel, UserModel
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.serialization import (
    format_timestamp,
    parse_timestamp,
    dump_users,
    dump_links,
    load_users,
    load_links,
)


CREATED_AT = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def user():
    return UserModel(login='alice', password_hash='ab' * 32, token='t1', owned_codes=('k3Xa9Q',))


@pytest.fixture
def link():
    return LinkModel(
        code='k3Xa9Q',
        target_url='https://example.com',
        owner_token='t1',
        clicks_remaining=2,
        created_at=CREATED_AT,
        expires_at=CREATED_AT + timedelta(hours=24),
    )


# -------------------------------
# 1. Document layout
# -------------------------------


def test_dump_users_layout(user):
    """Ensure users are keyed by token and use the on-disk field names."""
    assert json.loads(dump_users({'t1': user})) == {
        't1': {
            'login': 'alice',
            'passwordHash': 'ab' * 32,
            'token': 't1',
            'shortLinks': ['k3Xa9Q'],
        }
    }


def test_dump_links_layout(link):
    """Ensure links are keyed by code and use the on-disk field names."""
    assert json.loads(dump_links({'k3Xa9Q': link})) == {
        'k3Xa9Q': {
            'originalUrl': 'https://example.com',
            'shortCode': 'k3Xa9Q',
            'creatorUUID': 't1',
            'clicksRemaining': 2,
            'createdAt': '2025-10-15T12:00:00',
            'expiresAt': '2025-10-16T12:00:00',
        }
    }


def test_format_timestamp_converts_to_utc():
    """Ensure non-UTC timestamps are written in UTC."""
    moment = datetime(2025, 10, 15, 15, 0, 0, tzinfo=timezone(timedelta(hours=3)))
    assert format_timestamp(moment) == '2025-10-15T12:00:00'


def test_parse_timestamp_is_utc():
    """Ensure parsed timestamps are timezone-aware UTC."""
    assert parse_timestamp('2025-10-15T12:00:00') == CREATED_AT


def test_documents_load_back(user, link):
    """Ensure written documents decode to equal models."""
    assert load_users(dump_users({'t1': user})) == {'t1': user}
    assert load_links(dump_links({'k3Xa9Q': link})) == {'k3Xa9Q': link}


# -------------------------------
# 2. Decoding
# -------------------------------


def test_load_users_without_short_links():
    """Ensure a user document without shortLinks owns no codes."""
    raw = json.dumps({'t1': {'login': 'alice', 'passwordHash': 'ab' * 32, 'token': 't1'}})
    assert load_users(raw)['t1'].owned_codes == ()


@pytest.mark.parametrize(
    'raw',
    [
        '{not json',
        '[]',
        json.dumps({'t1': {'login': 'alice'}}),
        json.dumps({'t1': 'alice'}),
    ],
)
def test_load_users_malformed(raw):
    """Ensure malformed user documents raise DataStoreError."""
    with pytest.raises(DataStoreError, match='Malformed users.json document.'):
        load_users(raw, source='users.json')


@pytest.mark.parametrize(
    'field, value',
    [
        ('createdAt', '15/10/2025'),
        ('clicksRemaining', 'many'),
        ('expiresAt', None),
    ],
)
def test_load_links_malformed(link, field, value):
    """Ensure bad field values raise DataStoreError."""
    document = json.loads(dump_links({'k3Xa9Q': link}))
    document['k3Xa9Q'][field] = value
    with pytest.raises(DataStoreError):
        load_links(json.dumps(document))


def test_load_links_missing_field(link):
    """Ensure missing fields raise DataStoreError."""
    document = json.loads(dump_links({'k3Xa9Q': link}))
    del document['k3Xa9Q']['originalUrl']
    with pytest.raises(DataStoreError):
        load_links(json.dumps(document))
