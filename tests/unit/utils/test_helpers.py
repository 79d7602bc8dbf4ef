"""Unit tests for helper functions in helpers.py.

Test coverage includes:

1. utcnow() returns timezone-aware UTC time truncated to seconds

2. hash_password() produces a lowercase hex SHA-256 digest

3. is_valid_url() syntactic URI validation
   - 3.1. Accepts well-formed absolute and relative URI references.
   - 3.2. Rejects empty strings, illegal characters, bad schemes and bad escapes.

4. get_short_url() / strip_base_url() short URL display and parsing

5. require_environment() decorator behavior
   - 5.1. Ensures decorated functions execute when all env vars are present.
   - 5.2. Ensures missing or empty env vars raise MissingEnvironmentVariableError.
"""

from datetime import datetime, UTC

import pytest
from freezegun import freeze_time

from linkshortener.exceptions import MissingEnvironmentVariableError
from linkshortener.utils.helpers import (
    utcnow,
    hash_password,
    is_valid_url,
    get_short_url,
    strip_base_url,
    require_environment,
)


# -------------------------------
# 1. utcnow()
# -------------------------------


@freeze_time('2025-10-15 12:34:56.789')
def test_utcnow_truncates_to_seconds():
    """Ensure utcnow() drops microseconds and carries UTC tzinfo."""
    assert utcnow() == datetime(2025, 10, 15, 12, 34, 56, tzinfo=UTC)
    assert utcnow().microsecond == 0


# -------------------------------
# 2. hash_password()
# -------------------------------


def test_hash_password_known_digest():
    """Ensure the digest matches the SHA-256 test vector for 'abc'."""
    assert hash_password('abc') == 'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'


def test_hash_password_is_deterministic_and_unsalted():
    """Ensure identical passwords hash to identical digests."""
    assert hash_password('pw1') == hash_password('pw1')
    assert hash_password('pw1') != hash_password('pw2')


# -------------------------------
# 3.1. Valid URLs
# -------------------------------


@pytest.mark.parametrize(
    'url',
    [
        'https://example.com',
        'http://example.com/path/to/page?query=1&other=two#section',
        'https://example.com/%E2%9C%93',
        'ftp://files.example.com/pub/file.txt',
        'mailto:alice@example.com',
        'https://[::1]:8080/',
        '/relative/path',
        'example.com/page',
    ],
)
def test_is_valid_url_accepts(url):
    """Ensure syntactically well-formed URI references are accepted."""
    assert is_valid_url(url) is True


# -------------------------------
# 3.2. Invalid URLs
# -------------------------------


@pytest.mark.parametrize(
    'url',
    [
        '',
        'http://exa mple.com',
        'https://example.com/<script>',
        'https://example.com/%zz',
        'https://example.com/a#b#c',
        '1http://example.com',
        'http:',
        'https://[::1/',
        'https://пример.рф',
    ],
)
def test_is_valid_url_rejects(url):
    """Ensure malformed URI references are rejected."""
    assert is_valid_url(url) is False


def test_is_valid_url_rejects_non_string():
    """Ensure non-string input is rejected rather than raising."""
    assert is_valid_url(None) is False


# -------------------------------
# 4. Short URL display
# -------------------------------


@pytest.mark.parametrize(
    'base_url, expected',
    [
        ('clck.ru/', 'clck.ru/k3Xa9Q'),
        ('clck.ru', 'clck.ru/k3Xa9Q'),
        ('https://short.example.com/', 'https://short.example.com/k3Xa9Q'),
    ],
)
def test_get_short_url(base_url, expected):
    """Ensure the short URL is the base URL joined with the code by one slash."""
    assert get_short_url('k3Xa9Q', base_url) == expected


@pytest.mark.parametrize(
    'value',
    ['k3Xa9Q', 'clck.ru/k3Xa9Q', 'https://clck.ru/k3Xa9Q', 'http://clck.ru/k3Xa9Q', '  clck.ru/k3Xa9Q\n'],
)
def test_strip_base_url(value):
    """Ensure bare codes and full short URLs both yield the code."""
    assert strip_base_url(value, 'clck.ru/') == 'k3Xa9Q'


def test_strip_base_url_leaves_foreign_urls_untouched():
    """Ensure values with another prefix are returned unchanged."""
    assert strip_base_url('bit.ly/k3Xa9Q', 'clck.ru/') == 'bit.ly/k3Xa9Q'


# -------------------------------
# 5.1. Environment present
# -------------------------------


def test_require_environment_allows_execution(monkeypatch):
    """Ensure the decorated function runs when all variables are set."""
    monkeypatch.setenv('REDIS_HOST', 'localhost')

    @require_environment('REDIS_HOST')
    def connect():
        return 'connected'

    assert connect() == 'connected'


# -------------------------------
# 5.2. Environment missing
# -------------------------------


def test_require_environment_raises_on_missing(monkeypatch):
    """Ensure missing or empty variables are all named in the error."""
    monkeypatch.delenv('REDIS_HOST', raising=False)
    monkeypatch.setenv('REDIS_PORT', '')

    @require_environment('REDIS_HOST', 'REDIS_PORT')
    def connect():
        return 'connected'

    with pytest.raises(MissingEnvironmentVariableError, match="'REDIS_HOST', 'REDIS_PORT'"):
        connect()
