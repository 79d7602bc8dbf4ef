"""Helper utilities shared across the link shortener.

Functions:
    utcnow() -> datetime
        Current UTC time truncated to whole seconds
    hash_password(password: str) -> str
        Unsalted SHA-256 digest of a password as lowercase hex
    is_valid_url(url: str) -> bool
        Check that a string is a syntactically well-formed URI reference
    get_short_url(shortcode: str, base_url: str) -> str
        Get string representation of a short URL for a given shortcode
    strip_base_url(value: str, base_url: str) -> str
        Extract the shortcode from either a bare code or a full short URL
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from linkshortener.utils.helpers import get_short_url, strip_base_url
    >>> get_short_url('k3Xa9Q', 'clck.ru/')
    'clck.ru/k3Xa9Q'
    >>> strip_base_url('clck.ru/k3Xa9Q', 'clck.ru/')
    'k3Xa9Q'
"""

import os
import re
import hashlib
import functools
import urllib.parse
from datetime import datetime, UTC
from collections.abc import Callable

from linkshortener.exceptions import MissingEnvironmentVariableError


# RFC 3986 characters (unreserved + reserved) and percent-encoded octets
_URI_CHARACTERS = re.compile(r"(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})+")
_URI_SCHEME = re.compile(r'[A-Za-z][A-Za-z0-9+.\-]*')


def utcnow() -> datetime:
    """Return the current UTC time truncated to whole seconds.

    Persisted timestamps keep second precision, so every timestamp the
    application creates is truncated up front.
    """
    return datetime.now(UTC).replace(microsecond=0)


def hash_password(password: str) -> str:
    """Digest a password with a single unsalted SHA-256 round.

    NOTE: this is a fast, unsalted digest. Identical passwords produce
          identical digests.

    Example:
        >>> hash_password('abc')
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'
    """
    return hashlib.sha256(password.encode('utf-8')).hexdigest()


def is_valid_url(url: str) -> bool:
    """Check that a string is a syntactically well-formed URI reference.

    No reachability check is made. The string must:
        - be non-empty and consist of RFC 3986 characters or %HH escapes only;
        - have a valid, non-empty-bodied scheme when a scheme is present;
        - contain at most one fragment delimiter;
        - be splittable by urllib (e.g. balanced IPv6 brackets).

    Example:
        >>> is_valid_url('https://example.com/a?b=c#d')
        True
        >>> is_valid_url('http://exa mple.com')
        False
    """
    if not isinstance(url, str) or not _URI_CHARACTERS.fullmatch(url):
        return False
    if url.count('#') > 1:
        return False

    # A ':' before any '/', '?' or '#' delimits a scheme
    head, colon, rest = url.partition(':')
    if colon and not any(delimiter in head for delimiter in '/?#'):
        if not _URI_SCHEME.fullmatch(head) or not rest:
            return False

    try:
        urllib.parse.urlsplit(url)
    except ValueError:
        return False
    return True


def get_short_url(shortcode: str, base_url: str) -> str:
    """Get string representation of short URL

    Args:
        shortcode (str): shortcode
        base_url (str): display prefix, e.g. 'clck.ru/'

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def strip_base_url(value: str, base_url: str) -> str:
    """Extract the shortcode from a bare code or a full short URL."""
    value = value.strip()
    prefix = base_url.rstrip('/') + '/'
    for candidate in (prefix, f'https://{prefix}', f'http://{prefix}'):
        if value.startswith(candidate):
            return value[len(candidate) :]
    return value


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('REDIS_HOST')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'REDIS_HOST'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
