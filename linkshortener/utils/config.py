"""Utility functions for application configuration management.

Configuration is read from environment variables (names in
`linkshortener.constants.ENV`). The snapshot backend is selected by
`LINKSHORTENER_BACKEND` and its settings are returned by `load_config()`
in this shape:

    {
        "file": {"data_dir": "/var/lib/linkshortener"}
    }

or

    {
        "redis": {"host": "localhost", "port": 6379, "db": 0, ...}
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for the Redis backend, or None if `APP_NAME` is not set.

    active_backend() -> Backend
        Return the configured snapshot backend, `'file'` by default.

    data_dir() -> Path
        Return the directory holding the JSON snapshot files.

    sweep_interval() -> float
        Return the background sweep period in seconds.

    base_url() -> str
        Return the display prefix of short links.

    load_config() -> dict
        Return the active backend's settings keyed by backend name.

Example:
    >>> from linkshortener.utils.config import load_config
    >>> os.environ['LINKSHORTENER_BACKEND'] = 'redis'
    >>> os.environ['REDIS_HOST'] = 'localhost'
    >>> load_config()['redis']['host']
    'localhost'
"""

import os
import logging
from pathlib import Path

from linkshortener.constants import ENV, Backend, Sweep, DEFAULT_BASE_URL
from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return key prefix for the Redis snapshot backend

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def active_backend() -> Backend:
    """Return the configured snapshot backend

    Raises:
        BadConfigurationError:
            If `LINKSHORTENER_BACKEND` names an unknown backend.
    """
    return _parse_backend(os.environ.get(ENV.App.BACKEND, Backend.FILE))


def _parse_backend(value: str) -> Backend:
    value = value.lower()
    try:
        return Backend(value)
    except ValueError as e:
        choices = ', '.join(f"'{backend}'" for backend in Backend)
        raise BadConfigurationError(f'Unknown snapshot backend {value!r} (expected one of: {choices}).') from e


def data_dir() -> Path:
    """Return the directory holding users.json and links.json (cwd by default)"""
    return Path(os.environ.get(ENV.App.DATA_DIR) or os.getcwd())


def sweep_interval() -> float:
    """Return the background sweep period in seconds

    Raises:
        BadConfigurationError:
            If `LINKSHORTENER_SWEEP_INTERVAL` is not a positive number.
    """
    raw = os.environ.get(ENV.App.SWEEP_INTERVAL)
    if not raw:
        return float(Sweep.INTERVAL)
    try:
        interval = float(raw)
    except ValueError as e:
        raise BadConfigurationError(f'Sweep interval must be a number of seconds (given value: {raw!r}).') from e
    if interval <= 0:
        raise BadConfigurationError(f'Sweep interval must be positive (given value: {raw!r}).')
    return interval


def base_url() -> str:
    """Return the display prefix of short links, e.g. 'clck.ru/'"""
    return os.environ.get(ENV.App.BASE_URL) or DEFAULT_BASE_URL


@require_environment(ENV.Redis.HOST)
def _redis_config() -> dict:
    return {
        'host': os.environ[ENV.Redis.HOST],
        'port': int(os.environ.get(ENV.Redis.PORT, 6379)),
        'db': int(os.environ.get(ENV.Redis.DB, 0)),
        'username': os.environ.get(ENV.Redis.USERNAME) or None,
        'password': os.environ.get(ENV.Redis.PASSWORD) or None,
    }


def load_config(backend: str | None = None) -> dict:
    """Load snapshot backend configuration from the environment

    Args:
        backend (str, optional):
            Backend name overriding `LINKSHORTENER_BACKEND`.

    Returns:
        dict: {<backend name>: <backend settings>}

    Raises:
        BadConfigurationError:
            If the backend name is unknown or a numeric setting isn't numeric.
        MissingEnvironmentVariableError:
            If the Redis backend is selected but `REDIS_HOST` is not set.
    """
    backend = active_backend() if backend is None else _parse_backend(backend)
    if backend is Backend.REDIS:
        try:
            settings = _redis_config()
        except ValueError as e:
            raise BadConfigurationError(f'Invalid Redis port or database index: {e}') from e
    else:
        settings = {'data_dir': data_dir()}

    logger.debug('Loaded snapshot backend configuration.', extra={'backend': str(backend)})
    return {str(backend): settings}
