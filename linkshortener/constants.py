from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Short link lifetime, counted from creation (24 hours in seconds)
    LINK = 86_400  # 60 * 60 * 24


class Sweep:
    """Background sweep settings."""

    INTERVAL = 300  # Default sweep period (5 minutes in seconds)
    MISFIRE_GRACE_TIME = 60  # Seconds a late sweep may still start


class Shortcode:
    """Shortcode generation settings."""

    LENGTH = 6
    OWNER_PART_LENGTH = 4  # Leading characters of the owner's token appended to the random part
    RANDOM_BITS = 63
    MAX_ATTEMPTS = 10  # Regenerations allowed on collision before giving up


class Backend(StrEnum):
    """Snapshot storage backends."""

    FILE = 'file'
    REDIS = 'redis'


class Snapshot:
    """Snapshot document names."""

    USERS_FILENAME = 'users.json'
    LINKS_FILENAME = 'links.json'
    TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%S'


# Display prefix for short links
DEFAULT_BASE_URL = 'clck.ru/'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        LOG_FORMAT = 'LOG_FORMAT'
        BACKEND = 'LINKSHORTENER_BACKEND'
        DATA_DIR = 'LINKSHORTENER_DATA_DIR'
        SWEEP_INTERVAL = 'LINKSHORTENER_SWEEP_INTERVAL'
        BASE_URL = 'LINKSHORTENER_BASE_URL'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105
