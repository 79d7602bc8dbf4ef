import functools
from typing import TypeVar, Any
from collections.abc import Callable

import redis

from linkshortener.dao.exceptions import DataStoreError


__all__ = ['redis_location', 'handle_redis_connection_error']

F = TypeVar('F', bound=Callable[..., Any])

# Failures meaning "Redis is unreachable" rather than "the command was wrong"
CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_location(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of a client's connection pool."""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F](method: F) -> F:
    """Turn Redis failures of a DAO method into DataStoreError

    The decorated method's instance must expose its client as `self.redis`.
    Command failures (READONLY replicas, OOM, WRONGTYPE replies) become
    DataStoreError as well, naming the server reply.

    Example:
        >>> @handle_redis_connection_error
        ... def load(self):
        ...     return self.redis.get('snapshot:users')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f"Redis at {redis_location(self.redis)} rejected the command: {e}") from e

    return wrapper
