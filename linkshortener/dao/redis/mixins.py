"""Redis client setup shared by Redis-backed snapshot DAOs.

Classes:
    RedisClientMixin: owns the client, the key schema and the startup healthcheck.

Example:
    >>> class SnapshotRedisDAO(RedisClientMixin, SnapshotBaseDAO):
    ...     pass
    ...
    >>> dao = SnapshotRedisDAO(redis_host='localhost', prefix='linkshortener:prod')
    >>> dao._healthcheck()
    True
"""

import logging

import redis

from linkshortener.dao.redis.redis_key_schema import RedisKeySchema
from linkshortener.dao.redis.helpers import CONNECTIVITY_ERRORS, redis_location
from linkshortener.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class RedisClientMixin:
    """Mixin providing `self.redis` and `self.keys` to Redis-backed DAOs.

    Either pass a ready client (`redis_client`, used as-is, e.g. a mock in
    tests) or connection parameters. The connection is checked once at
    construction so a misconfigured backend fails at startup rather than on
    the first flush.

    Args:
        redis_host, redis_port, redis_db:
            Server location. Port and db accept numeric strings.

        redis_username, redis_password:
            ACL credentials, if the server requires them.

        redis_socket_timeout (float, optional):
            Seconds before a blocked command fails. Defaults to 5.

        redis_client (redis.Redis, optional):
            Pre-initialized client. Connection parameters are ignored when given.

        prefix (str, optional):
            Namespace for all keys, e.g. 'linkshortener:prod'.

    Raises:
        DataStoreError:
            If Redis can't be reached.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_socket_timeout: float | None = 5.0,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                decode_responses=True,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    def close(self) -> None:
        self.redis.close()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis. Returns False on failure unless `raise_error` is set."""
        try:
            self.redis.ping()
        except CONNECTIVITY_ERRORS as e:
            logger.warning('Redis healthcheck failed.', extra={'redis': redis_location(self.redis)})
            if raise_error:
                raise DataStoreError(
                    f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        return True
