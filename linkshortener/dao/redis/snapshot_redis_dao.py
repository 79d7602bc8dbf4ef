"""Snapshot DAO persisting users and links as two Redis keys

This module provides a Redis-based implementation of SnapshotBaseDAO. The
users and links documents are the same JSON documents the file backend
writes, stored under two namespaced string keys without TTL.

Responsibilities:
    - Read both documents in a single transaction (consistent pair);
    - Write both documents in a single MULTI/EXEC transaction;
    - Raise DataStoreError on connectivity issues or malformed documents.

Classes:
    SnapshotRedisDAO:
        DAO for storing and retrieving SnapshotModel in a Redis datastore.

Example:
    >>> dao = SnapshotRedisDAO(redis_host='localhost', prefix='linkshortener:dev')
    >>> snapshot = dao.load()
    >>> dao.save(snapshot)
    <SnapshotRedisDAO>

NOTE:
    Redis only acts as a durable sink for the snapshot (configure AOF or RDB
    persistence on the server). The in-memory stores stay authoritative.
"""

import logging

from beartype import beartype

from linkshortener.models import SnapshotModel
from linkshortener.dao.base import SnapshotBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.serialization import dump_users, dump_links, load_users, load_links


logger = logging.getLogger(__name__)


class SnapshotRedisDAO(RedisClientMixin, SnapshotBaseDAO):
    """Redis-based snapshot DAO

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        load(**kwargs) -> SnapshotModel:
            Read both documents (missing keys => empty mappings).
            Raises DataStoreError on connectivity issues or malformed documents.

        save(snapshot: SnapshotModel, **kwargs) -> SnapshotRedisDAO:
            Replace both documents atomically.
            Raises DataStoreError on connectivity issues or rejected commands.
    """

    def __repr__(self) -> str:
        return f'<SnapshotRedisDAO prefix={self.keys.prefix!r}>'

    @handle_redis_connection_error
    @beartype
    def load(self, **kwargs) -> SnapshotModel:
        users_key = self.keys.users_snapshot_key()
        links_key = self.keys.links_snapshot_key()

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(users_key)
            pipe.get(links_key)
            raw_users, raw_links = pipe.execute()

        users = load_users(raw_users, source=users_key) if raw_users is not None else {}
        links = load_links(raw_links, source=links_key) if raw_links is not None else {}

        logger.debug('Loaded snapshot from Redis.', extra={'users': len(users), 'links': len(links)})
        return SnapshotModel(users=users, links=links)

    @handle_redis_connection_error
    @beartype
    def save(self, snapshot: SnapshotModel, **kwargs) -> 'SnapshotRedisDAO':
        # NOTE: Both SET commands run in one MULTI/EXEC transaction so a reader
        #       never sees a users document and a links document from
        #       different snapshots.
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(self.keys.users_snapshot_key(), dump_users(snapshot.users))
            pipe.set(self.keys.links_snapshot_key(), dump_links(snapshot.links))
            pipe.execute()
        return self
