from linkshortener.dao.redis.redis_key_schema import RedisKeySchema
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.snapshot_redis_dao import SnapshotRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'SnapshotRedisDAO',
]
