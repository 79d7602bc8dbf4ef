from linkshortener.constants import Backend
from linkshortener.dao.base import SnapshotBaseDAO
from linkshortener.dao.file import SnapshotFileDAO
from linkshortener.dao.redis import SnapshotRedisDAO
from linkshortener.dao.memory import UserMemoryDAO, LinkMemoryDAO
from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.config import app_prefix


__all__ = [
    'UserMemoryDAO',
    'LinkMemoryDAO',
    'SnapshotFileDAO',
    'SnapshotRedisDAO',
    'create_snapshot_dao',
]


def create_snapshot_dao(app_config: dict) -> SnapshotBaseDAO:
    """Build the snapshot DAO for the configured backend

    Args:
        app_config (dict):
            Output of `linkshortener.utils.config.load_config()`, i.e.
            {<backend name>: <backend settings>}.

    Returns:
        SnapshotBaseDAO: a file- or Redis-backed snapshot DAO.

    Raises:
        BadConfigurationError:
            If the configuration names no known backend.
        DataStoreError:
            If the Redis backend is selected and Redis is unreachable.
    """
    if Backend.REDIS in app_config:
        redis_config = {f'redis_{k}': v for k, v in app_config[Backend.REDIS].items()}
        return SnapshotRedisDAO(**redis_config, prefix=app_prefix())
    if Backend.FILE in app_config:
        return SnapshotFileDAO(**app_config[Backend.FILE])
    raise BadConfigurationError(f'No known snapshot backend in configuration (keys: {sorted(app_config)}).')
