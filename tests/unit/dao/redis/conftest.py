from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_pipeline() -> redis.client.Pipeline:
    """Mock the transactional pipeline handed out by `redis_client.pipeline()`."""
    pipe = MagicMock(spec=redis.client.Pipeline)
    pipe.__enter__.return_value = pipe
    pipe.__exit__.return_value = None
    return pipe


@pytest.fixture
def redis_client(redis_pipeline) -> redis.Redis:
    """Mock a Redis client located at redis.test:6379/0."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.pipeline.return_value = redis_pipeline
    return client
