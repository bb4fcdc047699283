from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    return 'precis:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client which answers PING."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0},
    )
    client.ping.return_value = True
    client.set.return_value = True
    client.get.return_value = None
    return client
