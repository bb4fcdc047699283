import functools
from typing import Any
from collections.abc import Callable

import redis

from precis.dao.exceptions import DataStoreError


__all__ = []


def redis_address(client: redis.Redis) -> str:
    """Return '<host>:<port>/<db>' of a Redis client for error messages."""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_errors[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to translate Redis failures

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise any
            redis.exceptions.RedisError (connection loss, timeouts, OOM,
            WRONGTYPE replies, etc.).

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError instead.

    Example:
        >>> @handle_redis_errors
        ... def find_by_key(self, shortcode):
        ...     return self.redis.get(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {redis_address(self.redis)} failed: {e}') from e

    return wrapper
