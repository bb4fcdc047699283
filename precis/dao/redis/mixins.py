"""Shared Redis client setup for Redis-backed DAOs.

The keyword arguments of RedisClientMixin mirror the `redis` section of a
lambda's AppConfig, prefixed with `redis_`:

    {"host": "...", "port": 6379, "db": 0, "socket_timeout": 2}
        ->  RedisClientMixin(redis_host="...", redis_port=6379, redis_db=0, redis_socket_timeout=2)

Example:
    >>> class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    ...     pass
    ...
    >>> dao = UrlRecordRedisDAO(redis_host="redis.internal", prefix="precis:prod")
    >>> dao.keys.link_key("my-link")
    'precis:prod:links:my-link'
"""

import redis

from precis.dao.redis.redis_key_schema import RedisKeySchema
from precis.dao.redis.helpers import redis_address
from precis.dao.exceptions import DataStoreError


# Seconds. Lambdas should fail fast rather than hang on an unreachable Redis.
DEFAULT_SOCKET_TIMEOUT = 2.0


class RedisClientMixin:
    """Create (or adopt) a Redis client and make sure it answers PING.

    Args:
        redis_host, redis_port, redis_db, redis_username, redis_password:
            Connection parameters used when no `redis_client` is given.
        redis_decode_responses (bool):
            Return str instead of bytes. Defaults to True.
        redis_socket_timeout (float | None):
            Connect and read timeout in seconds.
        redis_client (redis.Redis | None):
            Pre-initialized client. Connection parameters are ignored if given.
        prefix (str | None):
            Namespace for all keys, e.g. 'precis:prod'.

    Attributes:
        redis (redis.Redis): client used by subclasses
        keys (RedisKeySchema): namespaced key builder

    Raises:
        DataStoreError: if Redis doesn't answer the initial PING.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_socket_timeout: float | None = DEFAULT_SOCKET_TIMEOUT,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis. Return False on failure, or raise DataStoreError if `raise_error`."""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {redis_address(self.redis)}. Check the provided configuration parameters."
            ) from e
        return True
