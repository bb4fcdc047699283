"""Data Access Object (DAO) implementation for storing UrlRecords in Redis

Each record is stored as a JSON document under a namespaced key:

    <prefix>:links:<shortcode>  ->  {"shortcode": ..., "long_url": ...,
                                     "created_at": ..., "expires_at": ...}

Keys carry no Redis TTL. `expires_at` is informational and lookups return
expired records unchanged.

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecord in a Redis datastore.

Example:
    >>> from precis.models import UrlRecord
    >>> from precis.dao.redis import UrlRecordRedisDAO

    >>> dao = UrlRecordRedisDAO(prefix="precis:dev")
    >>> record = UrlRecord(shortcode="my-link", long_url="https://example.com", created_at=datetime.now(UTC))
    >>> dao.save(record)
    UrlRecord(shortcode='my-link', ...)
    >>> dao.find_by_key("my-link").long_url
    'https://example.com'
"""

import json

from beartype import beartype

from precis.models import UrlRecord
from precis.dao.base import UrlRecordBaseDAO
from precis.dao.redis.mixins import RedisClientMixin
from precis.dao.redis.helpers import handle_redis_errors
from precis.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for short code to long URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
    """

    @handle_redis_errors
    @beartype
    def save(self, record: UrlRecord, overwrite: bool = False, **kwargs) -> UrlRecord:
        """Store a UrlRecord in Redis

        When overwrite is False the write is a single `SET ... NX`, so the
        existence check and the insert are atomic: of two concurrent saves of
        the same shortcode exactly one succeeds.

        Args:
            record (UrlRecord):
                Record to persist.
            overwrite (bool):
                If True, replace an existing record (plain SET).

        Returns:
            UrlRecord: the saved record

        Raises:
            ShortURLAlreadyExistsError:
                If overwrite is False and the shortcode already exists.
            DataStoreError:
                If Redis fails (connection loss, timeout, OOM, ...).
        """
        link_key = self.keys.link_key(record.shortcode)
        stored = self.redis.set(link_key, json.dumps(record.to_dict()), nx=not overwrite)
        if not stored:
            raise ShortURLAlreadyExistsError(record.shortcode)
        return record

    @handle_redis_errors
    @beartype
    def find_by_key(self, shortcode: str, **kwargs) -> UrlRecord | None:
        """Retrieve a stored UrlRecord by shortcode

        Returns:
            UrlRecord | None: the record, or None if the shortcode is unknown

        Raises:
            DataStoreError:
                If Redis fails or the stored payload can't be decoded.
        """
        link_key = self.keys.link_key(shortcode)
        payload = self.redis.get(link_key)
        if payload is None:
            return None

        try:
            return UrlRecord.from_dict(json.loads(payload))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            # JSONDecodeError and bad ISO timestamps are ValueErrors, non-object JSON fails on .get()
            raise DataStoreError(f"Corrupted UrlRecord stored under '{link_key}'.") from e
