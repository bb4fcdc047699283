from precis.dao.redis.redis_key_schema import RedisKeySchema
from precis.dao.redis.mixins import RedisClientMixin
from precis.dao.redis.url_record_redis_dao import UrlRecordRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'UrlRecordRedisDAO',
]
