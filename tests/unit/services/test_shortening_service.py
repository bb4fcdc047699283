"""Unit tests for ShorteningService.

Test coverage includes:

1. Hash-derived shortcodes
   - Ensures shortcodes are deterministic 8-character SHA-256 prefixes.
   - Ensures repeated shortening of the same URL overwrites silently.
   - Ensures blank aliases fall back to hash-derived codes.

2. Custom aliases
   - Ensures aliases are used verbatim as shortcodes.
   - Ensures taken aliases return AliasConflict and leave the original intact.
   - Ensures concurrent duplicate inserts (store-level) map to AliasConflict.

3. Validation failures
   - Ensures every invalid field is reported in a single ValidationFailed.
   - Ensures nothing is persisted for invalid requests.

4. Data store failures
   - Ensures DataStoreError becomes InternalError without leaking details.

5. Link expiration
   - Ensures a configured TTL sets `expires_at`.

6. Redis-backed failures
   - Ensures Redis error replies and corrupted records become InternalError.
"""

from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
import redis
from freezegun import freeze_time

from precis.models import UrlRecord
from precis.dao.base import UrlRecordBaseDAO
from precis.dao.memory import UrlRecordMemoryDAO
from precis.dao.redis import UrlRecordRedisDAO
from precis.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError
from precis.services import (
    Ok,
    Err,
    ShorteningService,
    ValidationFailed,
    AliasConflict,
    InternalError,
)
from precis.validation import Rule, UrlValidator


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao():
    return UrlRecordMemoryDAO()


@pytest.fixture
def service(dao):
    return ShorteningService(dao)


@pytest.fixture
def broken_dao():
    """DAO whose data store is unreachable."""
    dao = MagicMock(spec=UrlRecordBaseDAO)
    dao.save.side_effect = DataStoreError("Can't connect to Redis at redis.example:6379/0.")
    dao.find_by_key.side_effect = DataStoreError("Can't connect to Redis at redis.example:6379/0.")
    return dao


# -------------------------------
# 1. Hash-derived shortcodes
# -------------------------------


def test_shorten_without_alias(service, dao):
    result = service.shorten('http://www.google.com')

    assert isinstance(result, Ok)
    record = result.value
    assert record.shortcode == 'JT0UJwME'
    assert record.long_url == 'http://www.google.com'
    assert record.expires_at is None
    assert dao.find_by_key('JT0UJwME') == record


def test_shorten_is_deterministic(service):
    first = service.shorten('https://example.com')
    second = service.shorten('https://example.com')

    assert first.value.shortcode == second.value.shortcode == 'EAaArVRs'


def test_shorten_same_url_twice_overwrites(service, dao):
    service.shorten('https://example.com')
    with freeze_time('2030-01-01'):
        result = service.shorten('https://example.com')

    assert isinstance(result, Ok)
    assert len(dao) == 1
    assert dao.find_by_key('EAaArVRs').created_at == datetime(2030, 1, 1, tzinfo=UTC)


def test_shorten_hash_path_skips_lookup():
    dao = MagicMock(spec=UrlRecordBaseDAO)
    dao.save.side_effect = lambda record, overwrite=False: record

    ShorteningService(dao).shorten('https://example.com')

    dao.find_by_key.assert_not_called()
    dao.save.assert_called_once()
    assert dao.save.call_args.kwargs['overwrite'] is True


@pytest.mark.parametrize('alias', [None, '', '   '])
def test_blank_alias_uses_hash(service, alias):
    result = service.shorten('https://example.com', alias)

    assert result.value.shortcode == 'EAaArVRs'


# -------------------------------
# 2. Custom aliases
# -------------------------------


def test_shorten_with_alias(service, dao):
    result = service.shorten('https://example.com', 'my-link')

    match result:
        case Ok(record):
            assert record.shortcode == 'my-link'
            assert record.long_url == 'https://example.com'
        case _:
            pytest.fail(f'Unexpected result: {result}')

    assert dao.find_by_key('my-link').long_url == 'https://example.com'


def test_alias_conflict_keeps_original(service, dao):
    service.shorten('https://example.com', 'my-link')

    result = service.shorten('https://other.com', 'my-link')

    assert result == Err(AliasConflict('my-link'))
    assert result.error.error_code == 'ALIAS_ALREADY_EXISTS'
    assert "'my-link' is already in use" in result.error.message
    assert dao.find_by_key('my-link').long_url == 'https://example.com'


def test_alias_conflict_on_concurrent_insert():
    """Another request wins the race between the existence check and the insert."""
    dao = MagicMock(spec=UrlRecordBaseDAO)
    dao.find_by_key.return_value = None
    dao.save.side_effect = ShortURLAlreadyExistsError('my-link')

    result = ShorteningService(dao).shorten('https://example.com', 'my-link')

    assert result == Err(AliasConflict('my-link'))
    assert dao.save.call_args.kwargs['overwrite'] is False


def test_alias_and_hash_codes_coexist(service, dao):
    service.shorten('https://example.com', 'my-link')
    service.shorten('https://example.com')

    assert len(dao) == 2


# -------------------------------
# 3. Validation failures
# -------------------------------


@pytest.mark.parametrize(
    'long_url, rule',
    [
        ('', Rule.EMPTY),
        ('javascript:alert(1)', Rule.DISALLOWED_SCHEME),
        ('ftp://example.com', Rule.DISALLOWED_SCHEME),
        ('http://example.com/<script>', Rule.SUSPICIOUS_PATTERN),
        ('https://example.com/' + 'a' * 2048, Rule.TOO_LONG),
    ],
)
def test_invalid_long_url(service, dao, long_url, rule):
    result = service.shorten(long_url)

    match result:
        case Err(ValidationFailed(violations=violations)):
            assert [violation.rule for violation in violations] == [rule]
            assert violations[0].field == 'long_url'
        case _:
            pytest.fail(f'Unexpected result: {result}')

    assert result.error.error_code == 'VALIDATION_ERROR'
    assert len(dao) == 0


@pytest.mark.parametrize('alias', ['ab', 'way-too-long', 'bad alias', 'bad!'])
def test_invalid_alias(service, dao, alias):
    result = service.shorten('https://example.com', alias)

    assert isinstance(result, Err)
    assert isinstance(result.error, ValidationFailed)
    assert result.error.field == 'custom_alias'
    assert len(dao) == 0


def test_all_invalid_fields_reported(service):
    result = service.shorten('ftp://example.com', 'x')

    assert result.error.field == 'long_url, custom_alias'
    assert result.error.message == (
        'Validation failed: '
        'long_url - Only HTTP and HTTPS URLs are allowed; '
        'custom_alias - Custom alias must be between 3 and 8 characters'
    )


def test_custom_validator_blocks_hosts(dao):
    service = ShorteningService(dao, validator=UrlValidator(blocked_hosts={'localhost'}))

    result = service.shorten('http://localhost:8080/admin')

    assert result.error.violations[0].rule == Rule.BLOCKED_HOST
    assert len(dao) == 0


# -------------------------------
# 4. Data store failures
# -------------------------------


@pytest.mark.parametrize('alias', [None, 'my-link'])
def test_data_store_error_becomes_internal_error(broken_dao, alias):
    result = ShorteningService(broken_dao).shorten('https://example.com', alias)

    match result:
        case Err(InternalError(cause=cause)):
            assert isinstance(cause, DataStoreError)
        case _:
            pytest.fail(f'Unexpected result: {result}')

    assert result.error.message == 'Internal Server Error'
    assert result.error.error_code == 'INTERNAL_SERVER_ERROR'


# -------------------------------
# 5. Link expiration
# -------------------------------


@freeze_time('2026-01-01 12:00:00')
def test_ttl_sets_expires_at(dao):
    service = ShorteningService(dao, ttl=timedelta(days=30))

    record = service.shorten('https://example.com', 'my-link').value

    assert record.created_at == datetime(2026, 1, 1, 12, tzinfo=UTC)
    assert record.expires_at == datetime(2026, 1, 31, 12, tzinfo=UTC)
    assert not record.is_expired


def test_without_ttl_records_never_expire(service):
    record = service.shorten('https://example.com').value

    assert isinstance(record, UrlRecord)
    assert record.expires_at is None
    assert not record.is_expired


# -------------------------------
# 6. Redis-backed failures
# -------------------------------


@pytest.fixture
def redis_client():
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0})
    client.ping.return_value = True
    client.get.return_value = None
    return client


@pytest.mark.parametrize('alias', [None, 'my-link'])
def test_redis_error_reply_becomes_internal_error(redis_client, alias):
    """Error replies from SET (e.g. OOM) are reported like any other store failure."""
    redis_client.set.side_effect = redis.exceptions.ResponseError("OOM command not allowed when used memory > 'maxmemory'.")

    result = ShorteningService(UrlRecordRedisDAO(redis_client=redis_client)).shorten('https://example.com', alias)

    assert isinstance(result, Err)
    assert isinstance(result.error, InternalError)
    assert isinstance(result.error.cause, DataStoreError)


def test_corrupted_alias_record_becomes_internal_error(redis_client):
    redis_client.get.return_value = 'not json'

    result = ShorteningService(UrlRecordRedisDAO(redis_client=redis_client)).shorten('https://example.com', 'my-link')

    assert isinstance(result.error, InternalError)
    redis_client.set.assert_not_called()
