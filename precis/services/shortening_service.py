"""URL shortening business rules.

ShorteningService.shorten() follows this procedure:
    - Step 1: Validate the long URL (and the custom alias, when given)
    - Step 2a: No alias: derive the shortcode from the URL's SHA-256 hash and save
               the record, overwriting any record with the same code
    - Step 2b: Alias: refuse aliases that are already taken, then save the record
               with an atomic insert-if-absent

NOTE: the hash-derived path performs no collision check. Two different URLs
      sharing an 8-character hash prefix overwrite each other. This is a known,
      accepted limitation.
"""

import logging
from datetime import datetime, timedelta, UTC

from precis.constants import LogEvent
from precis.models import UrlRecord
from precis.dao.base import UrlRecordBaseDAO
from precis.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError
from precis.services.result import Ok, Err, Result, FieldViolation, ValidationFailed, AliasConflict, InternalError
from precis.utils.shortener import generate_shortcode
from precis.validation import Rejected, UrlValidator, validate_alias


logger = logging.getLogger(__name__)


class ShorteningService:
    """Create UrlRecords from long URLs.

    Args:
        dao (UrlRecordBaseDAO):
            Store used to persist records.
        ttl (timedelta | None):
            If set, new records expire `ttl` after creation.
        validator (UrlValidator | None):
            Long URL validator. Defaults to the stock rule set.
    """

    def __init__(self, dao: UrlRecordBaseDAO, ttl: timedelta | None = None, validator: UrlValidator | None = None):
        self.dao = dao
        self.ttl = ttl
        self.validator = validator or UrlValidator()

    def shorten(self, long_url: str, custom_alias: str | None = None) -> Result[UrlRecord]:
        """Shorten a long URL with a custom alias or a hash-derived shortcode

        Args:
            long_url (str):
                The URL to shorten.
            custom_alias (str | None):
                User-chosen shortcode. None or blank means auto-generate.

        Returns:
            Ok(UrlRecord) on success, otherwise Err carrying ValidationFailed,
            AliasConflict or InternalError.

        Example:
            >>> service = ShorteningService(UrlRecordMemoryDAO())
            >>> service.shorten('https://example.com', 'my-link').value.shortcode
            'my-link'
            >>> service.shorten('https://example.org', 'my-link')
            Err(error=AliasConflict(alias='my-link'))
        """
        has_alias = custom_alias is not None and bool(custom_alias.strip())

        violations = self._validate(long_url, custom_alias if has_alias else None)
        if violations:
            failure = ValidationFailed(violations)
            logger.info('Rejected shorten request: %s', failure.message, extra={'event': LogEvent.VALIDATION_FAILED})
            return Err(failure)

        try:
            if has_alias:
                return self._shorten_with_alias(long_url, custom_alias)
            return self._shorten_with_hash(long_url)
        except DataStoreError as e:
            logger.exception('Failed to persist short URL.', extra={'event': LogEvent.DATA_STORE_FAILURE})
            return Err(InternalError(e))

    def _validate(self, long_url: str, custom_alias: str | None) -> tuple[FieldViolation, ...]:
        violations = []
        url_result = self.validator.validate(long_url)
        if isinstance(url_result, Rejected):
            violations.append(FieldViolation('long_url', url_result.rule, url_result.message))
        if custom_alias is not None:
            alias_result = validate_alias(custom_alias)
            if isinstance(alias_result, Rejected):
                violations.append(FieldViolation('custom_alias', alias_result.rule, alias_result.message))
        return tuple(violations)

    def _shorten_with_hash(self, long_url: str) -> Result[UrlRecord]:
        shortcode = generate_shortcode(long_url)
        logger.debug('Generated hash-derived shortcode %s.', shortcode)

        saved = self.dao.save(self._new_record(shortcode, long_url), overwrite=True)
        logger.info('Saved hash-derived short URL.', extra={'shortcode': shortcode, 'event': LogEvent.SHORTEN_SUCCESS})
        return Ok(saved)

    def _shorten_with_alias(self, long_url: str, alias: str) -> Result[UrlRecord]:
        # Early exit only. The atomic save below is what guarantees uniqueness.
        if self.dao.find_by_key(alias) is not None:
            logger.info('Custom alias already exists.', extra={'shortcode': alias, 'event': LogEvent.ALIAS_CONFLICT})
            return Err(AliasConflict(alias))

        try:
            saved = self.dao.save(self._new_record(alias, long_url), overwrite=False)
        except ShortURLAlreadyExistsError:
            logger.info('Custom alias taken by a concurrent request.', extra={'shortcode': alias, 'event': LogEvent.ALIAS_CONFLICT})
            return Err(AliasConflict(alias))

        logger.info('Saved custom alias short URL.', extra={'shortcode': alias, 'event': LogEvent.SHORTEN_SUCCESS})
        return Ok(saved)

    def _new_record(self, shortcode: str, long_url: str) -> UrlRecord:
        created_at = datetime.now(UTC)
        expires_at = created_at + self.ttl if self.ttl is not None else None
        return UrlRecord(shortcode=shortcode, long_url=long_url, created_at=created_at, expires_at=expires_at)
