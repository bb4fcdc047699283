import logging

from precis.constants import LogEvent
from precis.models import UrlRecord
from precis.dao.base import UrlRecordBaseDAO
from precis.dao.exceptions import DataStoreError
from precis.services.result import Ok, Err, Result, NotFound, InternalError


logger = logging.getLogger(__name__)


class LookupService:
    """Resolve shortcodes back to their UrlRecords.

    Expired records are returned unchanged. Callers check `record.is_expired`.
    """

    def __init__(self, dao: UrlRecordBaseDAO):
        self.dao = dao

    def resolve(self, shortcode: str) -> Result[UrlRecord]:
        try:
            record = self.dao.find_by_key(shortcode)
        except DataStoreError as e:
            logger.exception('Failed to look up short URL.', extra={'shortcode': shortcode, 'event': LogEvent.DATA_STORE_FAILURE})
            return Err(InternalError(e))

        if record is None:
            logger.info('Short URL not found.', extra={'shortcode': shortcode, 'event': LogEvent.SHORT_URL_NOT_FOUND})
            return Err(NotFound(shortcode))

        logger.debug('Resolved short URL.', extra={'shortcode': shortcode})
        return Ok(record)
