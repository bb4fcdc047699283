import threading

from beartype import beartype

from precis.models import UrlRecord
from precis.dao.base import UrlRecordBaseDAO
from precis.dao.exceptions import ShortURLAlreadyExistsError


class UrlRecordMemoryDAO(UrlRecordBaseDAO):
    """Dict-backed UrlRecord store for local runs and tests.

    A lock makes the existence check and the insert in save() atomic.
    """

    def __init__(self, records: dict[str, UrlRecord] | None = None):
        self._records = dict(records or {})
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @beartype
    def save(self, record: UrlRecord, overwrite: bool = False, **kwargs) -> UrlRecord:
        with self._lock:
            if not overwrite and record.shortcode in self._records:
                raise ShortURLAlreadyExistsError(record.shortcode)
            self._records[record.shortcode] = record
        return record

    @beartype
    def find_by_key(self, shortcode: str, **kwargs) -> UrlRecord | None:
        with self._lock:
            return self._records.get(shortcode)
