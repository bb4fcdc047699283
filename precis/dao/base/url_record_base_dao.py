"""Abstract base class for UrlRecord data access objects (DAOs).

This class establishes a consistent contract for all UrlRecord DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory).

Responsibilities:
    - Provide an interface for saving and finding UrlRecord objects.
    - Guarantee atomic insert-if-absent semantics when overwriting is forbidden.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from precis.models import UrlRecord
        >>> from precis.dao.redis import UrlRecordRedisDAO

        >>> dao = UrlRecordRedisDAO(...)

        >>> record = UrlRecord(
        ...     shortcode="my-link",
        ...     long_url="https://example.com",
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.save(record)
        UrlRecord(shortcode='my-link', long_url='https://example.com', ...)

        >>> dao.find_by_key("my-link").long_url
        'https://example.com'

        >>> dao.find_by_key("missing") is None
        True
"""

from abc import ABC, abstractmethod

from precis.models import UrlRecord


class UrlRecordBaseDAO(ABC):
    """Interface for UrlRecord data access objects (DAOs).

    Methods:
        save(record: UrlRecord, overwrite: bool = False, **kwargs) -> UrlRecord:
            Persist a UrlRecord under its shortcode.
            Raises ShortURLAlreadyExistsError if the shortcode exists and overwrite is False.
            Raises DataStoreError on connection or write failure.

        find_by_key(shortcode: str, **kwargs) -> UrlRecord | None:
            Retrieve a UrlRecord by shortcode. Returns None if not found.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations must extend this class and implement
        all abstract methods. When `overwrite` is False the existence check and
        the write must happen atomically (e.g. a unique constraint or SET NX) so
        that two concurrent saves of the same shortcode cannot both succeed.

    NOTE:
        - No update or delete operations exist. Records are immutable.
    """

    @abstractmethod
    def save(self, record: UrlRecord, overwrite: bool = False, **kwargs) -> UrlRecord:
        """Persist a UrlRecord in the data store.

        Args:
            record (UrlRecord):
                The record to persist.

            overwrite (bool):
                If True, replace an existing record with the same shortcode.
                If False, fail when the shortcode is taken.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecord: the saved record

        Raises:
            ShortURLAlreadyExistsError:
                If overwrite is False and the shortcode already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_key(self, shortcode: str, **kwargs) -> UrlRecord | None:
        """Retrieve a UrlRecord from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the record to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlRecord | None: The record if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
