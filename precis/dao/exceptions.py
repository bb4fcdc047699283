"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLAlreadyExistsError:
        Raised when inserting a UrlRecord whose shortcode is already taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from precis.dao.exceptions import ShortURLAlreadyExistsError
    >>> raise ShortURLAlreadyExistsError('my-link')
    Traceback (most recent call last):
        ...
    precis.dao.exceptions.ShortURLAlreadyExistsError: Short URL with code 'my-link' already exists.
"""

from precis.exceptions import PrecisError


class DAOError(PrecisError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLAlreadyExistsError(DAOError):
    """Raised when inserting a UrlRecord that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'

    def __init__(self, shortcode: str):
        super().__init__(f"Short URL with code '{shortcode}' already exists.")
        self.shortcode = shortcode


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, and out-of-memory failures.
    """

    error_code = 'dao:data_store_error'
