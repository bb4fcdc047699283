"""Tagged results returned by the services.

Services never raise for expected failures. They return either `Ok(value)` or
`Err(error)` where `error` is one of the frozen error variants below, so that
callers can pattern-match on the outcome:

    >>> match service.shorten('https://example.com', 'my-link'):
    ...     case Ok(record):
    ...         print(record.shortcode)
    ...     case Err(AliasConflict(alias=alias)):
    ...         print(f'{alias} is taken')
    ...     case Err(error):
    ...         print(error.message)

Error variants:
    ValidationFailed(violations)  client error, bad input          (400)
    AliasConflict(alias)          client error, alias taken        (409)
    NotFound(code)                client error, unknown shortcode  (404)
    InternalError(cause)          server error, e.g. store outage  (500)
"""

from dataclasses import dataclass
from typing import ClassVar

from precis.constants import ErrorCode
from precis.validation import Rule


@dataclass(frozen=True)
class FieldViolation:
    field: str
    rule: Rule
    message: str


@dataclass(frozen=True)
class ValidationFailed:
    violations: tuple[FieldViolation, ...]

    error_code: ClassVar[str] = ErrorCode.VALIDATION_ERROR

    @property
    def field(self) -> str:
        return ', '.join(violation.field for violation in self.violations)

    @property
    def message(self) -> str:
        details = '; '.join(f'{violation.field} - {violation.message}' for violation in self.violations)
        return f'Validation failed: {details}'


@dataclass(frozen=True)
class AliasConflict:
    alias: str

    error_code: ClassVar[str] = ErrorCode.ALIAS_ALREADY_EXISTS

    @property
    def message(self) -> str:
        return f"Short URL '{self.alias}' is already in use. Please choose a different alias."


@dataclass(frozen=True)
class NotFound:
    code: str

    error_code: ClassVar[str] = ErrorCode.NOT_FOUND

    @property
    def message(self) -> str:
        return f"Short URL '{self.code}' not found."


@dataclass(frozen=True)
class InternalError:
    cause: BaseException

    error_code: ClassVar[str] = ErrorCode.INTERNAL_SERVER_ERROR

    @property
    def message(self) -> str:
        # Never leak the cause to clients
        return 'Internal Server Error'


type ServiceError = ValidationFailed | AliasConflict | NotFound | InternalError


@dataclass(frozen=True)
class Ok[T]:
    value: T


@dataclass(frozen=True)
class Err[E]:
    error: E


type Result[T] = Ok[T] | Err[ServiceError]
