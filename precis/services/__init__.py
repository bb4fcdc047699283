from precis.services.result import (
    Ok,
    Err,
    Result,
    ServiceError,
    FieldViolation,
    ValidationFailed,
    AliasConflict,
    NotFound,
    InternalError,
)
from precis.services.shortening_service import ShorteningService
from precis.services.lookup_service import LookupService


__all__ = [
    'Ok',
    'Err',
    'Result',
    'ServiceError',
    'FieldViolation',
    'ValidationFailed',
    'AliasConflict',
    'NotFound',
    'InternalError',
    'ShorteningService',
    'LookupService',
]
