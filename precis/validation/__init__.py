from precis.validation.rules import Rule, Valid, Rejected, ValidationResult
from precis.validation.url_validator import UrlValidator, validate_url, validate_alias, BLOCKED_HOSTS


__all__ = [
    'Rule',
    'Valid',
    'Rejected',
    'ValidationResult',
    'UrlValidator',
    'validate_url',
    'validate_alias',
    'BLOCKED_HOSTS',
]
