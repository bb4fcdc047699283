"""Long URL and custom alias validation.

The URL rules are evaluated in a fixed order and validation stops at the
first violated rule:

    1. non-empty, trimmed length <= 2048       (empty, too long)
    2. well-formed URI with a scheme           (invalid format)
    3. scheme is http or https                 (disallowed scheme)
    4. host present                            (invalid format)
    5. host not blocked (disabled by default)  (blocked host)
    6. no known XSS fragments in the raw input (suspicious pattern)

Functions:
    validate_url(long_url: str) -> ValidationResult
        Validate a long URL with the default rule set.
    validate_alias(alias: str) -> ValidationResult
        Validate a user-chosen custom alias.

Example:
    >>> from precis.validation import validate_url, Valid, Rejected
    >>> validate_url('https://example.com')
    Valid(value='https://example.com')
    >>> validate_url('ftp://example.com')
    Rejected(rule=<Rule.DISALLOWED_SCHEME: 'disallowed scheme'>, message='Only HTTP and HTTPS URLs are allowed')
"""

import re
from collections.abc import Callable, Iterable
from urllib.parse import SplitResult, urlsplit

from precis.constants import Limits
from precis.validation.rules import (
    Rule,
    Valid,
    Rejected,
    ValidationResult,
    check_not_empty,
    check_length,
    check_format,
    check_scheme,
    check_host,
    check_suspicious_patterns,
)


# Known local hosts. Not enforced unless passed to UrlValidator(blocked_hosts=...).
BLOCKED_HOSTS = frozenset({'localhost', '127.0.0.1', '0.0.0.0'})

ALIAS_PATTERN = re.compile(rf'[A-Za-z0-9_-]{{{Limits.MIN_ALIAS_LENGTH},{Limits.MAX_ALIAS_LENGTH}}}')

type Check = Callable[[str, SplitResult | None], Rejected | None]


def _split(url: str | None) -> SplitResult | None:
    if not url:
        return None
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a non-numeric or out of range port
    except ValueError:
        return None
    return parts


class UrlValidator:
    """Ordered rule list for long URLs.

    Args:
        blocked_hosts (Iterable[str]):
            Host fragments to reject. Empty by default, which disables the
            host blacklist. Pass BLOCKED_HOSTS to enable the stock list.
    """

    def __init__(self, blocked_hosts: Iterable[str] = ()):
        self.blocked_hosts = frozenset(host.lower() for host in blocked_hosts)
        self.checks: tuple[Check, ...] = (
            check_not_empty,
            check_length,
            check_format,
            check_scheme,
            check_host,
            self.check_blocked_host,
            check_suspicious_patterns,
        )

    def check_blocked_host(self, url: str, parts: SplitResult) -> Rejected | None:
        if not self.blocked_hosts:
            return None
        host = parts.hostname.lower()
        if any(blocked in host for blocked in self.blocked_hosts):
            return Rejected(Rule.BLOCKED_HOST, 'URL domain is not allowed')
        return None

    def validate(self, long_url: str | None) -> ValidationResult:
        """Run every check in order and return the first rejection, if any.

        Args:
            long_url (str | None): candidate long URL (raw client input)

        Returns:
            ValidationResult: Valid(long_url) or the first Rejected outcome
        """
        parts = _split(long_url)
        for check in self.checks:
            rejected = check(long_url, parts)
            if rejected is not None:
                return rejected
        return Valid(long_url)


_default_validator = UrlValidator()


def validate_url(long_url: str | None) -> ValidationResult:
    return _default_validator.validate(long_url)


def validate_alias(alias: str | None) -> ValidationResult:
    """Validate a custom alias: 3-8 characters from [A-Za-z0-9_-].

    Example:
        >>> validate_alias('my-link')
        Valid(value='my-link')
        >>> validate_alias('ab').rule
        <Rule.INVALID_ALIAS: 'invalid alias'>
    """
    if alias is None or not alias.strip():
        return Rejected(Rule.EMPTY, 'Custom alias cannot be empty')
    if not Limits.MIN_ALIAS_LENGTH <= len(alias) <= Limits.MAX_ALIAS_LENGTH:
        return Rejected(
            Rule.INVALID_ALIAS,
            f'Custom alias must be between {Limits.MIN_ALIAS_LENGTH} and {Limits.MAX_ALIAS_LENGTH} characters',
        )
    if ALIAS_PATTERN.fullmatch(alias) is None:
        return Rejected(Rule.INVALID_ALIAS, 'Custom alias can only contain letters, numbers, hyphens, and underscores')
    return Valid(alias)
