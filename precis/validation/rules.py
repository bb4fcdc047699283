"""Validation outcomes and the individual URL checks.

Every check has the signature `check(url, parts) -> Rejected | None` where `parts`
is the result of `urllib.parse.urlsplit()` (None when the URL could not be split).
A check returns None when the URL satisfies it.

Classes:
    Rule:
        Names of the validation rules (used as the rejection reason).
    Valid:
        Successful validation outcome, carries the validated value.
    Rejected:
        Failed validation outcome, carries the violated rule and a message.
"""

from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import SplitResult

from precis.constants import Limits


ALLOWED_SCHEMES = frozenset({'http', 'https'})

# Schemes that get a dedicated rejection message
BLACKLISTED_SCHEMES = frozenset({'javascript', 'data', 'file', 'vbscript'})

# Common XSS payload fragments, matched case-insensitively against the raw input
SUSPICIOUS_PATTERNS = (
    '<script',
    'javascript:',
    'onerror=',
    'onload=',
    'eval(',
    'alert(',
    'document.cookie',
)


class Rule(StrEnum):
    EMPTY = 'empty'
    TOO_LONG = 'too long'
    INVALID_FORMAT = 'invalid format'
    DISALLOWED_SCHEME = 'disallowed scheme'
    BLOCKED_HOST = 'blocked host'
    SUSPICIOUS_PATTERN = 'suspicious pattern'
    INVALID_ALIAS = 'invalid alias'


@dataclass(frozen=True)
class Valid:
    value: str


@dataclass(frozen=True)
class Rejected:
    rule: Rule
    message: str


type ValidationResult = Valid | Rejected


def check_not_empty(url: str | None, parts: SplitResult | None) -> Rejected | None:
    if url is None or not url.strip():
        return Rejected(Rule.EMPTY, 'URL cannot be empty')
    return None


def check_length(url: str, parts: SplitResult | None) -> Rejected | None:
    if len(url.strip()) > Limits.MAX_URL_LENGTH:
        return Rejected(Rule.TOO_LONG, f'URL cannot exceed {Limits.MAX_URL_LENGTH} characters')
    return None


def check_format(url: str, parts: SplitResult | None) -> Rejected | None:
    # urlsplit() silently strips some whitespace, so look at the raw input
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return Rejected(Rule.INVALID_FORMAT, 'Invalid URL format: whitespace or control characters')
    if parts is None:
        return Rejected(Rule.INVALID_FORMAT, 'Invalid URL format')
    if not parts.scheme:
        return Rejected(Rule.INVALID_FORMAT, 'URL must have a valid scheme and host')
    return None


def check_scheme(url: str, parts: SplitResult) -> Rejected | None:
    scheme = parts.scheme.lower()
    if scheme in BLACKLISTED_SCHEMES:
        return Rejected(Rule.DISALLOWED_SCHEME, f"URL scheme '{scheme}' is not allowed")
    if scheme not in ALLOWED_SCHEMES:
        return Rejected(Rule.DISALLOWED_SCHEME, 'Only HTTP and HTTPS URLs are allowed')
    return None


def check_host(url: str, parts: SplitResult) -> Rejected | None:
    if not parts.hostname:
        return Rejected(Rule.INVALID_FORMAT, 'URL must have a valid scheme and host')
    return None


def check_suspicious_patterns(url: str, parts: SplitResult) -> Rejected | None:
    lowered = url.lower()
    if any(pattern in lowered for pattern in SUSPICIOUS_PATTERNS):
        return Rejected(Rule.SUSPICIOUS_PATTERN, 'URL contains suspicious patterns')
    return None
