"""Shortcode generation utility

This module provides a helper function for deriving short, deterministic
codes from the content of a long URL.

Functions:
    generate_shortcode(long_url, length=8):
        Derive a URL-safe short code from the SHA-256 digest of a long URL.

Example:
    >>> from precis.utils import generate_shortcode
    >>> generate_shortcode('http://www.google.com')
    'JT0UJwME'
"""

import base64
import hashlib

from precis.constants import Limits


# Length of an unpadded URL-safe base64 encoding of a 32-byte SHA-256 digest
MAX_LENGTH = 43


def generate_shortcode(long_url: str, length: int = Limits.SHORTCODE_LENGTH) -> str:
    """Derive a short, deterministic code from a long URL.

    The UTF-8 bytes of the URL are hashed with SHA-256, the 256-bit digest is
    encoded with URL-safe base64 (without '=' padding) and the first `length`
    characters of the encoding are returned.

    Args:
        long_url (str):
            The long URL to derive a code for.

        length (int, optional):
            Number of characters to keep. Defaults to 8.

    Returns:
        str: code over the alphabet [A-Za-z0-9_-], exactly `length` characters.

    Raises:
        TypeError: if `long_url` is not a string.
        ValueError: if `length` is outside 1..43.

    NOTE:
        - Same input always yields the same code.
        - Two different URLs can share the same 8-character prefix. This is an
          accepted low-probability risk and is not retried with a salt.
    """
    if not isinstance(long_url, str):
        raise TypeError(f'Long URL must be of type string (given type: {type(long_url)}).')
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if not 1 <= length <= MAX_LENGTH:
        raise ValueError(f'Length must be between 1 and {MAX_LENGTH} (given value: {length}).')

    digest = hashlib.sha256(long_url.encode('utf-8')).digest()
    encoded = base64.urlsafe_b64encode(digest).rstrip(b'=').decode('ascii')
    return encoded[:length]
