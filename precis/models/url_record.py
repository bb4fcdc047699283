from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Optional


@dataclass(frozen=True)
class UrlRecord:
    """Represent a persisted short code to long URL mapping.

    Records are created exactly once and never mutated afterwards.

    Attributes:
        shortcode (str):
            Unique short identifier (custom alias or hash-derived code).
        long_url (str):
            The original long URL that the shortcode resolves to.
        created_at (datetime):
            Creation time (timezone-aware, UTC).
        expires_at (Optional[datetime]):
            Optional expiry time. Lookups still return expired records;
            callers decide what to do with `is_expired`.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> record = UrlRecord(
        ...     shortcode="my-link",
        ...     long_url="https://example.com",
        ...     created_at=datetime.now(UTC),
        ...     expires_at=datetime.now(UTC) - timedelta(days=1),
        ... )
        >>> record.shortcode
        'my-link'
        >>> record.is_expired
        True
    """

    shortcode: str
    long_url: str
    created_at: datetime
    expires_at: Optional[datetime] = None

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return datetime.now(UTC) > expires_at

    def to_dict(self) -> dict:
        """Serialize into a JSON-compatible dict (ISO-8601 timestamps)."""
        return {
            'shortcode': self.shortcode,
            'long_url': self.long_url,
            'created_at': self.created_at.isoformat(),
            'expires_at': self.expires_at.isoformat() if self.expires_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'UrlRecord':
        expires_at = data.get('expires_at')
        return cls(
            shortcode=data['shortcode'],
            long_url=data['long_url'],
            created_at=datetime.fromisoformat(data['created_at']),
            expires_at=datetime.fromisoformat(expires_at) if expires_at else None,
        )
