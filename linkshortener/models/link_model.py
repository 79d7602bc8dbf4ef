from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LinkModel:
    """Represent a short link and its remaining click quota.

    Attributes:
        code (str):
            The unique 6-character short identifier of the link.
        target_url (str):
            The original long URL that the short code resolves to.
        owner_token (str):
            Session token of the user who created the link.
        clicks_remaining (int):
            Leftover successful resolutions. Never negative.
        created_at (datetime):
            Creation moment (UTC, whole seconds).
        expires_at (datetime):
            Moment after which the link is expired (created_at + 24h).

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> created = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)
        >>> link = LinkModel(
        ...     code='k3Xa9Q',
        ...     target_url='https://example.com/article/123',
        ...     owner_token='6f1c2d3e-0000-4000-8000-000000000000',
        ...     clicks_remaining=2,
        ...     created_at=created,
        ...     expires_at=created + timedelta(hours=24),
        ... )
        >>> link.is_expired(created + timedelta(hours=25))
        True
        >>> link.is_exhausted
        False
    """

    code: str
    target_url: str
    owner_token: str
    clicks_remaining: int
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    @property
    def is_exhausted(self) -> bool:
        return self.clicks_remaining <= 0
