"""Abstract base class for short link data access objects (DAOs).

This class establishes a consistent contract for all link DAO implementations.
It owns the mapping from short code to LinkModel, enforces code uniqueness
and the per-link click quota.

Responsibilities:
    - Create links (validate, generate a free code, attach it to the owner).
    - Retrieve links by code without mutating them.
    - Atomically consume one click from a link's quota.
    - Remove links and detach them from their owner.
    - Scan for links that are past their expiry moment.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.memory import UserMemoryDAO, LinkMemoryDAO
        >>> users = UserMemoryDAO()
        >>> dao = LinkMemoryDAO(users=users)
        >>> alice = users.register('alice', 'pw1')

        >>> link = dao.create('https://example.com/blog/article-123', alice.token, 2)
        >>> dao.get(link.code).clicks_remaining
        2

        >>> dao.hit(link.code).clicks_remaining
        1
"""

from abc import ABC, abstractmethod
from datetime import datetime

from linkshortener.models import LinkModel


class LinkBaseDAO(ABC):
    """Interface for short link data access objects (DAOs).

    Methods:
        create(target_url: str, owner_token: str, click_limit: int) -> LinkModel:
            Build and insert a new link with a freshly generated code.
            Raises InvalidInputError for a malformed URL or click limit.
            Raises ShortcodeGenerationError when no free code was found.

        insert(link: LinkModel) -> LinkBaseDAO:
            Insert a fully built link.
            Raises LinkAlreadyExistsError if the code is taken.

        get(code: str) -> LinkModel:
            Retrieve a link by code. Pure lookup.
            Raises LinkNotFoundError if the code doesn't exist.

        hit(code: str, now: datetime | None = None) -> LinkModel:
            Consume one click and return the updated link.
            Raises LinkNotFoundError, LinkExpiredError or LinkQuotaExhaustedError.

        delete(code: str, if_expired: datetime | None = None) -> LinkModel | None:
            Remove a link and detach it from its owner. Idempotent.

        links_for_user(owner_token: str) -> list[LinkModel]:
            Return the owner's existing links in creation order.

        expired(now: datetime | None = None) -> list[LinkModel]:
            Return every link past its expiry moment.

        snapshot() -> dict[str, LinkModel]:
            Return a point-in-time copy of all links keyed by code.

    Subclassing:
        Datastore-specific implementations must extend this class and
        implement all abstract methods.
    """

    @abstractmethod
    def create(self, target_url: str, owner_token: str, click_limit: int, **kwargs) -> LinkModel:
        """Create a short link for `target_url` owned by `owner_token`.

        Args:
            target_url (str):
                Syntactically well-formed URI the link resolves to.

            owner_token (str):
                Session token of the creating user.

            click_limit (int):
                Number of successful resolutions allowed (>= 0).

        Returns:
            LinkModel: the inserted link.

        Raises:
            InvalidInputError:
                If the URL is malformed or the click limit is negative.

            ShortcodeGenerationError:
                If every generated code collided with an existing link.
        """
        pass

    @abstractmethod
    def insert(self, link: LinkModel, **kwargs) -> 'LinkBaseDAO':
        """Insert a new LinkModel into the data store.

        Returns:
            LinkBaseDAO: self (for method chaining)

        Raises:
            LinkAlreadyExistsError:
                If a link with the same code already exists.
        """
        pass

    @abstractmethod
    def get(self, code: str, **kwargs) -> LinkModel:
        """Retrieve a link by code without mutating it.

        Raises:
            LinkNotFoundError:
                If no link with the given code exists.
        """
        pass

    @abstractmethod
    def hit(self, code: str, now: datetime | None = None, **kwargs) -> LinkModel:
        """Consume one click from a link's quota.

        Checks are made in order: existence, expiry (`now > expires_at`),
        quota (`clicks_remaining <= 0`). Rejected attempts leave the link untouched.

        Returns:
            LinkModel: the link after the decrement.

        Raises:
            LinkNotFoundError:
                If no link with the given code exists.

            LinkExpiredError:
                If the link is past its expiry moment.

            LinkQuotaExhaustedError:
                If the link has no clicks remaining.
        """
        pass

    @abstractmethod
    def delete(self, code: str, if_expired: datetime | None = None, **kwargs) -> LinkModel | None:
        """Remove a link and detach it from its owner.

        Args:
            code (str):
                Short code of the link to remove.

            if_expired (datetime, optional):
                When given, remove the link only if it is expired as of this
                moment. Keeps a reclaimer from removing a fresh link that
                reused the code of one it saw expire.

        Returns:
            LinkModel | None: the removed link, None if nothing was removed.
        """
        pass

    @abstractmethod
    def links_for_user(self, owner_token: str, **kwargs) -> list[LinkModel]:
        """Return the owner's links in creation order, skipping codes that no longer exist."""
        pass

    @abstractmethod
    def expired(self, now: datetime | None = None, **kwargs) -> list[LinkModel]:
        """Return every link past its expiry moment."""
        pass

    @abstractmethod
    def snapshot(self) -> dict[str, LinkModel]:
        """Return a point-in-time copy of all links keyed by code."""
        pass
