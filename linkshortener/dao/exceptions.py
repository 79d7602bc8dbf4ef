"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    LinkNotFoundError:
        Raised when a LinkModel is not found in the data store.

    LinkAlreadyExistsError:
        Raised when attempting to insert a LinkModel whose code is taken (code collision).

    LinkUnavailableError:
        Base for links which exist but can't be followed; carries the link.

    LinkExpiredError:
        Raised when a link is resolved after its expiry moment.

    LinkQuotaExhaustedError:
        Raised when a link is resolved with no clicks remaining.

    ShortcodeGenerationError:
        Raised when no free shortcode was found within the allowed attempts.

    UserAlreadyExistsError:
        Raised when registering a login that is already taken.

    InvalidCredentialsError:
        Raised when a login/password pair doesn't match any user.

    UserDoesNotExistError:
        Raised when a user is not found in the data store.

    DataStoreError:
        Raised when there is an error in the durable data store (e.g. I/O, connection issues, corrupt data).

Example:
    >>> from linkshortener.dao.exceptions import LinkNotFoundError
    >>> raise LinkNotFoundError("Link with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.LinkNotFoundError: Link with code 'abc123' not found.
"""

from linkshortener.models import LinkModel


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class LinkNotFoundError(DAOError):
    """Exception raised when a LinkModel is not found in the data store."""

    pass


class LinkAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a LinkModel whose code already exists in the data store."""

    pass


class LinkUnavailableError(DAOError):
    """Base class for links which exist but can no longer be resolved.

    Attributes:
        link (LinkModel): the link as it was when the resolution was rejected.
    """

    def __init__(self, message: str, link: LinkModel):
        super().__init__(message)
        self.link = link


class LinkExpiredError(LinkUnavailableError):
    """Exception raised when a link is resolved after its expiry moment."""

    pass


class LinkQuotaExhaustedError(LinkUnavailableError):
    """Exception raised when a link is resolved with no clicks remaining."""

    pass


class ShortcodeGenerationError(DAOError):
    """Exception raised when every generated shortcode collided with an existing link."""

    pass


class UserAlreadyExistsError(DAOError):
    """Exception raised when registering a login that is already taken."""

    pass


class InvalidCredentialsError(DAOError):
    """Exception raised when a login/password pair doesn't match any user."""

    pass


class UserDoesNotExistError(DAOError):
    """Exception raised when a user is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the durable data store.

    e.g. I/O errors, connection issues, corrupt snapshot documents, etc.
    """

    pass
