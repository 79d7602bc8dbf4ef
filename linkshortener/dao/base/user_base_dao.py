"""Abstract base class for user account data access objects (DAOs).

This interface defines the contract for registering and authenticating users
and for tracking which short codes each user owns.

Responsibilities:
    - Register users with a unique login and issue their session token.
    - Authenticate a login/password pair into a session token.
    - Maintain each user's ordered list of owned short codes.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.memory import UserMemoryDAO
        >>> dao = UserMemoryDAO()

        >>> user = dao.register('alice', 'pw1')
        >>> dao.authenticate('alice', 'pw1') == user.token
        True

        >>> dao.attach_code(user.token, 'k3Xa9Q')
        >>> dao.owned_codes(user.token)
        ['k3Xa9Q']
"""

from abc import ABC, abstractmethod

from linkshortener.models import UserModel


class UserBaseDAO(ABC):
    """Interface for user account data access objects (DAOs)

    Methods:
        register(login: str, password: str) -> UserModel:
            Create a user with a fresh session token.
            Raises UserAlreadyExistsError if the login is taken.

        authenticate(login: str, password: str) -> str:
            Return the session token of the matching user.
            Raises InvalidCredentialsError on mismatch.

        get(token: str) -> UserModel:
            Retrieve a user by session token.
            Raises UserDoesNotExistError if the token is unknown.

        owned_codes(token: str) -> list[str]:
            Return the user's short codes in creation order (empty if token unknown).

        attach_code(token: str, code: str) -> None:
            Append a code to the user's owned codes (no-op if token unknown).

        detach_code(token: str, code: str) -> None:
            Remove a code from the user's owned codes (no-op if absent).

        snapshot() -> dict[str, UserModel]:
            Return a point-in-time copy of all users keyed by session token.
    """

    @abstractmethod
    def register(self, login: str, password: str, **kwargs) -> UserModel:
        """Register a new user.

        Args:
            login (str):
                Unique login name.

            password (str):
                Plain-text password, stored as a digest only.

        Returns:
            UserModel: the newly registered user.

        Raises:
            UserAlreadyExistsError:
                If a user with the same login exists.

            InvalidInputError:
                If the login or password is empty.
        """
        pass

    @abstractmethod
    def authenticate(self, login: str, password: str, **kwargs) -> str:
        """Authenticate a user and return their session token.

        Raises:
            InvalidCredentialsError:
                If no user matches the login and password digest.
        """
        pass

    @abstractmethod
    def get(self, token: str, **kwargs) -> UserModel:
        """Retrieve a user by session token.

        Raises:
            UserDoesNotExistError:
                If no user holds the given session token.
        """
        pass

    @abstractmethod
    def owned_codes(self, token: str, **kwargs) -> list[str]:
        """Return the short codes owned by a user, empty if the token is unknown."""
        pass

    @abstractmethod
    def attach_code(self, token: str, code: str, **kwargs) -> None:
        """Append a short code to a user's owned codes.

        NOTE: Unknown tokens are tolerated; the call is a no-op.
        """
        pass

    @abstractmethod
    def detach_code(self, token: str, code: str, **kwargs) -> None:
        """Remove a short code from a user's owned codes (no-op if absent)."""
        pass

    @abstractmethod
    def snapshot(self) -> dict[str, UserModel]:
        """Return a point-in-time copy of all users keyed by session token."""
        pass
