import functools
from typing import TypeVar, Any
from collections.abc import Callable

from linkshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_os_error[F](method: F) -> F:
    """Wrap file-interacting DAO methods to handle I/O errors

    Args:
        method (Callable[..., Any]):
            DAO method performing file operations which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on I/O failures.

    Example:
        >>> @handle_os_error
        ... def read_users(self):
        ...     return self.users_path.read_text()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            raise DataStoreError(f"Can't access snapshot files in {self.data_dir}: {e.strerror or e}.") from e

    return wrapper
