"""Abstract base class for snapshot persistence data access objects (DAOs).

A snapshot DAO stores two independent documents: session token -> user and
short code -> link. Each document is a full copy of the in-memory state and
must read back into identical models (timestamps to the second).

Example:
    >>> from linkshortener.dao.file import SnapshotFileDAO
    >>> dao = SnapshotFileDAO(data_dir='/tmp/linkshortener')
    >>> snapshot = dao.load()        # empty snapshot when nothing was saved yet
    >>> dao.save(snapshot)
    <SnapshotFileDAO>
"""

from abc import ABC, abstractmethod

from linkshortener.models import SnapshotModel


class SnapshotBaseDAO(ABC):
    """Interface for snapshot persistence DAOs.

    Methods:
        load() -> SnapshotModel:
            Read both documents. Missing documents yield empty mappings.
            Raises DataStoreError on I/O failure or malformed documents.

        save(snapshot: SnapshotModel) -> SnapshotBaseDAO:
            Replace both documents with the given snapshot.
            Raises DataStoreError on I/O failure.
    """

    @abstractmethod
    def load(self, **kwargs) -> SnapshotModel:
        """Read the persisted snapshot.

        Returns:
            SnapshotModel: the persisted users and links (empty if never saved).

        Raises:
            DataStoreError:
                If the data store can't be read or holds malformed documents.
        """
        pass

    @abstractmethod
    def save(self, snapshot: SnapshotModel, **kwargs) -> 'SnapshotBaseDAO':
        """Persist a snapshot, replacing the previous one.

        Returns:
            SnapshotBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If the data store can't be written.
        """
        pass
