"""Snapshot DAO persisting users and links as two JSON files

Responsibilities:
    - Read users.json and links.json at startup (missing files => empty state);
    - Replace both files on every save, each via write-to-temp + atomic rename,
      so a crash mid-write never leaves a truncated document behind;
    - Translate I/O and decoding failures into DataStoreError.

Classes:
    SnapshotFileDAO:
        File-backed implementation of SnapshotBaseDAO.

Example:
    >>> dao = SnapshotFileDAO(data_dir='/var/lib/linkshortener')
    >>> snapshot = dao.load()
    >>> dao.save(snapshot)
    <SnapshotFileDAO>
"""

import os
import tempfile
import logging
from pathlib import Path

from beartype import beartype

from linkshortener.models import SnapshotModel
from linkshortener.constants import Snapshot
from linkshortener.dao.base import SnapshotBaseDAO
from linkshortener.dao.file.helpers import handle_os_error
from linkshortener.dao.serialization import dump_users, dump_links, load_users, load_links


logger = logging.getLogger(__name__)


class SnapshotFileDAO(SnapshotBaseDAO):
    """File-backed snapshot DAO

    Attributes:
        data_dir (Path):
            Directory holding both documents. Created on first save.
        users_path (Path):
            Path of the session token -> user document.
        links_path (Path):
            Path of the code -> link document.
    """

    def __init__(
        self,
        data_dir: str | Path = '.',
        users_filename: str = Snapshot.USERS_FILENAME,
        links_filename: str = Snapshot.LINKS_FILENAME,
    ):
        self.data_dir = Path(data_dir)
        self.users_path = self.data_dir / users_filename
        self.links_path = self.data_dir / links_filename

    def __repr__(self) -> str:
        return f'<SnapshotFileDAO data_dir={str(self.data_dir)!r}>'

    @handle_os_error
    @beartype
    def load(self, **kwargs) -> SnapshotModel:
        users = {}
        links = {}
        if self.users_path.exists():
            users = load_users(self.users_path.read_bytes(), source=str(self.users_path))
        if self.links_path.exists():
            links = load_links(self.links_path.read_bytes(), source=str(self.links_path))

        logger.debug('Loaded snapshot from files.', extra={'users': len(users), 'links': len(links)})
        return SnapshotModel(users=users, links=links)

    @handle_os_error
    @beartype
    def save(self, snapshot: SnapshotModel, **kwargs) -> 'SnapshotFileDAO':
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._write_atomically(self.users_path, dump_users(snapshot.users))
        self._write_atomically(self.links_path, dump_links(snapshot.links))
        return self

    def _write_atomically(self, path: Path, content: str) -> None:
        fd, temp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f'.{path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, path)
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
