from linkshortener.models.link_model import LinkModel
from linkshortener.models.user_model import UserModel
from linkshortener.models.snapshot_model import SnapshotModel


__all__ = [
    'LinkModel',
    'UserModel',
    'SnapshotModel',
]
