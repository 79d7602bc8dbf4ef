from linkshortener.dao.base.user_base_dao import UserBaseDAO
from linkshortener.dao.base.link_base_dao import LinkBaseDAO
from linkshortener.dao.base.snapshot_base_dao import SnapshotBaseDAO


__all__ = [
    'UserBaseDAO',
    'LinkBaseDAO',
    'SnapshotBaseDAO',
]
