from linkshortener.dao.memory.user_memory_dao import UserMemoryDAO
from linkshortener.dao.memory.link_memory_dao import LinkMemoryDAO


__all__ = [
    'UserMemoryDAO',
    'LinkMemoryDAO',
]
