__all__ = ['RedisKeySchema']


class RedisKeySchema:
    """Namespaced key names for the Redis snapshot backend.

    Keys are ':'-joined parts behind an optional prefix. Use one prefix per
    app and environment (e.g. 'linkshortener:prod') so several deployments
    can share a Redis database.

    Example:
        >>> RedisKeySchema('linkshortener:dev').users_snapshot_key()
        'linkshortener:dev:snapshot:users'
    """

    SEPARATOR = ':'

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix or None

    def key(self, *parts: str) -> str:
        return self.SEPARATOR.join(part for part in (self.prefix, *parts) if part)

    def users_snapshot_key(self) -> str:
        return self.key('snapshot', 'users')

    def links_snapshot_key(self) -> str:
        return self.key('snapshot', 'links')
