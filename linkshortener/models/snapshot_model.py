from dataclasses import dataclass, field

from linkshortener.models.link_model import LinkModel
from linkshortener.models.user_model import UserModel


@dataclass(frozen=True)
class SnapshotModel:
    """Full copy of the account and link state, as persisted by snapshot DAOs.

    Attributes:
        users (dict[str, UserModel]):
            Session token -> user.
        links (dict[str, LinkModel]):
            Short code -> link.
    """

    users: dict[str, UserModel] = field(default_factory=dict)
    links: dict[str, LinkModel] = field(default_factory=dict)
