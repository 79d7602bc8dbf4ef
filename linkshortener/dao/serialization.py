"""JSON document codec for snapshot DAOs.

Documents use the field names of the established on-disk format:

users.json
    {
        "<token>": {
            "login": "alice",
            "passwordHash": "<sha256 hex>",
            "token": "<token>",
            "shortLinks": ["k3Xa9Q"]
        }
    }

links.json
    {
        "k3Xa9Q": {
            "originalUrl": "https://example.com",
            "shortCode": "k3Xa9Q",
            "creatorUUID": "<token>",
            "clicksRemaining": 2,
            "createdAt": "2025-10-15T12:00:00",
            "expiresAt": "2025-10-16T12:00:00"
        }
    }

Timestamps are UTC without offset, to the second.
"""

import json
from datetime import datetime, UTC

from linkshortener.models import LinkModel, UserModel
from linkshortener.types import JSONDocument
from linkshortener.constants import Snapshot
from linkshortener.dao.exceptions import DataStoreError


def format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).strftime(Snapshot.TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, Snapshot.TIMESTAMP_FORMAT).replace(tzinfo=UTC)


def user_to_document(user: UserModel) -> JSONDocument:
    return {
        'login': user.login,
        'passwordHash': user.password_hash,
        'token': user.token,
        'shortLinks': list(user.owned_codes),
    }


def user_from_document(document: JSONDocument) -> UserModel:
    return UserModel(
        login=document['login'],
        password_hash=document['passwordHash'],
        token=document['token'],
        owned_codes=tuple(document.get('shortLinks') or ()),
    )


def link_to_document(link: LinkModel) -> JSONDocument:
    return {
        'originalUrl': link.target_url,
        'shortCode': link.code,
        'creatorUUID': link.owner_token,
        'clicksRemaining': link.clicks_remaining,
        'createdAt': format_timestamp(link.created_at),
        'expiresAt': format_timestamp(link.expires_at),
    }


def link_from_document(document: JSONDocument) -> LinkModel:
    return LinkModel(
        code=document['shortCode'],
        target_url=document['originalUrl'],
        owner_token=document['creatorUUID'],
        clicks_remaining=int(document['clicksRemaining']),
        created_at=parse_timestamp(document['createdAt']),
        expires_at=parse_timestamp(document['expiresAt']),
    )


def dump_users(users: dict[str, UserModel]) -> str:
    return json.dumps({token: user_to_document(user) for token, user in users.items()}, indent=2)


def dump_links(links: dict[str, LinkModel]) -> str:
    return json.dumps({code: link_to_document(link) for code, link in links.items()}, indent=2)


def load_users(raw: str | bytes, source: str = 'users') -> dict[str, UserModel]:
    """Decode a users document

    Raises:
        DataStoreError: If the document is not UTF-8 JSON or misses required fields.
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')
        return {token: user_from_document(document) for token, document in json.loads(raw).items()}
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise DataStoreError(f'Malformed {source} document.') from e


def load_links(raw: str | bytes, source: str = 'links') -> dict[str, LinkModel]:
    """Decode a links document

    Raises:
        DataStoreError: If the document is not UTF-8 JSON, misses required fields or holds bad timestamps.
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')
        return {code: link_from_document(document) for code, document in json.loads(raw).items()}
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise DataStoreError(f'Malformed {source} document.') from e
