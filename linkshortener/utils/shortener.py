"""Shortcode generation utility

This module derives 6-character short codes from an owner identifier plus
randomness. The code is built in three steps:

    1. Encode a random 63-bit non-negative integer in base62, least
       significant digit first (variable length).
    2. Append the first 4 characters of the owner identifier, uppercased.
    3. Keep exactly the first `length` characters.

Functions:
    encode_base62(number) -> str:
        Encode a non-negative integer into base62, least significant digit first.
    generate_shortcode(user_id, rng=None, length=6) -> str:
        Generate a short code for a link owned by `user_id`.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> code = generate_shortcode('6f1c2d3e-0000-4000-8000-000000000000')
    >>> len(code)
    6

NOTE:
    The output is NOT guaranteed unique. Whenever the random part encodes to
    6 or more characters (almost always) the owner suffix is truncated away,
    so uniqueness rests on the random part alone. Callers must detect
    collisions at write time and regenerate.
"""

import random
import secrets
import string
from uuid import UUID

from linkshortener.constants import Shortcode


ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
BASE = len(ALPHABET)  # 10 digits + 26 uppercase + 26 lowercase


def encode_base62(number: int) -> str:
    """Encode a non-negative integer into base62, least significant digit first.

    Args:
        number (int):
            Non-negative integer to encode.

    Returns:
        str: base62 digits, at least one character long.

    Example:
        >>> encode_base62(0)
        '0'
        >>> encode_base62(62)
        '01'
    """
    if not isinstance(number, int):
        raise TypeError(f'Number must be of type integer (given type: {type(number)}).')
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')

    digits = []
    while True:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
        if number == 0:
            break
    return ''.join(digits)


def generate_shortcode(user_id: str | UUID, rng: random.Random | None = None, length: int = Shortcode.LENGTH) -> str:
    """Generate a short code for a link owned by `user_id`.

    Args:
        user_id (str | UUID):
            Owner identifier (session token). Its canonical string form is used.

        rng (random.Random, optional):
            Source of randomness. Defaults to the `secrets` module (OS entropy).
            Pass a seeded `random.Random` for reproducible output.

        length (int, optional):
            Exact length of the resulting code. Defaults to 6.

    Returns:
        str: `length` characters drawn from [0-9A-Za-z].

    NOTE:
        If the random part and the owner part together are shorter than
        `length` (random value below 62 and an identifier shorter than 4
        characters), the code is right-padded with '0' to keep the length fixed.
    """
    if not isinstance(user_id, (str, UUID)):
        raise TypeError(f'User ID must be of type string or UUID (given type: {type(user_id)}).')
    if not isinstance(length, int) or length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    if rng is None:
        number = secrets.randbits(Shortcode.RANDOM_BITS)
    else:
        number = rng.getrandbits(Shortcode.RANDOM_BITS)

    owner_part = str(user_id)[: Shortcode.OWNER_PART_LENGTH].upper()
    return (encode_base62(number) + owner_part).ljust(length, ALPHABET[0])[:length]
