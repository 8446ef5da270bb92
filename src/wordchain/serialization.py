"""
String encoding for chain keys and followers.

Keys are joined with a single space and boundaries are written as a newline. Whitespace-split
training tokens never contain either character, so encoded keys are unambiguous.
"""

from __future__ import annotations

from typing import Optional

from .constants import BOUNDARY_TOKEN, KEY_SEPARATOR
from .errors import ChainDataError
from .keys import ChainKey, Word


def encode_word(word: Word) -> str:
    if word is None:
        return BOUNDARY_TOKEN
    return word


def decode_word(token: Optional[str]) -> Word:
    """
    Decode a persisted word token.

    :param token: Token text. ``None`` is accepted as a boundary for documents that store nulls.
    :type token: str or None
    :return: Decoded word.
    :rtype: str or None
    :raises ChainDataError: If the token is empty or contains whitespace.
    """
    if token is None or token == BOUNDARY_TOKEN:
        return None
    if not token or token != "".join(token.split()):
        raise ChainDataError(f"Invalid word token: {token!r}")
    return token


def encode_key(key: ChainKey) -> str:
    return KEY_SEPARATOR.join(encode_word(word) for word in key.words)


def decode_key(text: str, *, order: int) -> ChainKey:
    """
    Decode a persisted key string.

    :param text: Encoded key.
    :type text: str
    :param order: Order the key must match.
    :type order: int
    :return: Decoded key.
    :rtype: ChainKey
    :raises ChainDataError: If the token count differs from the order or a token is invalid.
    """
    tokens = text.split(KEY_SEPARATOR)
    if len(tokens) != order:
        raise ChainDataError(
            f"Key {text!r} holds {len(tokens)} words but the chain order is {order}"
        )
    return ChainKey.from_words(decode_word(token) for token in tokens)
