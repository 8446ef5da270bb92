"""
Chain keys: fixed-length windows of words with boundary sentinels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .errors import ChainContractError

Word = Optional[str]
"""
A literal training token, or ``None`` for the boundary at the start or end of a training input.
"""


def validate_order(order: object) -> int:
    """
    Validate a chain order.

    :param order: Candidate order value.
    :type order: object
    :return: The order as an integer.
    :rtype: int
    :raises ChainContractError: If the order is not a positive integer.
    """
    if isinstance(order, bool) or not isinstance(order, int):
        raise ChainContractError(f"Chain order must be an integer (got {order!r})")
    if order < 1:
        raise ChainContractError(f"Chain order must be at least 1 (got {order})")
    return order


@dataclass(frozen=True)
class ChainKey:
    """
    Ordered sequence of words used to look up followers in a chain.

    Keys compare and hash by their full contents, so ``None`` boundaries and literal words are
    distinguished position by position.

    :ivar words: Words of the key, oldest first.
    :vartype words: tuple[str or None, ...]
    """

    words: Tuple[Word, ...]

    @classmethod
    def blank(cls, order: int) -> "ChainKey":
        """
        Build the all-boundary key that represents the start of a sentence.

        :param order: Chain order.
        :type order: int
        :return: Key holding ``order`` boundaries.
        :rtype: ChainKey
        """
        return cls(tuple([None] * validate_order(order)))

    @classmethod
    def from_words(cls, words: Iterable[Word]) -> "ChainKey":
        """
        Build a key from an iterable of words.

        :param words: Words, oldest first. ``None`` marks a boundary.
        :type words: Iterable[str or None]
        :return: Key holding the words.
        :rtype: ChainKey
        """
        return cls(tuple(words))

    def to_list(self) -> List[Word]:
        return list(self.words)

    def advance(self, next_word: Word) -> "ChainKey":
        """
        Return the key that follows this one once ``next_word`` is emitted.

        :param next_word: Word appended at the end.
        :type next_word: str or None
        :return: Key with the oldest word dropped and ``next_word`` appended.
        :rtype: ChainKey
        """
        return ChainKey(self.words[1:] + (next_word,))

    def require_order(self, order: int) -> "ChainKey":
        """
        Ensure the key length matches a chain order.

        :param order: Chain order.
        :type order: int
        :return: This key.
        :rtype: ChainKey
        :raises ChainContractError: If the key length differs from the order.
        """
        if len(self.words) != order:
            raise ChainContractError(
                f"Key must hold exactly {order} words (got {len(self.words)}: {self.words!r})"
            )
        return self

    def __len__(self) -> int:
        return len(self.words)
