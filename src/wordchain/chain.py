"""
Variable-order Markov chain over whitespace-separated words.
"""

from __future__ import annotations

import json
import logging
import random
from collections import Counter
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Union

from pydantic import ValidationError

from .errors import ChainContractError, ChainDataError, GenerationLimitError
from .keys import ChainKey, Word, validate_order
from .models import ChainConfiguration, ChainDocument
from .serialization import decode_key, decode_word, encode_key, encode_word

logger = logging.getLogger(__name__)

SeedLike = Union[ChainKey, Sequence[Word]]


class Chain:
    """
    Markov chain mapping fixed-length word windows to the words that followed them.

    Follower bags keep every observation, so a word seen twice after a key is twice as likely to
    be drawn as a word seen once. Training only ever appends; generation never mutates the chain.

    :param order: Number of prior words used as context.
    :type order: int
    :param rng: Optional random source used when a generation call does not supply one.
    :type rng: random.Random or None
    :raises ChainContractError: If the order is not a positive integer.
    """

    def __init__(self, order: int, *, rng: Optional[random.Random] = None) -> None:
        self._order = validate_order(order)
        self._map: Dict[ChainKey, List[Word]] = {}
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_configuration(cls, configuration: ChainConfiguration) -> "Chain":
        """
        Build an empty chain from a validated configuration.

        :param configuration: Chain configuration.
        :type configuration: ChainConfiguration
        :return: Empty chain.
        :rtype: Chain
        """
        return cls(configuration.order, rng=random.Random(configuration.random_seed))

    @property
    def order(self) -> int:
        return self._order

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key: object) -> bool:
        try:
            return self._coerce_key(key) in self._map  # type: ignore[arg-type]
        except (ChainContractError, TypeError):
            return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chain):
            return NotImplemented
        if self._order != other._order or self._map.keys() != other._map.keys():
            return False
        return all(
            Counter(followers) == Counter(other._map[key])
            for key, followers in self._map.items()
        )

    def __repr__(self) -> str:
        return f"Chain(order={self._order}, keys={len(self._map)})"

    def keys(self) -> Iterator[ChainKey]:
        return iter(list(self._map))

    def followers(self, key: SeedLike) -> List[Word]:
        """
        Return a copy of the follower bag recorded for a key.

        :param key: Key to look up.
        :type key: ChainKey or Sequence[str or None]
        :return: Followers in observation order.
        :rtype: list[str or None]
        :raises ChainContractError: If the key length differs from the chain order.
        :raises KeyError: If the key was never observed.
        """
        cursor = self._coerce_key(key)
        if cursor not in self._map:
            raise KeyError(f"Key not present in chain: {cursor.words!r}")
        return list(self._map[cursor])

    def train(self, text: str) -> None:
        """
        Record the word transitions of one training input.

        The input is padded with ``order`` leading boundaries and one trailing boundary, and every
        window of ``order + 1`` words contributes one follower to the bag of its leading ``order``
        words. An input of ``n`` words therefore records ``n + 1`` observations.

        :param text: Training input, split on whitespace.
        :type text: str
        :return: None.
        :rtype: None
        """
        words: List[Word] = [None] * self._order
        words.extend(text.split())
        words.append(None)
        observations = len(words) - self._order
        for index in range(observations):
            key = ChainKey(tuple(words[index : index + self._order]))
            self._map.setdefault(key, []).append(words[index + self._order])
        logger.debug("trained %d observations (keys=%d)", observations, len(self._map))

    def generate(
        self, *, rng: Optional[random.Random] = None, max_steps: Optional[int] = None
    ) -> Optional[str]:
        """
        Generate a sentence starting from the start-of-sentence key.

        :param rng: Optional random source with a ``choice`` method.
        :type rng: random.Random or None
        :param max_steps: Optional limit on generated words.
        :type max_steps: int or None
        :return: Generated sentence, or None if the chain was never trained.
        :rtype: str or None
        """
        return self.generate_from_seed(ChainKey.blank(self._order), rng=rng, max_steps=max_steps)

    def generate_from_seed(
        self,
        seed: SeedLike,
        *,
        rng: Optional[random.Random] = None,
        max_steps: Optional[int] = None,
    ) -> Optional[str]:
        """
        Generate a sentence by walking the chain from a seed key until a boundary is drawn.

        The seed words themselves are not part of the output. Without ``max_steps`` the walk only
        stops on a boundary, so a chain whose reachable keys can never draw one does not return.

        :param seed: Starting key.
        :type seed: ChainKey or Sequence[str or None]
        :param rng: Optional random source with a ``choice`` method.
        :type rng: random.Random or None
        :param max_steps: Optional limit on generated words.
        :type max_steps: int or None
        :return: Generated words joined by spaces, or None if the seed was never observed.
        :rtype: str or None
        :raises ChainContractError: If the seed length differs from the order or max_steps < 1.
        :raises GenerationLimitError: If ``max_steps`` words are generated without a boundary.
        """
        cursor = self._coerce_key(seed)
        if max_steps is not None and max_steps < 1:
            raise ChainContractError(f"max_steps must be at least 1 (got {max_steps})")
        if cursor not in self._map:
            return None
        source = rng if rng is not None else self._rng
        result: List[str] = []
        while True:
            next_word = source.choice(self._map[cursor])
            if next_word is None:
                break
            if max_steps is not None and len(result) >= max_steps:
                raise GenerationLimitError(max_steps=max_steps, partial_text=" ".join(result))
            result.append(next_word)
            cursor = cursor.advance(next_word)
        return " ".join(result)

    def to_document(self) -> ChainDocument:
        transitions = {
            encode_key(key): [encode_word(word) for word in followers]
            for key, followers in self._map.items()
        }
        return ChainDocument(order=self._order, transitions=transitions)

    @classmethod
    def from_document(cls, document: ChainDocument) -> "Chain":
        """
        Rebuild a chain from its persisted document.

        :param document: Validated chain document.
        :type document: ChainDocument
        :return: Chain with the document's order and follower bags.
        :rtype: Chain
        :raises ChainDataError: If a key or follower token cannot be decoded.
        """
        chain = cls(document.order)
        for encoded_key, encoded_followers in document.transitions.items():
            key = decode_key(encoded_key, order=document.order)
            chain._map[key] = [decode_word(token) for token in encoded_followers]
        return chain

    def to_json(self) -> str:
        payload = self.to_document().model_dump(mode="json", by_alias=True)
        text = json.dumps(payload, ensure_ascii=False)
        logger.debug("serialized chain order=%d keys=%d", self._order, len(self._map))
        return text

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Chain":
        """
        Load a chain from its JSON form.

        :param text: JSON document.
        :type text: str or bytes
        :return: Loaded chain.
        :rtype: Chain
        :raises ChainDataError: If the document is not valid JSON or not a valid chain.
        """
        try:
            document = ChainDocument.model_validate_json(text)
        except ValidationError as exc:
            raise ChainDataError(f"Invalid chain document: {exc}") from exc
        return cls.from_document(document)

    def _coerce_key(self, key: SeedLike) -> ChainKey:
        if not isinstance(key, ChainKey):
            if isinstance(key, str):
                raise ChainContractError("Keys must be sequences of words, not a single string")
            key = ChainKey.from_words(key)
        return key.require_order(self._order)


def save_chain(chain: Chain, path: Union[str, Path]) -> Path:
    """
    Write a chain to a JSON file, replacing any existing file atomically.

    :param chain: Chain to write.
    :type chain: Chain
    :param path: Destination path.
    :type path: str or Path
    :return: Written path.
    :rtype: Path
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_suffix(target.suffix + ".tmp")
    tmp_path.write_text(chain.to_json() + "\n", encoding="utf-8")
    tmp_path.replace(target)
    return target


def load_chain(path: Union[str, Path]) -> Chain:
    """
    Read a chain from a JSON file.

    :param path: Source path.
    :type path: str or Path
    :return: Loaded chain.
    :rtype: Chain
    :raises FileNotFoundError: If the file does not exist.
    :raises ChainDataError: If the file is not a valid chain document.
    """
    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Chain file not found: {source}")
    return Chain.from_json(source.read_text(encoding="utf-8"))
