"""
Unit tests for chain training and generation.
"""

from __future__ import annotations

import random

import pytest

from wordchain import Chain, ChainContractError, ChainKey, GenerationLimitError

SENTENCES = [
    "Hello there! I like cheese.",
    "Hello there! The day is very nice, like a good knife.",
    "The cheese is very good.",
]


def _trained(order: int) -> Chain:
    chain = Chain(order, rng=random.Random(1))
    for sentence in SENTENCES:
        chain.train(sentence)
    return chain


@pytest.mark.parametrize("order", [0, -1, True, 1.5, "2"])
def test_invalid_order_is_rejected(order):
    """
    Orders that are not positive integers are contract violations.
    """
    with pytest.raises(ChainContractError):
        Chain(order)


def test_train_records_start_word_for_blank_key():
    """
    The start-of-sentence key maps to the first word of the input.
    """
    chain = Chain(1)
    chain.train("Hello there! I like cheese.")
    assert chain.followers(ChainKey.blank(1)) == ["Hello"]
    assert chain.followers(["cheese."]) == [None]
    assert chain.generate_from_seed(ChainKey.blank(1)).split()[0] == "Hello"


def test_train_records_one_observation_per_word_plus_end():
    """
    An input of n words records n + 1 observations.
    """
    chain = Chain(2)
    chain.train("a b c d")
    total = sum(len(chain.followers(key)) for key in chain.keys())
    assert total == 5
    assert chain.followers([None, None]) == ["a"]
    assert chain.followers([None, "a"]) == ["b"]
    assert chain.followers(["c", "d"]) == [None]


def test_training_twice_doubles_multiplicity():
    """
    Repeated training accumulates followers instead of replacing them.
    """
    chain = Chain(1)
    chain.train("Hello world")
    chain.train("Hello world")
    assert chain.followers([None]).count("Hello") == 2


def test_training_preserves_case_and_punctuation():
    """
    Tokens are split on whitespace only.
    """
    chain = Chain(1)
    chain.train("  Hello,\tWorld!\n")
    assert chain.followers(["Hello,"]) == ["World!"]


def test_empty_text_trains_single_boundary_entry():
    """
    Training on empty text yields one entry and generates an empty string.
    """
    chain = Chain(1)
    chain.train("")
    assert len(chain) == 1
    assert chain.followers([None]) == [None]
    assert chain.generate() == ""


def test_untrained_chain_has_no_starting_point():
    """
    Generation from an untrained chain returns None rather than a string.
    """
    chain = Chain(3)
    assert chain.generate() is None


def test_keys_match_order_and_bags_are_not_empty():
    """
    Every key has the chain order as length and at least one follower.
    """
    for order in (1, 2, 3):
        chain = _trained(order)
        assert ChainKey.blank(order) in chain
        for key in chain.keys():
            assert len(key) == order
            assert chain.followers(key)


def test_generated_words_come_from_training_vocabulary():
    """
    Generation never invents words.
    """
    vocabulary = {word for sentence in SENTENCES for word in sentence.split()}
    rng = random.Random(42)
    for order in (1, 2):
        chain = _trained(order)
        for _ in range(200):
            sentence = chain.generate(rng=rng)
            assert sentence is not None
            assert set(sentence.split()) <= vocabulary


def test_absent_seed_returns_none_before_and_after_training():
    """
    A seed that training never introduces stays without a starting point.
    """
    chain = Chain(2)
    seed = ["never", "seen"]
    assert chain.generate_from_seed(seed) is None
    chain.train("Hello there")
    assert chain.generate_from_seed(seed) is None


def test_seed_of_wrong_length_is_rejected():
    """
    Seeds must hold exactly order words.
    """
    chain = _trained(1)
    with pytest.raises(ChainContractError):
        chain.generate_from_seed([None, None])
    with pytest.raises(ChainContractError):
        chain.generate_from_seed("Hello")


def test_generation_from_seed_continues_after_seed_words():
    """
    Seed words are context only and are not repeated in the output.
    """
    chain = Chain(2)
    chain.train("one two three four")
    assert chain.generate_from_seed(["one", "two"]) == "three four"
    assert chain.generate_from_seed(ChainKey.from_words(["three", "four"])) == ""


def test_draws_are_weighted_by_multiplicity():
    """
    A follower observed twice is drawn about twice as often as one observed once.
    """
    chain = Chain(1)
    chain.train("A")
    chain.train("A")
    chain.train("B")
    rng = random.Random(2024)
    counts = {"A": 0, "B": 0}
    for _ in range(30000):
        counts[chain.generate(rng=rng)] += 1
    ratio = counts["A"] / counts["B"]
    assert 1.85 < ratio < 2.15


def test_seeded_random_source_makes_generation_repeatable():
    """
    The same seeded random source yields the same sentences.
    """
    chain = _trained(1)
    first = [chain.generate(rng=random.Random(5)) for _ in range(3)]
    second = [chain.generate(rng=random.Random(5)) for _ in range(3)]
    assert first == second


def test_step_guard_stops_cycles():
    """
    A chain that can never reach a boundary trips the step guard.
    """
    cyclic = Chain(1)
    cyclic.train("a b")
    cyclic._map[ChainKey(("b",))] = ["a"]
    with pytest.raises(GenerationLimitError) as excinfo:
        cyclic.generate(max_steps=10)
    assert excinfo.value.max_steps == 10
    assert len(excinfo.value.partial_text.split()) == 10


def test_step_guard_allows_sentences_up_to_the_limit():
    """
    Sentences with exactly max_steps words are returned.
    """
    chain = Chain(1)
    chain.train("a b c")
    assert chain.generate(max_steps=3) == "a b c"
    with pytest.raises(GenerationLimitError):
        chain.generate(max_steps=2)
    with pytest.raises(ChainContractError):
        chain.generate(max_steps=0)


def test_followers_of_unknown_key_raise_key_error():
    """
    Looking up a key that was never observed raises KeyError.
    """
    chain = _trained(1)
    with pytest.raises(KeyError):
        chain.followers(["nope"])


def test_key_advance_keeps_length():
    """
    Advancing a key drops its oldest word.
    """
    key = ChainKey.blank(3).advance("a").advance("b")
    assert key == ChainKey((None, "a", "b"))
    assert key.to_list() == [None, "a", "b"]
    assert hash(key) == hash(ChainKey.from_words([None, "a", "b"]))


def test_membership_accepts_any_word_sequence():
    """
    Membership coerces lists and tuples to keys and reports wrong lengths as absent.
    """
    chain = Chain(1)
    chain.train("Hello")
    assert ChainKey.blank(1) in chain
    assert (None,) in chain
    assert [None] in chain
    assert ["Hello"] in chain
    assert ["Goodbye"] not in chain
    assert [None, None] not in chain
    assert "Hello" not in chain
    assert 7 not in chain
    assert [["unhashable"]] not in chain


def test_generation_does_not_change_the_chain():
    """
    Generation only reads the chain, however many times it runs.
    """
    chain = _trained(2)
    before = {key: chain.followers(key) for key in chain.keys()}
    key_count = len(chain)
    copy = Chain.from_json(chain.to_json())
    rng = random.Random(11)
    for _ in range(500):
        chain.generate(rng=rng)
        chain.generate_from_seed([None, "Hello"], rng=rng)
        chain.generate_from_seed(["never", "seen"], rng=rng)
    assert len(chain) == key_count
    assert {key: chain.followers(key) for key in chain.keys()} == before
    assert chain == copy


def test_equality_ignores_follower_order_but_not_multiplicity():
    """
    Chains are equal when every key holds the same followers with the same counts.
    """
    first = Chain(1)
    first.train("a")
    first.train("b")
    second = Chain(1)
    second.train("b")
    second.train("a")
    assert first == second
    second.train("a")
    assert first != second
