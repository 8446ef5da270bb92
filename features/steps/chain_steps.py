from __future__ import annotations

import random

from behave import given, then, when

from wordchain import Chain, ChainContractError, ChainKey


@given("an empty chain of order {order:d}")
def step_empty_chain(context, order: int) -> None:
    context.chain = Chain(order, rng=random.Random(0))


@when('I train the chain on "{text}"')
def step_train_chain(context, text: str) -> None:
    context.chain.train(text)


@when("I train the chain on empty text")
def step_train_chain_empty(context) -> None:
    context.chain.train("")


@when("I round-trip the chain through JSON")
def step_round_trip(context) -> None:
    context.restored_chain = Chain.from_json(context.chain.to_json())


@then('the followers of the start key are "{words}"')
def step_start_followers(context, words: str) -> None:
    followers = context.chain.followers(ChainKey.blank(context.chain.order))
    assert followers == words.split(), followers


@then('the start key has {count:d} occurrences of "{word}"')
def step_start_multiplicity(context, count: int, word: str) -> None:
    followers = context.chain.followers(ChainKey.blank(context.chain.order))
    assert followers.count(word) == count, followers


@then('a generated sentence starts with "{word}"')
def step_generated_starts_with(context, word: str) -> None:
    sentence = context.chain.generate()
    assert sentence is not None
    assert sentence.split()[0] == word, sentence


@then("the chain has {count:d} key")
def step_chain_key_count(context, count: int) -> None:
    assert len(context.chain) == count


@then("generation returns an empty sentence")
def step_generation_empty(context) -> None:
    assert context.chain.generate() == ""


@then("generation has no starting point")
def step_generation_none(context) -> None:
    assert context.chain.generate() is None


@then('generating from seed "{seed}" is rejected')
def step_seed_rejected(context, seed: str) -> None:
    try:
        context.chain.generate_from_seed(seed.split())
    except ChainContractError:
        return
    raise AssertionError("Expected the seed to be rejected")


@then('generating from seed "{seed}" returns "{expected}"')
def step_seed_generates(context, seed: str, expected: str) -> None:
    sentence = context.chain.generate_from_seed(seed.split())
    assert sentence == expected, sentence


@then("the restored chain equals the original")
def step_restored_equals(context) -> None:
    assert context.restored_chain == context.chain
    assert context.restored_chain.order == context.chain.order
