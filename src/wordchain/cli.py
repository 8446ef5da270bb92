"""
Command-line interface for Wordchain.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Iterator, List, Optional

from .chain import Chain, load_chain, save_chain
from .configuration import resolve_chain_configuration
from .errors import GenerationLimitError
from .keys import ChainKey


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")


def _iter_training_lines(paths: List[str]) -> Iterator[str]:
    for raw in paths:
        path = Path(raw)
        if not path.is_file():
            raise FileNotFoundError(f"Corpus file not found: {path}")
        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if line.strip():
                    yield line


def cmd_train(arguments: argparse.Namespace) -> int:
    """
    Train a chain on corpus files and write it as JSON.

    Each non-blank line of each corpus file is one training input.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    if arguments.model:
        chain = load_chain(arguments.model)
        if arguments.order is not None and arguments.order != chain.order:
            raise ValueError(
                f"Cannot extend a chain of order {chain.order} with --order {arguments.order}"
            )
    else:
        configuration = resolve_chain_configuration(
            arguments.configuration,
            override_pairs=arguments.override,
            explicit={"order": arguments.order},
        )
        chain = Chain.from_configuration(configuration)
    inputs = 0
    for line in _iter_training_lines(arguments.corpus):
        chain.train(line)
        inputs += 1
    output = save_chain(chain, arguments.output)
    print(
        f"[wordchain] trained {inputs} inputs order={chain.order} keys={len(chain)} -> {output}",
        file=sys.stderr,
    )
    return 0


def cmd_generate(arguments: argparse.Namespace) -> int:
    """
    Generate sentences from a trained chain.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    chain = load_chain(arguments.model)
    configuration = resolve_chain_configuration(
        arguments.configuration,
        override_pairs=arguments.override,
        explicit={
            "order": chain.order,
            "max_steps": arguments.max_steps,
            "random_seed": arguments.random_seed,
        },
    )
    if arguments.count < 1:
        raise ValueError(f"--count must be at least 1 (got {arguments.count})")
    rng = random.Random(configuration.random_seed)
    if arguments.seed_word:
        seed = ChainKey.from_words(word or None for word in arguments.seed_word)
    else:
        seed = ChainKey.blank(chain.order)
    for _ in range(arguments.count):
        sentence = chain.generate_from_seed(seed, rng=rng, max_steps=configuration.max_steps)
        if sentence is None:
            print(
                f"No starting point for seed {list(seed.words)!r}: the chain never observed it",
                file=sys.stderr,
            )
            return 1
        print(sentence)
    return 0


def cmd_inspect(arguments: argparse.Namespace) -> int:
    """
    Print a summary of a trained chain.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    chain = load_chain(arguments.model)
    vocabulary = set()
    observations = 0
    for key in chain.keys():
        followers = chain.followers(key)
        observations += len(followers)
        vocabulary.update(word for word in followers if word is not None)
    summary = {
        "order": chain.order,
        "keys": len(chain),
        "observations": observations,
        "vocabulary": len(vocabulary),
        "trained": ChainKey.blank(chain.order) in chain,
    }
    print(json.dumps(summary, indent=2))
    return 0


def _add_configuration_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--configuration",
        action="append",
        default=None,
        help="YAML configuration file (repeatable; later files take precedence).",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=None,
        help="Configuration override as key=value (repeatable).",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line interface argument parser.

    :return: Argument parser instance.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="wordchain",
        description="Train and sample variable-order Markov chains over words.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_train = sub.add_parser("train", help="Train a chain on corpus files (one input per line).")
    p_train.add_argument("corpus", nargs="+", help="Corpus text files.")
    p_train.add_argument("--output", required=True, help="Path of the JSON chain to write.")
    p_train.add_argument(
        "--model", default=None, help="Existing JSON chain to extend instead of starting empty."
    )
    p_train.add_argument("--order", type=int, default=None, help="Chain order (default: 2).")
    _add_configuration_args(p_train)
    p_train.set_defaults(func=cmd_train)

    p_generate = sub.add_parser("generate", help="Generate sentences from a trained chain.")
    p_generate.add_argument("model", help="Path of a JSON chain.")
    p_generate.add_argument("--count", type=int, default=1, help="Number of sentences.")
    p_generate.add_argument(
        "--seed-word",
        action="append",
        default=None,
        help=(
            "Seed word (repeat once per chain order position). An empty value "
            "(--seed-word \"\") stands for a sentence boundary."
        ),
    )
    p_generate.add_argument("--random-seed", type=int, default=None, help="Random seed.")
    p_generate.add_argument(
        "--max-steps", type=int, default=None, help="Maximum words per sentence."
    )
    _add_configuration_args(p_generate)
    p_generate.set_defaults(func=cmd_generate)

    p_inspect = sub.add_parser("inspect", help="Summarize a trained chain.")
    p_inspect.add_argument("model", help="Path of a JSON chain.")
    p_inspect.set_defaults(func=cmd_inspect)

    return parser


def main(argument_list: Optional[List[str]] = None) -> int:
    """
    Entry point for the Wordchain command-line interface.

    :param argument_list: Optional command-line interface arguments.
    :type argument_list: list[str] or None
    :return: Exit code.
    :rtype: int
    """
    parser = build_parser()
    arguments = parser.parse_args(argument_list)
    _configure_logging(arguments.verbose)
    try:
        return int(arguments.func(arguments))
    except (OSError, ValueError, GenerationLimitError) as exception:
        print(str(exception), file=sys.stderr)
        return 2
