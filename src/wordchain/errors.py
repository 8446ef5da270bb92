"""
Error types for Wordchain.
"""

from __future__ import annotations


class ChainContractError(ValueError):
    """
    A caller broke a chain contract, such as a non-positive order or a seed of the wrong length.
    """


class ChainDataError(ValueError):
    """
    Persisted chain data could not be parsed into a valid chain.
    """


class GenerationLimitError(RuntimeError):
    """
    Generation emitted the configured maximum number of words without reaching a boundary.

    :param max_steps: Step limit that was reached.
    :type max_steps: int
    :param partial_text: Words generated before the limit, joined by spaces.
    :type partial_text: str
    """

    def __init__(self, *, max_steps: int, partial_text: str) -> None:
        self.max_steps = max_steps
        self.partial_text = partial_text
        message = (
            "Generation did not reach a sentence boundary"
            f": max_steps={max_steps} partial_words={len(partial_text.split())}"
        )
        super().__init__(message)
