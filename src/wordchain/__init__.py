"""
Wordchain public package interface.
"""

from .chain import Chain, load_chain, save_chain
from .errors import ChainContractError, ChainDataError, GenerationLimitError
from .keys import ChainKey, Word
from .models import ChainConfiguration, ChainDocument

__all__ = [
    "__version__",
    "Chain",
    "ChainConfiguration",
    "ChainContractError",
    "ChainDataError",
    "ChainDocument",
    "ChainKey",
    "GenerationLimitError",
    "Word",
    "load_chain",
    "save_chain",
]

__version__ = "0.1.0"
