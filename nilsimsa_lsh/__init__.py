"""Nilsimsa locality-sensitive hashing.

The hasher and comparator have no dependencies beyond numpy; `files` and `cli` are thin drivers
that feed byte streams into the hasher.
"""

from .hasher import Nilsimsa, nilsimsa_hexdigest, num_trigrams, DIGEST_SIZE
from .compare import compare, hamming_distance, is_similar, MAX_SCORE
from .errors import NilsimsaError, DigestLengthError, DigestDecodeError, DigestFinalizedError
from .tables import TRAN, POPC

__version__ = "0.1.0"

__all__ = [
    "Nilsimsa",
    "nilsimsa_hexdigest",
    "num_trigrams",
    "DIGEST_SIZE",
    "compare",
    "hamming_distance",
    "is_similar",
    "MAX_SCORE",
    "NilsimsaError",
    "DigestLengthError",
    "DigestDecodeError",
    "DigestFinalizedError",
    "TRAN",
    "POPC",
]
