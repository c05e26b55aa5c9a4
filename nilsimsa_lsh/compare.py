from __future__ import annotations

from typing import Optional, Union
import binascii
import logging

import numpy as np

from .errors import DigestDecodeError, DigestLengthError
from .tables import POPC

logger = logging.getLogger(__name__)

DigestLike = Union[str, bytes, bytearray, memoryview]

MAX_SCORE = 128

_POPC = np.asarray(POPC, dtype=np.uint8)


def _decode(digest: DigestLike, which: str) -> np.ndarray:
    if isinstance(digest, str):
        try:
            raw = binascii.unhexlify(digest)
        except (binascii.Error, ValueError) as e:
            raise DigestDecodeError(which, str(e)) from e
    elif isinstance(digest, (bytes, bytearray, memoryview)):
        raw = bytes(digest)
    else:
        raise TypeError(f"Digest {which.upper()} must be hex str or bytes, got {type(digest).__name__}")
    return np.frombuffer(raw, dtype=np.uint8)


def _decode_pair(digest_a: DigestLike, digest_b: DigestLike):
    # Two hex strings are length-checked before decoding.
    if isinstance(digest_a, str) and isinstance(digest_b, str) and len(digest_a) != len(digest_b):
        raise DigestLengthError(len(digest_a), len(digest_b))
    a = _decode(digest_a, "a")
    b = _decode(digest_b, "b")
    if a.shape[0] != b.shape[0]:
        raise DigestLengthError(a.shape[0], b.shape[0])
    return a, b


def _running_distance(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.cumsum(_POPC[np.bitwise_xor(a, b)], dtype=np.int64)


def hamming_distance(digest_a: DigestLike, digest_b: DigestLike) -> int:
    """Exact number of differing bits between two equal-length digests."""
    a, b = _decode_pair(digest_a, digest_b)
    if a.shape[0] == 0:
        return 0
    return int(_running_distance(a, b)[-1])


def compare(digest_a: DigestLike, digest_b: DigestLike, cutoff: Optional[int] = None) -> int:
    """
    Similarity of two digests in [0, 128]: 128 minus the Hamming distance, where 128 means
    identical and 0 means fully dissimilar.

    Digests may be given as hex text or raw bytes and must have the same length.

    If `cutoff` is given, the distance is accumulated byte by byte and accumulation stops as soon
    as it exceeds `cutoff`; the result is then 128 minus the distance seen up to that byte. Past the
    cutoff the score is therefore partial (possibly higher than the exact score) and only tells the
    caller that the distance is greater than `cutoff`. When the true distance is <= `cutoff` the
    result equals the exact score.

    Scores are clamped at 0 for distances above 128.
    """
    if cutoff is not None and cutoff < 0:
        raise ValueError(f"cutoff must be non-negative, got {cutoff}")

    a, b = _decode_pair(digest_a, digest_b)
    if a.shape[0] == 0:
        return MAX_SCORE

    running = _running_distance(a, b)
    distance = int(running[-1])
    if cutoff is not None:
        over = np.flatnonzero(running > cutoff)
        if over.size:
            distance = int(running[over[0]])
            logger.debug("compare: cutoff %d exceeded at byte %d (distance=%d)", cutoff, int(over[0]), distance)

    return max(0, MAX_SCORE - distance)


def is_similar(digest_a: DigestLike, digest_b: DigestLike, threshold: int) -> bool:
    """True iff compare(digest_a, digest_b) >= threshold, using the early-exit path."""
    cutoff = MAX_SCORE - threshold
    if cutoff < 0:
        compare(digest_a, digest_b)
        return False
    return compare(digest_a, digest_b, cutoff=cutoff) >= threshold
