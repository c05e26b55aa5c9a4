from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional, Union
import logging

import numpy as np

from .errors import DigestFinalizedError
from .tables import TRAN

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview, str]

DIGEST_SIZE = 32  # bytes
WINDOW_SIZE = 4


def num_trigrams(total_bytes: int) -> int:
    """Number of combination-hash contributions made for a stream of `total_bytes` bytes."""
    if total_bytes <= 2:
        return 0
    if total_bytes == 3:
        return 1
    if total_bytes == 4:
        return 4
    return 8 * total_bytes - 28


def _tran_hash(a: int, b: int, c: int, n: int) -> int:
    # Unsigned 8-bit arithmetic; every wraparound here is part of the published algorithm.
    return ((TRAN[(a + n) & 0xFF] ^ ((TRAN[b] * (n + n + 1)) & 0xFF)) + TRAN[c ^ TRAN[n]]) & 0xFF


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, memoryview):
        return data.tobytes()
    raise TypeError(f"Expected bytes-like object or str, got {type(data).__name__}")


class Nilsimsa:
    """
    Streaming Nilsimsa accumulator.

    Feed bytes with `update` (any chunking of the same stream gives the same result), then call
    `digest` or `hexdigest`. The first of those calls finalizes the accumulator: the digest is
    cached and any further `update` raises `DigestFinalizedError`.

    Instances are not thread-safe; serialize access externally if one is shared.

        >>> h = Nilsimsa()
        >>> h.update(b"test string")
        >>> h.hexdigest()
        '42c82c184080082040001004000000084e1043b0c0925829003e84c860410010'
    """

    def __init__(self, data: Optional[BytesLike] = None):
        self._count = 0
        # Counters are plain ints here and reduced to 8 bits at finalization, which is
        # equivalent to wrapping on every increment.
        self._acc: List[int] = [0] * 256
        # Most-recent-first; appendleft evicts the oldest byte once full.
        self._window: Deque[int] = deque(maxlen=WINDOW_SIZE)
        self._digest: Optional[bytes] = None
        if data is not None:
            self.update(data)

    @property
    def total_bytes(self) -> int:
        return self._count

    @property
    def num_trigrams(self) -> int:
        return num_trigrams(self._count)

    @property
    def threshold(self) -> int:
        return self.num_trigrams // 256

    @property
    def finalized(self) -> bool:
        return self._digest is not None

    def update(self, data: BytesLike) -> None:
        if self._digest is not None:
            raise DigestFinalizedError()
        buf = _as_bytes(data)
        acc = self._acc
        window = self._window

        for c in buf:
            n = len(window)
            if n > 1:
                w0 = window[0]
                w1 = window[1]
                acc[_tran_hash(c, w0, w1, 0)] += 1
                if n > 2:
                    w2 = window[2]
                    acc[_tran_hash(c, w0, w2, 1)] += 1
                    acc[_tran_hash(c, w1, w2, 2)] += 1
                    if n > 3:
                        w3 = window[3]
                        acc[_tran_hash(c, w0, w3, 3)] += 1
                        acc[_tran_hash(c, w1, w3, 4)] += 1
                        acc[_tran_hash(c, w2, w3, 5)] += 1
                        acc[_tran_hash(w3, w0, c, 6)] += 1
                        acc[_tran_hash(w3, w2, c, 7)] += 1
            window.appendleft(c)

        self._count += len(buf)

    def copy(self) -> "Nilsimsa":
        """Return an independent accumulator with the same state."""
        if self._digest is not None:
            raise DigestFinalizedError()
        other = Nilsimsa()
        other._count = self._count
        other._acc = list(self._acc)
        other._window = deque(self._window, maxlen=WINDOW_SIZE)
        return other

    def _finalize(self) -> bytes:
        threshold = self.threshold
        counts = np.asarray(self._acc, dtype=np.int64) & 0xFF
        bits = counts > threshold
        # Bit i lives at position (i % 8) of byte i // 8; the reference format then
        # reverses the byte order.
        packed = np.packbits(bits, bitorder="little")
        logger.debug(
            "Finalized nilsimsa digest: total_bytes=%d threshold=%d bits_set=%d",
            self._count,
            threshold,
            int(bits.sum()),
        )
        return packed[::-1].tobytes()

    def digest(self) -> bytes:
        """Finalize (on first call) and return the raw 32-byte digest."""
        if self._digest is None:
            self._digest = self._finalize()
        return self._digest

    def hexdigest(self) -> str:
        """Finalize (on first call) and return the 64-character lowercase hex digest."""
        return self.digest().hex()


def nilsimsa_hexdigest(data: BytesLike) -> str:
    return Nilsimsa(data).hexdigest()
