from __future__ import annotations

from typing import Optional


class NilsimsaError(Exception):
    """Base class for errors raised by nilsimsa_lsh."""


class DigestLengthError(NilsimsaError, ValueError):
    def __init__(self, len_a: int, len_b: int):
        super().__init__(f"Digest length mismatch: a={len_a} b={len_b}")
        self.len_a = len_a
        self.len_b = len_b


class DigestDecodeError(NilsimsaError, ValueError):
    """Hex text passed as a digest could not be decoded. `which` is "a" or "b"."""

    def __init__(self, which: str, detail: Optional[str] = None):
        msg = f"Failed to decode digest {which.upper()} from hex"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.which = which


class DigestFinalizedError(NilsimsaError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("Nilsimsa accumulator already finalized; create a new one")
