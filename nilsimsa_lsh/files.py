from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union
import logging
import sys

from .hasher import Nilsimsa

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


@dataclass
class ReadConfig:
    chunk_size: int = 65536  # bytes per read()

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


def digest_fileobj(f: BinaryIO, cfg: Optional[ReadConfig] = None) -> str:
    cfg = cfg or ReadConfig()
    h = Nilsimsa()
    while True:
        chunk = f.read(cfg.chunk_size)
        if not chunk:
            break
        h.update(chunk)
    logger.debug("Hashed %d bytes in chunks of %d", h.total_bytes, cfg.chunk_size)
    return h.hexdigest()


def digest_path(path: Union[str, Path], cfg: Optional[ReadConfig] = None) -> str:
    """Hex digest of a file's contents; "-" reads stdin."""
    cfg = cfg or ReadConfig()
    if str(path) == STDIN_PATH:
        return digest_fileobj(sys.stdin.buffer, cfg)
    with Path(path).open("rb") as f:
        return digest_fileobj(f, cfg)
