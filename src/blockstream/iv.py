from __future__ import annotations

import logging
import secrets
from typing import Protocol

from .errors import RandomSourceError

__all__ = ["random_iv"]

logger = logging.getLogger(__name__)


class _HasBlockSize(Protocol):
    @property
    def block_size(self) -> int: ...


def random_iv(block: int | _HasBlockSize) -> bytes:
    """Return one block of cryptographically secure random bytes.

    Args:
        block: A block size in bytes, or any object exposing ``block_size``
            (a block mode, a pycryptodome cipher module, ...).

    Returns:
        Random bytes suitable as a CBC initialization vector.

    Raises:
        ValueError: If the block size is not positive.
        RandomSourceError: If the OS random source fails. This is not
            recoverable.
    """
    size = block if isinstance(block, int) else block.block_size
    if size <= 0:
        raise ValueError("block_size must be positive")
    try:
        return secrets.token_bytes(size)
    except (OSError, NotImplementedError) as e:
        logger.critical("Secure random source failed: %s", e)
        raise RandomSourceError("secure random source is unavailable") from e
