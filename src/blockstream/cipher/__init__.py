"""
Block-mode capabilities consumed by the streaming adapters.

Every mode is bound to one direction and transforms whole blocks in place.
"""

from __future__ import annotations

__all__ = [
    "BlockCipherFunc",
    "BlockMode",
    "CBCDecrypter",
    "CBCEncrypter",
    "ALGORITHMS",
    "new_mode_pair",
]

from types import ModuleType

from blockstream.schemas import CipherConfig

from . import AES, DES3
from ._mode_base import BlockCipherFunc, BlockMode
from ._mode_cbc import CBCDecrypter, CBCEncrypter

ALGORITHMS: dict[str, ModuleType] = {
    "aes": AES,
    "des3": DES3,
}


def new_mode_pair(
    config: CipherConfig,
    key: bytes | bytearray,
    iv: bytes | bytearray | None = None,
) -> tuple[BlockMode, BlockMode]:
    """Build an encrypter and a decrypter for the configured algorithm.

    The two modes share key and IV but keep separate chaining state, so one
    of them must not be used while the other is live on the same message.

    Args:
        config: Cipher selection.
        key: Raw key bytes.
        iv: Initialization vector, or ``None`` for a zero IV.

    Returns:
        ``(encrypter, decrypter)``.

    Raises:
        ValueError: If the algorithm is unknown or the key/IV is invalid.
    """
    module = ALGORITHMS.get(config.algorithm.lower())
    if module is None:
        raise ValueError(f"Unknown algorithm: {config.algorithm}")
    return module.new_encrypter(key, iv), module.new_decrypter(key, iv)
