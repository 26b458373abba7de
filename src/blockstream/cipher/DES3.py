from __future__ import annotations

from Crypto.Cipher import DES3 as _DES3

from ._mode_base import BlockMode
from ._mode_native import NativeCBCMode

block_size = 8
key_size = (16, 24)


def new_encrypter(key: bytes | bytearray, iv: bytes | bytearray | None = None) -> BlockMode:
    """Create a Triple-DES CBC encrypter.

    Args:
        key: A 3DES key of length 16 bytes (two-key) or 24 bytes (three-key).
            Keys that degenerate to single DES are rejected.
        iv: 8-byte initialization vector. If ``None``, a zero IV is used for
            learning and testing.

    Raises:
        ValueError: If the key or IV is invalid.
    """
    if len(key) not in key_size:
        raise ValueError("Invalid key size")
    return NativeCBCMode(_DES3, bytes(key), None if iv is None else bytes(iv), decrypt=False)


def new_decrypter(key: bytes | bytearray, iv: bytes | bytearray | None = None) -> BlockMode:
    """Create a Triple-DES CBC decrypter. See :func:`new_encrypter`."""
    if len(key) not in key_size:
        raise ValueError("Invalid key size")
    return NativeCBCMode(_DES3, bytes(key), None if iv is None else bytes(iv), decrypt=True)
