from __future__ import annotations

from Crypto.Cipher import AES as _AES

from ._mode_base import BlockMode
from ._mode_native import NativeCBCMode

block_size = 16
key_size = (16, 24, 32)


def new_encrypter(key: bytes | bytearray, iv: bytes | bytearray | None = None) -> BlockMode:
    """Create an AES-CBC encrypter.

    Args:
        key: AES key of length 16, 24 or 32 bytes.
        iv: 16-byte initialization vector. If ``None``, a zero IV is used for
            learning and testing.

    Returns:
        A block mode encrypting whole 16-byte blocks in place.

    Raises:
        ValueError: If the key or IV length is invalid.
    """
    if len(key) not in key_size:
        raise ValueError("Invalid key size")
    return NativeCBCMode(_AES, bytes(key), None if iv is None else bytes(iv), decrypt=False)


def new_decrypter(key: bytes | bytearray, iv: bytes | bytearray | None = None) -> BlockMode:
    """Create an AES-CBC decrypter.

    Args:
        key: AES key of length 16, 24 or 32 bytes.
        iv: 16-byte initialization vector, see :func:`new_encrypter`.

    Returns:
        A block mode decrypting whole 16-byte blocks in place.

    Raises:
        ValueError: If the key or IV length is invalid.
    """
    if len(key) not in key_size:
        raise ValueError("Invalid key size")
    return NativeCBCMode(_AES, bytes(key), None if iv is None else bytes(iv), decrypt=True)
