"""
Size arithmetic for block-aligned buffers.
"""

from __future__ import annotations

__all__ = ["required_size", "fit_to_block"]


def required_size(data_len: int, block_size: int) -> int:
    """Return the smallest multiple of ``block_size`` that can hold ``data_len`` bytes.

    Args:
        data_len: Number of bytes to store. Values ``<= 0`` need no space.
        block_size: Block size in bytes.

    Returns:
        ``0`` for an empty payload, otherwise ``ceil(data_len / block_size)``
        blocks worth of bytes.

    Raises:
        ValueError: If ``block_size`` is not positive.
    """
    if block_size <= 0:
        raise ValueError("block_size must be positive")
    if data_len <= 0:
        return 0
    return ((data_len - 1) // block_size + 1) * block_size


def fit_to_block(data: bytes | bytearray, block_size: int) -> bytes | bytearray:
    """Extend ``data`` with zero bytes up to the next block boundary.

    Already aligned input is returned as-is, without copying.

    Args:
        data: Payload to align.
        block_size: Block size in bytes.

    Returns:
        ``data`` itself when aligned, otherwise a new buffer holding ``data``
        followed by zeros. Empty input yields ``b""``.
    """
    size = required_size(len(data), block_size)
    if size == 0:
        return b""
    if size == len(data):
        return data

    out = bytearray(size)
    out[: len(data)] = data
    return bytes(out) if isinstance(data, bytes) else out
