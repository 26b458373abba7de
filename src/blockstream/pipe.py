"""
Whole-stream helpers built on :class:`BlockModeReader` and :class:`BlockModeWriter`.
"""

from __future__ import annotations

__all__ = ["encrypt_stream", "decrypt_stream"]

import errno
import logging
from typing import Any

from .cipher import BlockMode
from .errors import UnexpectedEOFError
from .reader import BlockModeReader
from .schemas import StreamConfig
from .writer import BlockModeWriter

logger = logging.getLogger(__name__)


def encrypt_stream(
    source: Any,
    sink: Any,
    encrypter: BlockMode,
    *,
    config: StreamConfig | None = None,
) -> int:
    """Encrypt everything readable from ``source`` into ``sink``.

    Args:
        source: Plaintext stream with ``read(size)``.
        sink: Ciphertext stream with ``write(buffer)``. It is left open.
        encrypter: Block mode that encrypts in place.
        config: Buffer and chunk sizes; defaults to :class:`StreamConfig`.

    Returns:
        Number of zero bytes appended to the last block. The decrypting side
        needs it to strip the padding.
    """
    cfg = config or StreamConfig()
    writer = BlockModeWriter(encrypter, sink, cfg.buffer_blocks)

    total = 0
    try:
        while chunk := source.read(cfg.chunk_size):
            writer.write(chunk)
            total += len(chunk)
    except BaseException:
        writer.discard()
        raise
    writer.close()

    logger.debug(
        "Encrypted %d bytes with %d bytes of padding", total, writer.padding_length
    )
    return writer.padding_length or 0


def decrypt_stream(
    source: Any,
    sink: Any,
    decrypter: BlockMode,
    padding: int = 0,
    *,
    config: StreamConfig | None = None,
) -> int:
    """Decrypt ``source`` into ``sink`` and drop the trailing pad bytes.

    The last ``padding`` plaintext bytes are held back until the source is
    exhausted, so nothing past the original message reaches ``sink``.

    Args:
        source: Ciphertext stream, see :class:`BlockModeReader`.
        sink: Plaintext stream with ``write(buffer)``. It is left open.
        decrypter: Block mode that decrypts in place.
        padding: Pad length reported by the encrypting side.
        config: Chunk size; defaults to :class:`StreamConfig`.

    Returns:
        Number of plaintext bytes written to ``sink``.

    Raises:
        ValueError: If ``padding`` is outside ``0 .. block_size - 1``.
        UnexpectedEOFError: If the ciphertext is truncated, or shorter than
            ``padding``.
        BlockingIOError: If a non-blocking source runs dry.
    """
    bs = decrypter.block_size
    if not 0 <= padding < bs:
        raise ValueError(f"padding must be between 0 and {bs - 1}, got {padding}")

    cfg = config or StreamConfig()
    reader = BlockModeReader(decrypter, source)
    buf = bytearray(max(cfg.chunk_size, bs))
    held = bytearray()
    written = 0

    while True:
        n = reader.readinto(buf)
        if n is None:
            raise BlockingIOError(errno.EAGAIN, "ciphertext source would block")
        if n == 0:
            break
        chunk = held + buf[:n]
        cut = len(chunk) - padding
        sink.write(chunk[:cut])
        written += cut
        held = chunk[cut:]

    if len(held) < padding:
        raise UnexpectedEOFError(
            f"decrypted stream is shorter than the {padding} bytes of padding"
        )

    logger.debug("Decrypted %d bytes, dropped %d bytes of padding", written, padding)
    return written
