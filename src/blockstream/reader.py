"""
Decrypting reader that adapts a block mode to an arbitrary byte source.
"""

from __future__ import annotations

__all__ = ["BlockModeReader"]

import io
import logging
from collections.abc import Callable
from typing import Any

from .cipher import BlockMode
from .errors import ShortBufferError, UnexpectedEOFError

logger = logging.getLogger(__name__)


class BlockModeReader(io.RawIOBase):
    """Read ciphertext from ``source`` and decrypt it on the fly.

    Every call to :meth:`readinto` returns a whole number of decrypted blocks.
    Ciphertext bytes that do not yet form a complete block are kept back and
    prepended to the next call, so the caller may use any buffer size of at
    least one block.

    Once the source is exhausted the reader is terminal: a source that ended
    on a block boundary yields ``0`` (EOF) forever, a source that ended inside
    a block raises :class:`UnexpectedEOFError` forever, and a source that
    raised keeps raising the same exception. The source is never closed by
    the reader.

    Args:
        decrypter: Block mode that decrypts in place, e.g. from
            :func:`blockstream.cipher.AES.new_decrypter`.
        source: Object with ``readinto(buffer)`` or ``read(size)``.
    """

    def __init__(self, decrypter: BlockMode, source: Any) -> None:
        super().__init__()
        self._mode = decrypter
        self._source = source
        self._remainder = bytearray(decrypter.block_size)
        self._pending = 0
        self._eof = False
        self._error: BaseException | None = None
        self._read_source: Callable[[memoryview], int | None] = (
            source.readinto if hasattr(source, "readinto") else self._read_via_read
        )

    @property
    def block_size(self) -> int:
        """Block size of the underlying block mode."""
        return self._mode.block_size

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int | None:
        """Fill ``buffer`` with decrypted data.

        The source is read into the free part of ``buffer``. If that read
        leaves less than one block, the source is read again, since a
        ``0`` return would signal EOF; a single call may therefore issue
        several source reads.

        Args:
            buffer: Writable buffer of at least :attr:`block_size` bytes.

        Returns:
            Number of plaintext bytes stored, always a multiple of the block
            size. ``0`` means the ciphertext ended cleanly. ``None`` means a
            non-blocking source has no complete block available yet.

        Raises:
            ShortBufferError: If ``buffer`` is smaller than one block. Nothing
                is consumed and the reader stays usable.
            UnexpectedEOFError: If the source ended inside a block.
            Exception: Whatever the source raised, on this and later calls.
        """
        if self.closed:
            raise ValueError("I/O operation on closed reader")
        if self._error is not None:
            raise self._error
        if self._eof:
            return 0

        bs = self._mode.block_size
        view = memoryview(buffer).cast("B")
        if len(view) < bs:
            raise ShortBufferError(
                f"buffer of {len(view)} bytes is smaller than block size {bs}"
            )

        total = self._pending
        view[:total] = self._remainder[:total]

        # A 0 return means EOF to io callers, so keep going until a block forms.
        while total < bs:
            try:
                n = self._read_source(view[total:])
            except Exception as e:
                self._fail(e)
                raise
            if n is None:
                break
            if n == 0:
                self._at_source_eof(total)
                break
            total += n

        count = (total // bs) * bs
        self._pending = total - count
        self._remainder[: self._pending] = view[count:total]
        self._mode.crypt_blocks(view[:count])

        if count == 0:
            if self._error is not None:
                raise self._error
            if self._eof:
                return 0
            return None
        return count

    def _read_via_read(self, view: memoryview) -> int | None:
        data = self._source.read(len(view))
        if data is None:
            return None
        view[: len(data)] = data
        return len(data)

    def _at_source_eof(self, leftover: int) -> None:
        if leftover:
            self._fail(
                UnexpectedEOFError(
                    f"ciphertext ended with {leftover} bytes of an incomplete block"
                )
            )
        else:
            logger.debug("Ciphertext source exhausted on a block boundary")
            self._eof = True

    def _fail(self, error: BaseException) -> None:
        logger.debug("Reader failed: %r", error)
        self._error = error
