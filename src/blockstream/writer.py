"""
Encrypting writer that adapts a block mode to an arbitrary byte sink.
"""

from __future__ import annotations

__all__ = ["BlockModeWriter", "DEFAULT_BUFFER_BLOCKS"]

import io
import logging
from typing import Any

from .align import required_size
from .cipher import BlockMode
from .errors import ShortWriteError, SinkError, WriterClosedError

logger = logging.getLogger(__name__)

# 64 AES blocks -> 1 KiB of buffered plaintext
DEFAULT_BUFFER_BLOCKS = 64


class BlockModeWriter(io.RawIOBase):
    """Encrypt written data and send it to ``sink``.

    Plaintext is collected in a buffer of ``buffer_blocks`` cipher blocks.
    Each time the buffer fills up it is encrypted in place and written to the
    sink in a single call. :meth:`close` zero-pads the trailing partial block,
    encrypts it and writes it out; the number of pad bytes is then available
    from :attr:`padding_length` and has to reach the decrypting side by other
    means.

    A sink failure is wrapped in :class:`SinkError` and becomes permanent:
    every later :meth:`write` or :meth:`close` raises it again. The sink is
    never closed by the writer.

    Only an explicit :meth:`close` flushes the final block. A writer that is
    garbage collected while open, or released with :meth:`discard`, drops
    its buffered data and writes nothing more.

    Args:
        encrypter: Block mode that encrypts in place, e.g. from
            :func:`blockstream.cipher.AES.new_encrypter`.
        sink: Object with ``write(buffer)``.
        buffer_blocks: Buffer capacity in blocks.

    Raises:
        ValueError: If ``buffer_blocks`` is not positive.
    """

    def __init__(
        self,
        encrypter: BlockMode,
        sink: Any,
        buffer_blocks: int = DEFAULT_BUFFER_BLOCKS,
    ) -> None:
        super().__init__()
        if buffer_blocks <= 0:
            raise ValueError("buffer_blocks must be positive")
        self._mode = encrypter
        self._sink = sink
        self._buffer = bytearray(encrypter.block_size * buffer_blocks)
        self._fill = 0
        self._error: SinkError | None = None
        self._pad_len: int | None = None

    @property
    def block_size(self) -> int:
        """Block size of the underlying block mode."""
        return self._mode.block_size

    @property
    def padding_length(self) -> int | None:
        """Number of zero bytes appended by :meth:`close`.

        ``None`` until the writer has been closed successfully, then a value
        from ``0`` to ``block_size - 1``.
        """
        return self._pad_len

    def writable(self) -> bool:
        return True

    def write(self, data: Any) -> int:
        """Buffer ``data`` and encrypt every buffer that fills up.

        ``data`` is not modified.

        Args:
            data: Bytes-like plaintext of any length.

        Returns:
            ``len(data)``.

        Raises:
            WriterClosedError: If the writer has been closed.
            SinkError: If the sink failed, now or during an earlier call.
                ``accepted`` tells how much of ``data`` was taken.
        """
        if self._error is not None:
            raise self._error
        if self.closed:
            raise WriterClosedError("writer closed")

        src = memoryview(data).cast("B")
        buf = self._buffer
        size = len(buf)
        accepted = 0

        while accepted < len(src):
            n = min(size - self._fill, len(src) - accepted)
            buf[self._fill : self._fill + n] = src[accepted : accepted + n]
            self._fill += n
            accepted += n

            if self._fill == size:
                self._fill = 0
                self._encrypt_and_send(size, accepted)

        return accepted

    def close(self) -> None:
        """Flush the zero-padded final block and close the writer.

        Calling it again has no effect beyond re-raising a stored sink error.

        Raises:
            SinkError: If the sink failed, now or earlier.
        """
        if self.closed:
            if self._error is not None:
                raise self._error
            return
        try:
            self._finish()
        finally:
            super().close()

    def discard(self) -> None:
        """Close the writer without flushing buffered data.

        Bytes still waiting in the buffer are lost and
        :attr:`padding_length` stays ``None``. Does nothing on a closed
        writer.
        """
        if self.closed:
            return
        self._fill = 0
        logger.debug("Writer discarded without flushing")
        super().close()

    def __del__(self) -> None:
        self.discard()

    def _finish(self) -> None:
        if self._error is not None:
            raise self._error

        if self._fill == 0:
            self._pad_len = 0
            return

        size = required_size(self._fill, self._mode.block_size)
        self._buffer[self._fill : size] = bytes(size - self._fill)
        self._pad_len = size - self._fill
        self._fill = 0

        logger.debug("Closing writer with %d bytes of zero padding", self._pad_len)
        self._encrypt_and_send(size, 0)

    def _encrypt_and_send(self, size: int, accepted: int) -> None:
        view = memoryview(self._buffer)[:size]
        self._mode.crypt_blocks(view)
        chunk = bytes(view)

        try:
            n = self._sink.write(chunk)
        except Exception as e:
            self._error = SinkError(f"sink write failed: {e}", accepted)
            raise self._error from e

        if n is not None and n < size:
            self._error = ShortWriteError(
                f"sink accepted {n} of {size} encrypted bytes", accepted
            )
            raise self._error
