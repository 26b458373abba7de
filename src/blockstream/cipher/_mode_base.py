import abc
from collections.abc import Callable

from blockstream.errors import BlockAlignmentError

BlockCipherFunc = Callable[[bytes], bytes]


class BlockMode(abc.ABC):
    """Base class for direction-bound block-cipher modes of operation.

    A block mode either encrypts or decrypts; it never does both. It
    transforms buffers in place, and only buffers made of whole blocks.
    Chaining state (if the mode has any) carries over from one call to the
    next, so a message may be processed in several block-aligned pieces.
    """

    def __init__(self, block_size: int) -> None:
        """Initialize a block mode.

        Args:
            block_size: Block size in bytes (for example, 16 for AES or
                8 for DES).

        Raises:
            ValueError: If ``block_size`` is not positive.
        """
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self.block_size = block_size

    def crypt_blocks(self, buf: bytearray | memoryview) -> None:
        """Encrypt or decrypt ``buf`` in place.

        Args:
            buf: Writable buffer whose length is a multiple of
                ``block_size``. An empty buffer is a no-op.

        Raises:
            BlockAlignmentError: If the buffer length is not a multiple of
                ``block_size``. Nothing is transformed in that case.
        """
        view = memoryview(buf).cast("B")
        if len(view) % self.block_size != 0:
            raise BlockAlignmentError(
                f"Data length {len(view)} not a multiple of block size {self.block_size}"
            )
        if len(view):
            self._crypt(view)

    @abc.abstractmethod
    def _crypt(self, view: memoryview) -> None:
        """Transform a non-empty, block-aligned byte view in place."""
        ...
