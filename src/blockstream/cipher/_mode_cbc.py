from __future__ import annotations

from ._mode_base import BlockCipherFunc, BlockMode


def _xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte sequences of equal length.

    Args:
        a: First byte sequence.
        b: Second byte sequence.

    Returns:
        The XOR result as a new byte sequence.
    """
    return bytes(x ^ y for x, y in zip(a, b, strict=True))


class _CBCBase(BlockMode):
    def __init__(self, block_size: int, iv: bytes | None) -> None:
        super().__init__(block_size)
        if iv is None:
            iv = bytes(block_size)
        if len(iv) != block_size:
            raise ValueError("Invalid IV size")
        self.iv = bytes(iv)


class CBCEncrypter(_CBCBase):
    """Cipher Block Chaining (CBC) encryption over a single-block primitive.

    Each encrypted block depends on the previous ciphertext block. The
    chaining value (IV) is updated after each call, so consecutive calls
    produce the same ciphertext as one call over the concatenated input.
    """

    def __init__(
        self,
        encrypt_block: BlockCipherFunc,
        block_size: int,
        iv: bytes | None,
    ) -> None:
        """Initialize a CBC encrypter.

        Args:
            encrypt_block: Callable that encrypts a single block of length
                ``block_size``.
            block_size: Block size in bytes.
            iv: Initialization vector. Must be exactly ``block_size`` bytes.
                If ``None``, a zero IV is used (suitable for tests, not for
                real cryptographic use).

        Raises:
            ValueError: If ``iv`` does not match ``block_size``.
        """
        super().__init__(block_size, iv)
        self.encrypt_block = encrypt_block

    def _crypt(self, view: memoryview) -> None:
        bs = self.block_size
        prev = self.iv

        for i in range(0, len(view), bs):
            ct = self.encrypt_block(_xor_bytes(view[i : i + bs], prev))
            view[i : i + bs] = ct
            prev = bytes(ct)

        self.iv = prev


class CBCDecrypter(_CBCBase):
    """Cipher Block Chaining (CBC) decryption over a single-block primitive."""

    def __init__(
        self,
        decrypt_block: BlockCipherFunc,
        block_size: int,
        iv: bytes | None,
    ) -> None:
        """Initialize a CBC decrypter.

        Args:
            decrypt_block: Callable that decrypts a single block of length
                ``block_size``.
            block_size: Block size in bytes.
            iv: Initialization vector, see :class:`CBCEncrypter`.

        Raises:
            ValueError: If ``iv`` does not match ``block_size``.
        """
        super().__init__(block_size, iv)
        self.decrypt_block = decrypt_block

    def _crypt(self, view: memoryview) -> None:
        bs = self.block_size
        prev = self.iv

        for i in range(0, len(view), bs):
            block = bytes(view[i : i + bs])
            view[i : i + bs] = _xor_bytes(self.decrypt_block(block), prev)
            prev = block

        self.iv = prev
