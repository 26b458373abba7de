from __future__ import annotations

from types import ModuleType
from typing import Any

from ._mode_base import BlockMode


class NativeCBCMode(BlockMode):
    """CBC mode backed by a pycryptodome cipher object.

    pycryptodome keeps the chaining value inside the cipher object, so the
    instance may be fed a message in any number of block-aligned pieces.
    """

    def __init__(
        self,
        factory: ModuleType,
        key: bytes,
        iv: bytes | None,
        decrypt: bool,
    ) -> None:
        """Initialize a pycryptodome-backed CBC mode.

        Args:
            factory: A ``Crypto.Cipher`` module such as ``AES`` or ``DES3``.
            key: Raw key bytes accepted by ``factory``.
            iv: Initialization vector of one block. If ``None``, a zero IV is
                used (suitable for tests, not for real cryptographic use).
            decrypt: Build a decrypter instead of an encrypter.

        Raises:
            ValueError: If the key or IV size is rejected by ``factory``.
        """
        super().__init__(factory.block_size)
        if iv is None:
            iv = bytes(self.block_size)
        if len(iv) != self.block_size:
            raise ValueError("Invalid IV size")
        self._cipher: Any = factory.new(bytes(key), factory.MODE_CBC, iv=bytes(iv))
        self._op = self._cipher.decrypt if decrypt else self._cipher.encrypt

    def _crypt(self, view: memoryview) -> None:
        self._op(bytes(view), output=view)
