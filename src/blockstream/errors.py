"""
Exception hierarchy shared by the streaming adapters and block modes.
"""

__all__ = [
    "CipherStreamError",
    "ShortBufferError",
    "WriterClosedError",
    "UnexpectedEOFError",
    "SinkError",
    "ShortWriteError",
    "BlockAlignmentError",
    "RandomSourceError",
]


class CipherStreamError(Exception):
    """Base class for failures reported by the streaming adapters."""


class ShortBufferError(CipherStreamError, ValueError):
    """The destination buffer cannot hold a single cipher block."""


class WriterClosedError(CipherStreamError, ValueError):
    """Data was written to a writer that has already been closed."""


class UnexpectedEOFError(CipherStreamError, EOFError):
    """The ciphertext ended in the middle of a block."""


class SinkError(CipherStreamError):
    """The underlying sink failed while receiving encrypted data.

    Attributes:
        accepted: Number of plaintext bytes the failing call had accepted
            from the caller before the sink failed.
    """

    def __init__(self, message: str, accepted: int = 0) -> None:
        super().__init__(message)
        self.accepted = accepted


class ShortWriteError(SinkError):
    """The sink reported writing fewer bytes than it was given."""


class BlockAlignmentError(ValueError):
    """A block mode received data whose length is not a multiple of its block size."""


class RandomSourceError(RuntimeError):
    """The operating system's secure random source is unusable.

    There is no sensible recovery from this; callers should let it propagate.
    """
