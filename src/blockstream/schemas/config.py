"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass
class StreamConfig:
    """Configuration for the streaming adapters.

    Attributes:
        buffer_blocks: Number of cipher blocks the writer buffers before it
            encrypts and flushes to the sink.
        chunk_size: Number of bytes moved per read when copying whole
            streams.
    """

    buffer_blocks: int = 64
    chunk_size: int = 64 * 1024


@dataclass
class CipherConfig:
    """Configuration for the block cipher used by the helpers.

    Attributes:
        algorithm: Cipher name, one of ``"aes"`` or ``"des3"``.
    """

    algorithm: str = "aes"
