__all__ = [
    "CipherConfig",
    "StreamConfig",
]

from .config import CipherConfig, StreamConfig
