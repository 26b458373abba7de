from __future__ import annotations

from typing import Any

from blockstream.cipher import ALGORITHMS
from blockstream.schemas import CipherConfig, StreamConfig


class ConfigAdapter:
    """Accessor turning a raw configuration mapping into typed configs.

    Values are read from the ``general`` table and fall back to the
    dataclass defaults when absent.

    Args:
        config (dict[str, Any]): Loaded configuration mapping, usually from
            :func:`blockstream.infra.config.load_config`.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping."""
        return self._config

    def get_stream_config(self) -> StreamConfig:
        """Build a StreamConfig from the ``general`` table.

        Returns:
            StreamConfig: Resolved stream configuration.

        Raises:
            ValueError: If a size is not a positive integer.
        """
        cfg = self._gen_cfg()
        defaults = StreamConfig()
        return StreamConfig(
            buffer_blocks=self._positive_int(cfg, "buffer_blocks", defaults.buffer_blocks),
            chunk_size=self._positive_int(cfg, "chunk_size", defaults.chunk_size),
        )

    def get_cipher_config(self) -> CipherConfig:
        """Build a CipherConfig from the ``general`` table.

        Raises:
            ValueError: If the algorithm is not supported.
        """
        algorithm = str(self._gen_cfg().get("algorithm", CipherConfig.algorithm)).lower()
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        return CipherConfig(algorithm=algorithm)

    def _gen_cfg(self) -> dict[str, Any]:
        return self._config.get("general") or {}

    @staticmethod
    def _positive_int(cfg: dict[str, Any], key: str, default: int) -> int:
        value = cfg.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")
        return value
