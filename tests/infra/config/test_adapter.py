import pytest

from blockstream.infra.config import ConfigAdapter
from blockstream.schemas import CipherConfig, StreamConfig


def test_defaults_when_general_missing():
    adapter = ConfigAdapter({})
    assert adapter.get_stream_config() == StreamConfig()
    assert adapter.get_cipher_config() == CipherConfig()


def test_general_overrides():
    adapter = ConfigAdapter(
        {"general": {"buffer_blocks": 4, "chunk_size": 512, "algorithm": "DES3"}}
    )
    assert adapter.get_stream_config() == StreamConfig(buffer_blocks=4, chunk_size=512)
    assert adapter.get_cipher_config() == CipherConfig(algorithm="des3")


@pytest.mark.parametrize("value", [0, -1, "64", 1.5, True])
def test_invalid_sizes(value):
    adapter = ConfigAdapter({"general": {"buffer_blocks": value}})
    with pytest.raises(ValueError):
        adapter.get_stream_config()


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        ConfigAdapter({"general": {"algorithm": "blowfish"}}).get_cipher_config()


def test_get_config_returns_copy_of_input():
    raw = {"general": {}}
    adapter = ConfigAdapter(raw)
    assert adapter.get_config() == raw
    assert adapter.get_config() is not raw


def test_package_exports_config_helpers():
    from blockstream.infra import config

    assert set(config.__all__) == {
        "ConfigAdapter",
        "copy_default_config",
        "load_config",
        "save_config",
        "save_config_file",
    }
    assert callable(config.save_config)
