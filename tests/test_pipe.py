from __future__ import annotations

import gc
import io
import random

import pytest

from blockstream.cipher import AES, DES3
from blockstream.errors import UnexpectedEOFError
from blockstream.iv import random_iv
from blockstream.pipe import decrypt_stream, encrypt_stream
from blockstream.schemas import StreamConfig

KEY = b"0123456789abcdef0123456789abcdef"

_rng = random.Random(20251123)


def randbytes(n: int) -> bytes:
    return bytes(_rng.randrange(0, 256) for _ in range(n))


@pytest.mark.parametrize("size", [0, 1, 15, 16, 17, 1000, 5000])
@pytest.mark.parametrize(
    "config",
    [StreamConfig(), StreamConfig(buffer_blocks=1, chunk_size=7)],
)
def test_pipe_round_trip(size, config):
    msg = randbytes(size)
    iv = random_iv(AES)

    ct = io.BytesIO()
    pad = encrypt_stream(io.BytesIO(msg), ct, AES.new_encrypter(KEY, iv), config=config)
    assert pad == (-size) % 16
    assert len(ct.getvalue()) == size + pad

    out = io.BytesIO()
    n = decrypt_stream(
        io.BytesIO(ct.getvalue()),
        out,
        AES.new_decrypter(KEY, iv),
        pad,
        config=config,
    )
    assert n == size
    assert out.getvalue() == msg


def test_pipe_with_des3():
    key = bytes.fromhex("0123456789abcdeffedcba9876543210")
    iv = random_iv(DES3)
    msg = b"eight-byte blocks, odd length!"

    ct = io.BytesIO()
    pad = encrypt_stream(io.BytesIO(msg), ct, DES3.new_encrypter(key, iv))
    out = io.BytesIO()
    decrypt_stream(io.BytesIO(ct.getvalue()), out, DES3.new_decrypter(key, iv), pad)

    assert out.getvalue() == msg


def test_pipe_without_padding_keeps_zeros():
    ct = io.BytesIO()
    pad = encrypt_stream(io.BytesIO(b"abc"), ct, AES.new_encrypter(KEY))
    out = io.BytesIO()
    decrypt_stream(io.BytesIO(ct.getvalue()), out, AES.new_decrypter(KEY))

    assert out.getvalue() == b"abc" + b"\x00" * pad


def test_decrypt_stream_rejects_bad_padding():
    with pytest.raises(ValueError):
        decrypt_stream(io.BytesIO(), io.BytesIO(), AES.new_decrypter(KEY), 16)
    with pytest.raises(ValueError):
        decrypt_stream(io.BytesIO(), io.BytesIO(), AES.new_decrypter(KEY), -1)


def test_decrypt_stream_padding_longer_than_data():
    with pytest.raises(UnexpectedEOFError):
        decrypt_stream(io.BytesIO(), io.BytesIO(), AES.new_decrypter(KEY), 3)


def test_decrypt_stream_truncated_ciphertext():
    ct = io.BytesIO()
    encrypt_stream(io.BytesIO(b"x" * 40), ct, AES.new_encrypter(KEY))
    with pytest.raises(UnexpectedEOFError):
        decrypt_stream(io.BytesIO(ct.getvalue()[:-1]), io.BytesIO(), AES.new_decrypter(KEY))


def test_pipe_with_files(tmp_path):
    src = tmp_path / "plain.bin"
    enc = tmp_path / "plain.enc"
    dst = tmp_path / "plain.out"
    src.write_bytes(randbytes(3000))
    iv = random_iv(16)

    with src.open("rb") as fin, enc.open("wb") as fout:
        pad = encrypt_stream(fin, fout, AES.new_encrypter(KEY, iv))
    with enc.open("rb") as fin, dst.open("wb") as fout:
        decrypt_stream(fin, fout, AES.new_decrypter(KEY, iv), pad)

    assert dst.read_bytes() == src.read_bytes()


class FailingSource:
    """Plaintext source that raises on its second read."""

    def __init__(self, data: bytes) -> None:
        self._f = io.BytesIO(data)
        self.calls = 0

    def read(self, size: int) -> bytes:
        self.calls += 1
        if self.calls > 1:
            raise OSError("source went away")
        return self._f.read(size)


def test_encrypt_stream_source_failure_writes_no_padded_block():
    sink = io.BytesIO()
    config = StreamConfig(chunk_size=5)

    with pytest.raises(OSError, match="source went away"):
        encrypt_stream(FailingSource(b"abcdefghij"), sink, AES.new_encrypter(KEY), config=config)
    gc.collect()

    assert sink.getvalue() == b""


def test_encrypt_stream_source_failure_keeps_flushed_blocks_only():
    sink = io.BytesIO()
    config = StreamConfig(buffer_blocks=1, chunk_size=20)

    with pytest.raises(OSError):
        encrypt_stream(FailingSource(randbytes(40)), sink, AES.new_encrypter(KEY), config=config)
    gc.collect()

    # 20 bytes read before the failure: one full block flushed, 4 bytes dropped
    assert len(sink.getvalue()) == 16
