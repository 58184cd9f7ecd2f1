
import pytest

from pqsphinx import SphinxParams, ROUTING_COMMAND_SIZE
from pqsphinx.errors import PacketDecodeError


def test_routing_command_size():
    assert ROUTING_COMMAND_SIZE == 1 + 1088 + 16 + 1184


def test_sphinx_params():
    params = SphinxParams(5, 1024)
    kem_ciphertext, routing_info, integrity_tag, payload = params.get_dimensions()
    assert kem_ciphertext == 1088
    assert routing_info == 5 * 2289
    assert integrity_tag == 16
    assert payload == 1024
    assert params.get_sphinx_forward_size() == 1088 + 11445 + 16 + 1024
    assert params.routing_info_cipher_size == 6 * 2289
    assert params.max_message_size == 1024 - 16 - 3


def test_sphinx_params_validation():
    with pytest.raises(ValueError):
        SphinxParams(0, 1024)
    with pytest.raises(TypeError):
        SphinxParams("5", 1024)
    with pytest.raises(ValueError):
        SphinxParams(5, 32)
    with pytest.raises(ValueError):
        SphinxParams(5, 0x10000)
    SphinxParams(1, 33)


def test_elements_from_raw_bytes():
    params = SphinxParams(2, 100)
    raw = b"C" * 1088 + b"R" * 4578 + b"T" * 16 + b"P" * 100
    kem_ciphertext, routing_info, integrity_tag, payload = params.elements_from_raw_bytes(raw)
    assert kem_ciphertext == b"C" * 1088
    assert routing_info == b"R" * 4578
    assert integrity_tag == b"T" * 16
    assert payload == b"P" * 100
    with pytest.raises(PacketDecodeError):
        params.elements_from_raw_bytes(raw + b"X")
    with pytest.raises(PacketDecodeError):
        params.elements_from_raw_bytes(raw[:-1])
