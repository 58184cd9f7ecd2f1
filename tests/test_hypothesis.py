# -*- coding: utf-8 -*-

import pytest
from hypothesis import given, settings, HealthCheck
from hypothesis.strategies import binary, integers

from pqsphinx import SphinxPacket, SphinxParams, sphinx_packet_unwrap, PacketReplayCacheDict
from pqsphinx import RoutingCommands, encode_routing_commands, decode_routing_commands
from pqsphinx import add_padding, remove_padding, create_forward_packet, RandReader
from pqsphinx import SphinxKEM, SphinxDigest, derive_keys
from pqsphinx.errors import SphinxBodySizeMismatchError, IncorrectMACError


PARAMS = SphinxParams(max_hops=2, payload_size=1024)


@pytest.fixture(scope="session")
def first_hop(key_states):
    """
    a two hop packet and the keys its first relay derives from it
    """
    route = [k.get_public_key() for k in key_states[:2]]
    packet = create_forward_packet(PARAMS, route, b"tamper target", RandReader())
    shared_secret = SphinxKEM().decapsulate(key_states[0].get_private_key(), packet.kem_ciphertext)
    return packet, derive_keys(shared_secret)


@given(
    binary(),
    binary(),
    binary(),
    binary(max_size=1023),
)
def test_hypothesis_toosmall_body_size(key_states, kem_ciphertext, routing_info, integrity_tag, payload):
    packet = SphinxPacket(kem_ciphertext, routing_info, integrity_tag, payload)
    replay_cache = PacketReplayCacheDict()
    with pytest.raises(SphinxBodySizeMismatchError):
        sphinx_packet_unwrap(PARAMS, key_states[0], packet, replay_cache)


@given(
    binary(),
    binary(),
    binary(),
    binary(min_size=1025),
)
def test_hypothesis_toobig_body_size(key_states, kem_ciphertext, routing_info, integrity_tag, payload):
    packet = SphinxPacket(kem_ciphertext, routing_info, integrity_tag, payload)
    replay_cache = PacketReplayCacheDict()
    with pytest.raises(SphinxBodySizeMismatchError):
        sphinx_packet_unwrap(PARAMS, key_states[0], packet, replay_cache)


@settings(max_examples=20, deadline=None, suppress_health_check=[HealthCheck.large_base_example])
@given(
    binary(min_size=1088, max_size=1088),
    binary(min_size=PARAMS.routing_info_size, max_size=PARAMS.routing_info_size),
    binary(min_size=16, max_size=16),
    binary(min_size=1024, max_size=1024),
)
def test_hypothesis_incorrect_mac(key_states, kem_ciphertext, routing_info, integrity_tag, payload):
    packet = SphinxPacket(kem_ciphertext, routing_info, integrity_tag, payload)
    replay_cache = PacketReplayCacheDict()
    with pytest.raises(IncorrectMACError):
        sphinx_packet_unwrap(PARAMS, key_states[0], packet, replay_cache)
    assert replay_cache.cache == {}


@given(
    binary(min_size=1088, max_size=1088),
    binary(min_size=16, max_size=16),
    binary(min_size=1184, max_size=1184),
    binary(max_size=512),
)
def test_hypothesis_routing_commands(kem_ciphertext, integrity_tag, public_key, routing_info):
    commands = RoutingCommands(kem_ciphertext, integrity_tag, public_key, routing_info)
    assert decode_routing_commands(encode_routing_commands(commands)) == commands


@given(integers(min_value=4, max_value=2048).flatmap(
    lambda size: binary(min_size=1, max_size=size - 3).map(lambda message: (size, message))))
def test_hypothesis_padding(size_and_message):
    block_size, message = size_and_message
    padded = add_padding(message, block_size)
    assert len(padded) == block_size
    assert remove_padding(padded) == message


@settings(deadline=None)
@given(integers(min_value=0, max_value=PARAMS.routing_info_size * 8 - 1))
def test_hypothesis_routing_info_bit_flip(first_hop, bit):
    packet, keys = first_hop
    digest = SphinxDigest()
    routing_info = bytearray(packet.routing_info)
    routing_info[bit // 8] ^= 1 << (bit % 8)
    assert not digest.verify_hmac(keys.integrity_key, bytes(routing_info), packet.integrity_tag)
    assert digest.verify_hmac(keys.integrity_key, packet.routing_info, packet.integrity_tag)
