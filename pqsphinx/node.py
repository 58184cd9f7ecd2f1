# Copyright 2016-2017 David Stainton
#
# This file is part of Sphinx.
#
# Sphinx is free software: you can redistribute it and/or modify
# it under the terms of version 3 of the GNU Lesser General Public
# License as published by the Free Software Foundation.
#
# Sphinx is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with Sphinx.  If not, see
# <http://www.gnu.org/licenses/>.


"""
This module includes cryptographic unwrapping of messages for mix net nodes
"""

import logging
import threading

import attr
import zope.interface

from pqsphinx.packet import SphinxPacket
from pqsphinx.params import SphinxParams, ROUTING_COMMAND_SIZE
from pqsphinx.padding import remove_padding
from pqsphinx.interfaces import IPacketReplayCache, IKeyState
from pqsphinx.crypto_primitives import SECURITY_PARAMETER, KEM_CIPHERTEXT_SIZE, KEM_PRIVATE_KEY_SIZE
from pqsphinx.crypto_primitives import SphinxKEM, SphinxDigest, SphinxStreamCipher, SphinxLioness
from pqsphinx.key_schedule import derive_keys, hash_replay
from pqsphinx.routing import RoutingCommands, decode_routing_commands
from pqsphinx.errors import IncorrectMACError, ReplayError, CorruptMessageError, PacketDropError
from pqsphinx.errors import KEMCiphertextSizeMismatchError, RoutingInfoSizeMismatchError
from pqsphinx.errors import SphinxBodySizeMismatchError


log = logging.getLogger(__name__)


@attr.s(frozen=True)
class UnwrappedMessage(object):
    """
    I am the returned result of calling `sphinx_packet_unwrap`.
    next_hop is a 2-tuple of the next relay's public key and the
    SphinxPacket to send it; exit_hop is the delivered plaintext.
    """
    next_hop = attr.ib(validator=attr.validators.optional(attr.validators.instance_of(tuple)))
    exit_hop = attr.ib(validator=attr.validators.optional(attr.validators.instance_of(bytes)))


@zope.interface.implementer(IPacketReplayCache)
class PacketReplayCacheDict:
    """
    I am an implementation of IPacketReplayCache,
    that uses a dict to implement our replay cache;
    this helps us detect sphinx packet replays.
    """

    def __init__(self):
        self.cache = {}
        self.lock = threading.Lock()

    def insert_if_absent(self, tag):
        with self.lock:
            if tag in self.cache:
                return False
            self.cache[tag] = True
            return True

    def has_seen(self, tag):
        with self.lock:
            return tag in self.cache

    def flush(self):
        with self.lock:
            self.cache = {}


def is_private_key(instance, attribute, value):
    if not isinstance(value, bytes) or len(value) != KEM_PRIVATE_KEY_SIZE:
        raise ValueError("must be %d byte value" % KEM_PRIVATE_KEY_SIZE)


@zope.interface.implementer(IKeyState)
@attr.s(frozen=True)
class SphinxNodeKeyState(object):
    """
    I hold a relay's ML-KEM-768 key pair for its whole lifetime;
    the public key is derived from the private key.
    """
    private_key = attr.ib(validator=is_private_key, repr=False)

    @classmethod
    def generate(cls):
        _, private_key = SphinxKEM().generate_keypair()
        return cls(private_key)

    def get_private_key(self):
        return self.private_key

    def get_public_key(self):
        return SphinxKEM().to_public(self.private_key)


def decode_payload(payload):
    """
    check the zero prefix the sender placed in front of the message
    and strip the padding; the padding covers the prefix too
    """
    if payload[:SECURITY_PARAMETER] != (b"\x00" * SECURITY_PARAMETER):
        raise CorruptMessageError()
    unpadded = remove_padding(payload)
    if len(unpadded) < SECURITY_PARAMETER:
        raise CorruptMessageError()
    return unpadded[SECURITY_PARAMETER:]


def sphinx_packet_unwrap(params, key_state, sphinx_packet, replay_cache=None):
    """
    sphinx_packet_unwrap performs the decryption operation for mixes.
    packets with bad MACs, malformed fields and replays are rejected
    by raising a PacketDropError subclass. Decapsulating with the
    wrong private key does not raise; the MAC check rejects the packet.

    :param SphinxParams params: An instance of SphinxParams.

    :param key_state: An IKeyState provider.

    :param SphinxPacket sphinx_packet: An instance of SphinxPacket.

    :param replay_cache: An IPacketReplayCache provider or None.

    :returns: an UnwrappedMessage.
    """
    assert isinstance(params, SphinxParams)
    assert IKeyState.providedBy(key_state)
    assert isinstance(sphinx_packet, SphinxPacket)
    assert replay_cache is None or IPacketReplayCache.providedBy(replay_cache)

    if len(sphinx_packet.payload) != params.payload_size:
        raise SphinxBodySizeMismatchError()
    if len(sphinx_packet.kem_ciphertext) != KEM_CIPHERTEXT_SIZE:
        raise KEMCiphertextSizeMismatchError()
    if len(sphinx_packet.routing_info) != params.routing_info_size:
        raise RoutingInfoSizeMismatchError()

    kem = SphinxKEM()
    digest = SphinxDigest()
    stream_cipher = SphinxStreamCipher()
    block_cipher = SphinxLioness()

    shared_secret = kem.decapsulate(key_state.get_private_key(), sphinx_packet.kem_ciphertext)
    keys = derive_keys(shared_secret)
    if not digest.verify_hmac(keys.integrity_key, sphinx_packet.routing_info, sphinx_packet.integrity_tag):
        raise IncorrectMACError()
    if replay_cache is not None and not replay_cache.insert_if_absent(hash_replay(shared_secret)):
        raise ReplayError()

    routing_commands = stream_cipher.apply(keys.routing_info_key,
                                           sphinx_packet.routing_info + (b"\x00" * ROUTING_COMMAND_SIZE))
    payload = block_cipher.decrypt(keys.payload_key, sphinx_packet.payload)
    command = decode_routing_commands(routing_commands)

    if isinstance(command, RoutingCommands):
        unwrapped_sphinx_packet = SphinxPacket(
            kem_ciphertext=command.next_kem_ciphertext,
            routing_info=command.next_routing_info,
            integrity_tag=command.next_integrity_tag,
            payload=payload,
        )
        return UnwrappedMessage(next_hop=(command.next_hop_public_key, unwrapped_sphinx_packet), exit_hop=None)
    return UnwrappedMessage(next_hop=None, exit_hop=decode_payload(payload))


class SphinxNode:
    """
    I am a mix relay. I own one key pair for my whole lifetime and
    process each packet independently; packets that fail any check
    are dropped.
    """

    def __init__(self, params, key_state, replay_cache=None, logger=log):
        assert isinstance(params, SphinxParams)
        assert IKeyState.providedBy(key_state)
        self.params = params
        self.key_state = key_state
        self.replay_cache = replay_cache
        self.logger = logger

    @property
    def public_key(self):
        return self.key_state.get_public_key()

    def process(self, sphinx_packet):
        """
        :returns: an UnwrappedMessage, or None if the packet was dropped.
        """
        try:
            return sphinx_packet_unwrap(self.params, self.key_state, sphinx_packet, self.replay_cache)
        except ReplayError:
            self.logger.debug("dropping sphinx packet: replay")
        except PacketDropError:
            self.logger.debug("dropping sphinx packet: integrity failure")
        return None

    def process_raw(self, raw_packet):
        try:
            sphinx_packet = SphinxPacket.from_raw_bytes(self.params, raw_packet)
        except PacketDropError:
            self.logger.debug("dropping sphinx packet: integrity failure")
            return None
        return self.process(sphinx_packet)
