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
This module includes construction of sphinx packets for senders.
"""

import os

import zope.interface

from pqsphinx.crypto_primitives import SECURITY_PARAMETER, xor
from pqsphinx.crypto_primitives import SphinxKEM, SphinxLioness, SphinxStreamCipher, SphinxDigest
from pqsphinx.key_schedule import derive_keys
from pqsphinx.params import SphinxParams, ROUTING_COMMAND_SIZE
from pqsphinx.routing import RoutingCommands, DeliverCommand, encode_routing_commands
from pqsphinx.packet import SphinxPacket
from pqsphinx.padding import add_padding
from pqsphinx.interfaces import IMixPKI, IReader
from pqsphinx.errors import InvalidRouteError, InvalidMessageError, SphinxMessageTooLargeError


@zope.interface.implementer(IReader)
class RandReader:
    def __init__(self):
        pass

    def read(self, n):
        return os.urandom(n)


def encode_payload(params, message):
    """
    prefix the message with SECURITY_PARAMETER zero bytes, which the
    exit hop checks, and pad it to the payload size
    """
    if not isinstance(message, bytes):
        raise InvalidMessageError("message must be bytes")
    if len(message) > params.max_message_size:
        raise SphinxMessageTooLargeError(
            "message is %d bytes, at most %d fit" % (len(message), params.max_message_size))
    return add_padding((b"\x00" * SECURITY_PARAMETER) + message, params.payload_size)


def create_routing_info(params, route, rand_reader):
    """
    Create the routing information, the KEM ciphertext and the
    integrity tag for the first hop of a route.

    :param SphinxParams params: An instance of SphinxParams.

    :param route: A list of relay public keys, first hop first.

    :param rand_reader: Source of entropy for padding, an IReader provider.

    :returns: a 4-tuple, the first hop's KEM ciphertext, routing info
        and integrity tag, and the list of KDFOutput for each hop.
    """
    assert isinstance(params, SphinxParams)
    route_len = len(route)
    if route_len == 0:
        raise InvalidRouteError("route must not be empty")
    if route_len > params.max_hops:
        raise InvalidRouteError("route has %d hops, at most %d allowed" % (route_len, params.max_hops))

    kem = SphinxKEM()
    digest = SphinxDigest()
    stream_cipher = SphinxStreamCipher()
    routing_info_size = params.routing_info_size
    stream_size = params.routing_info_cipher_size

    ciphertexts = []
    hop_keys = []
    for public_key in route:
        ciphertext, shared_secret = kem.encapsulate(public_key)
        ciphertexts.append(ciphertext)
        hop_keys.append(derive_keys(shared_secret))

    def keystream(i, length):
        return stream_cipher.apply(hop_keys[i].routing_info_key, b"\x00" * length)

    # Compute the filler strings; filler reproduces what each relay
    # shifts in when it strips its routing command
    filler = b''
    for i in range(1, route_len):
        filler = xor(filler + (b"\x00" * ROUTING_COMMAND_SIZE),
                     keystream(i - 1, stream_size)[stream_size - i * ROUTING_COMMAND_SIZE:])

    # the last hop's routing info
    padding = rand_reader.read(routing_info_size - route_len * ROUTING_COMMAND_SIZE)
    terminal_size = routing_info_size - (route_len - 1) * ROUTING_COMMAND_SIZE
    routing_info = xor(encode_routing_commands(DeliverCommand()) + padding,
                       keystream(route_len - 1, terminal_size)) + filler
    integrity_tag = digest.hmac(hop_keys[route_len - 1].integrity_key, routing_info)

    for i in range(route_len - 2, -1, -1):
        commands = RoutingCommands(
            next_kem_ciphertext=ciphertexts[i + 1],
            next_integrity_tag=integrity_tag,
            next_hop_public_key=route[i + 1],
            next_routing_info=routing_info,
        )
        routing_info = xor(encode_routing_commands(commands)[:routing_info_size],
                           keystream(i, routing_info_size))
        integrity_tag = digest.hmac(hop_keys[i].integrity_key, routing_info)

    return ciphertexts[0], routing_info, integrity_tag, hop_keys


def create_forward_packet(params, route, message, rand_reader):
    """
    Create a new SphinxPacket, a forward message.

    :param SphinxParams params: An instance of SphinxParams.

    :param route: A list of relay public keys, first hop first.

    :param message: The plaintext message.

    :param rand_reader: Source of entropy, an IReader provider.

    :returns: a SphinxPacket addressed to the first hop.
    """
    payload = encode_payload(params, message)
    kem_ciphertext, routing_info, integrity_tag, hop_keys = create_routing_info(params, route, rand_reader)

    # Compute the payload, innermost layer first
    block_cipher = SphinxLioness()
    for keys in reversed(hop_keys):
        payload = block_cipher.encrypt(keys.payload_key, payload)

    return SphinxPacket(kem_ciphertext, routing_info, integrity_tag, payload)


class SphinxClient:
    """
    I build sphinx packets for routes named by node ID,
    looking up relay public keys in a PKI.
    """

    def __init__(self, params, pki, rand_reader=None):
        assert isinstance(params, SphinxParams)
        assert IMixPKI.providedBy(pki)
        self.params = params
        self.pki = pki
        if rand_reader is None:
            rand_reader = RandReader()
        assert IReader.providedBy(rand_reader)
        self.rand_reader = rand_reader

    def forward_message(self, route, message):
        """
        :param route: A list of node IDs known to the PKI.

        :param message: The plaintext message.

        :returns: a SphinxPacket for route[0].
        """
        public_keys = [self.pki.get(node_id) for node_id in route]
        return create_forward_packet(self.params, public_keys, message, self.rand_reader)
