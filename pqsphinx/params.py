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
This module is used to parameterize the dimensions of
post-quantum sphinx mixnet packets.
"""

import functools

import attr

from pqsphinx.crypto_primitives import SECURITY_PARAMETER, KEM_CIPHERTEXT_SIZE, KEM_PUBLIC_KEY_SIZE
from pqsphinx.crypto_primitives import SphinxLioness
from pqsphinx.padding import TRAILER_SIZE, MAX_BLOCK_SIZE
from pqsphinx.errors import PacketDecodeError


# one marker byte followed by the next hop's KEM ciphertext,
# integrity tag and public key
ROUTING_COMMAND_SIZE = 1 + KEM_CIPHERTEXT_SIZE + SECURITY_PARAMETER + KEM_PUBLIC_KEY_SIZE


def is_positive(instance, attribute, value):
    if value < 1:
        raise ValueError("%s must be positive" % attribute.name)


def is_payload_size(instance, attribute, value):
    """
    validator for a payload size that can hold a LIONESS block,
    the zero prefix and the padding trailer
    """
    smallest = max(SphinxLioness.MIN_BLOCK_SIZE, SECURITY_PARAMETER + TRAILER_SIZE + 2)
    if value < smallest or value > MAX_BLOCK_SIZE:
        raise ValueError("payload_size must be between %d and %d" % (smallest, MAX_BLOCK_SIZE))


@attr.s(frozen=True)
class SphinxParams(object):

    max_hops = attr.ib(validator=[attr.validators.instance_of(int), is_positive])
    payload_size = attr.ib(validator=[attr.validators.instance_of(int), is_payload_size])

    @property
    def routing_info_size(self):
        return self.max_hops * ROUTING_COMMAND_SIZE

    @property
    def routing_info_cipher_size(self):
        """
        i am a helper method that is used to compute the size of the
        stream cipher output used in sphinx packet operations
        """
        return self.routing_info_size + ROUTING_COMMAND_SIZE

    @property
    def max_message_size(self):
        return self.payload_size - SECURITY_PARAMETER - TRAILER_SIZE - 1

    def get_dimensions(self):
        """
        i am a helper method that returns the sphinx packet element sizes, a 4-tuple.
        e.g. payload = 1024 && 5 hops ==
        kem ciphertext 1088 routing info 11445 tag 16 payload 1024
        """
        kem_ciphertext = KEM_CIPHERTEXT_SIZE
        routing_info = self.routing_info_size
        integrity_tag = SECURITY_PARAMETER
        payload = self.payload_size
        return kem_ciphertext, routing_info, integrity_tag, payload

    def get_sphinx_forward_size(self):
        return functools.reduce(lambda a, b: a + b, self.get_dimensions(), 0)

    def elements_from_raw_bytes(self, raw_packet):
        """
        return the Sphinx packet elements, a 4-tuple of byte slices:
        kem ciphertext, routing info, integrity tag and payload.
        """
        kem_ciphertext, routing_info, integrity_tag, payload = self.get_dimensions()
        if len(raw_packet) != self.get_sphinx_forward_size():
            raise PacketDecodeError("expected %d bytes, got %d" % (self.get_sphinx_forward_size(), len(raw_packet)))
        offset = 0
        elements = []
        for size in (kem_ciphertext, routing_info, integrity_tag, payload):
            elements.append(raw_packet[offset:offset + size])
            offset += size
        return tuple(elements)
