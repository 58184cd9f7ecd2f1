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
Encoding and decoding of the routing commands a relay recovers when
it decrypts the routing information of a sphinx packet.
"""

import attr

from pqsphinx.params import ROUTING_COMMAND_SIZE
from pqsphinx.crypto_primitives import SECURITY_PARAMETER, KEM_CIPHERTEXT_SIZE, KEM_PUBLIC_KEY_SIZE
from pqsphinx.errors import RoutingCommandDecodeError, InvalidMessageTypeError


FORWARD_MARKER = b"\xff"
DELIVER_MARKER = b"\x00"


def is_size(size):
    def validator(instance, attribute, value):
        if not isinstance(value, bytes) or len(value) != size:
            raise ValueError("%s must be a %d byte value" % (attribute.name, size))
    return validator


@attr.s(frozen=True)
class RoutingCommands(object):
    """
    I tell a relay where to forward the packet it just unwrapped.
    """
    next_kem_ciphertext = attr.ib(validator=is_size(KEM_CIPHERTEXT_SIZE))
    next_integrity_tag = attr.ib(validator=is_size(SECURITY_PARAMETER))
    next_hop_public_key = attr.ib(validator=is_size(KEM_PUBLIC_KEY_SIZE))
    next_routing_info = attr.ib(validator=attr.validators.instance_of(bytes))


@attr.s(frozen=True)
class DeliverCommand(object):
    """
    I tell the last relay on a route to deliver the payload.
    """


def encode_routing_commands(command):
    """
    serialize a RoutingCommands or DeliverCommand; a deliver command
    occupies exactly one routing command block.
    """
    if isinstance(command, DeliverCommand):
        return DELIVER_MARKER + b"\x00" * (ROUTING_COMMAND_SIZE - 1)
    assert isinstance(command, RoutingCommands)
    return b"".join((FORWARD_MARKER,
                     command.next_kem_ciphertext,
                     command.next_integrity_tag,
                     command.next_hop_public_key,
                     command.next_routing_info))


def decode_routing_commands(raw):
    """
    inverse of encode_routing_commands.

    :returns: a RoutingCommands or a DeliverCommand.
    """
    if len(raw) < ROUTING_COMMAND_SIZE:
        raise RoutingCommandDecodeError()
    marker = raw[:1]
    if marker == DELIVER_MARKER:
        return DeliverCommand()
    if marker != FORWARD_MARKER:
        raise InvalidMessageTypeError()
    offset = 1
    next_kem_ciphertext = raw[offset:offset + KEM_CIPHERTEXT_SIZE]
    offset += KEM_CIPHERTEXT_SIZE
    next_integrity_tag = raw[offset:offset + SECURITY_PARAMETER]
    offset += SECURITY_PARAMETER
    next_hop_public_key = raw[offset:offset + KEM_PUBLIC_KEY_SIZE]
    offset += KEM_PUBLIC_KEY_SIZE
    return RoutingCommands(
        next_kem_ciphertext=next_kem_ciphertext,
        next_integrity_tag=next_integrity_tag,
        next_hop_public_key=next_hop_public_key,
        next_routing_info=raw[offset:],
    )
