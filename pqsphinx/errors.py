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
error classes for construction and mix decryption of sphinx packets
"""


class SphinxError(Exception):
    pass


class KeyMismatchError(SphinxError):
    """
    a key of the wrong size or purpose was handed to a primitive
    """


# mix node errors, every one of these means the packet is dropped

class PacketDropError(SphinxError):
    pass


class IncorrectMACError(PacketDropError):
    pass


class ReplayError(PacketDropError):
    pass


class CorruptMessageError(PacketDropError):
    pass


class PacketDecodeError(PacketDropError):
    pass


class KEMCiphertextSizeMismatchError(PacketDecodeError):
    pass


class RoutingInfoSizeMismatchError(PacketDecodeError):
    pass


class SphinxBodySizeMismatchError(PacketDecodeError):
    pass


class RoutingCommandDecodeError(PacketDecodeError):
    pass


class InvalidMessageTypeError(PacketDecodeError):
    pass


# client errors

class SphinxPreconditionError(SphinxError):
    pass


class InvalidRouteError(SphinxPreconditionError):
    pass


class InvalidPublicKeyError(SphinxPreconditionError):
    pass


class SphinxMessageTooLargeError(SphinxPreconditionError):
    pass


class InvalidMessageError(SphinxPreconditionError):
    pass
