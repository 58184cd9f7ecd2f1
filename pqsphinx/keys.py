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
Purpose-typed symmetric keys. Each per-hop key is wrapped in its
own type so that a key derived for one primitive is never accepted
by another.
"""

import attr

from pqsphinx.errors import KeyMismatchError


INTEGRITY_KEY_SIZE = 32
ROUTING_INFO_KEY_SIZE = 32
# LIONESS uses two ChaCha20 keys and two keyed BLAKE2b keys
PAYLOAD_KEY_SIZE = 4 * 32


def key_of_size(size):
    """
    validator factory for a key of exactly `size` bytes
    """
    def validator(instance, attribute, value):
        if not isinstance(value, bytes) or len(value) != size:
            raise KeyMismatchError("%s must be a %d byte value" % (type(instance).__name__, size))
    return validator


@attr.s(frozen=True)
class IntegrityKey(object):
    """
    I key the MAC over a hop's routing information.
    """
    key = attr.ib(validator=key_of_size(INTEGRITY_KEY_SIZE), repr=False)


@attr.s(frozen=True)
class RoutingInfoKey(object):
    """
    I key the stream cipher that hides a hop's routing information.
    """
    key = attr.ib(validator=key_of_size(ROUTING_INFO_KEY_SIZE), repr=False)


@attr.s(frozen=True)
class PayloadKey(object):
    """
    I key the LIONESS wide-block cipher applied to the payload.
    """
    key = attr.ib(validator=key_of_size(PAYLOAD_KEY_SIZE), repr=False)


def require_key(key, key_type):
    if not isinstance(key, key_type):
        raise KeyMismatchError("expected %s, got %s" % (key_type.__name__, type(key).__name__))
    return key.key
