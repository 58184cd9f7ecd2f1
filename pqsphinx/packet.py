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


import attr

from pqsphinx.params import SphinxParams


@attr.s(frozen=True)
class SphinxPacket(object):
    """
    I am a decoded sphinx packet. My four fields keep the same sizes
    at every hop of a route.
    """
    kem_ciphertext = attr.ib(validator=attr.validators.instance_of(bytes))
    routing_info = attr.ib(validator=attr.validators.instance_of(bytes))
    integrity_tag = attr.ib(validator=attr.validators.instance_of(bytes))
    payload = attr.ib(validator=attr.validators.instance_of(bytes))

    def get_raw_bytes(self):
        """
        Get all the bytes.
        """
        return b"".join((self.kem_ciphertext, self.routing_info,
                         self.integrity_tag, self.payload))

    @classmethod
    def from_raw_bytes(cls, params, raw_packet):
        """
        Create a SphinxPacket given the raw bytes and
        an instance of SphinxParams.
        """
        assert isinstance(params, SphinxParams)
        kem_ciphertext, routing_info, integrity_tag, payload = params.elements_from_raw_bytes(raw_packet)
        return cls(kem_ciphertext, routing_info, integrity_tag, payload)
