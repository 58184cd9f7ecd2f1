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


import struct

from pqsphinx.errors import CorruptMessageError, SphinxMessageTooLargeError

# the trailer holds the padding offset as a little endian uint16
TRAILER_SIZE = 2
MAX_BLOCK_SIZE = 0xffff


def add_padding(src, block_size):
    """
    add_padding appends padding to the body of a message
    and returns the padded message
    """
    assert 0 < block_size <= MAX_BLOCK_SIZE
    if len(src) == 0 or len(src) >= block_size - TRAILER_SIZE:
        raise SphinxMessageTooLargeError("%d bytes do not fit a %d byte block" % (len(src), block_size))
    offset = block_size - len(src)
    padding = b"\x00" * (offset - TRAILER_SIZE)
    offset_bytes = struct.pack('<H', offset)
    return bytes(src) + padding + offset_bytes


def remove_padding(src):
    """
    remove_padding removes the message padding
    """
    src_len = len(src)
    if src_len < TRAILER_SIZE:
        raise CorruptMessageError()
    offset = struct.unpack('<H', src[src_len - TRAILER_SIZE:])[0]
    if offset <= TRAILER_SIZE or offset >= src_len:
        raise CorruptMessageError()
    return src[:(src_len - offset)]
