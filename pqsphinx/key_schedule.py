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
The per-hop key schedule: every key a hop needs is derived from the
KEM shared secret with its own domain separation prefix.
"""

import attr

from pqsphinx.keys import IntegrityKey, RoutingInfoKey, PayloadKey, PAYLOAD_KEY_SIZE
from pqsphinx.crypto_primitives import SphinxDigest, SphinxStreamCipher, SHARED_SECRET_SIZE


# prefixes which are prefixed to data before hashing
STREAM_CIPHER_HASH_PREFIX = b'\x22'
HMAC_HASH_PREFIX = b'\x33'
BLOCK_CIPHER_HASH_PREFIX = b'\x44'
REPLAY_HASH_PREFIX = b'\x55'


@attr.s(frozen=True)
class KDFOutput(object):
    """
    I am the bundle of keys derived for one hop.
    """
    integrity_key = attr.ib(validator=attr.validators.instance_of(IntegrityKey))
    routing_info_key = attr.ib(validator=attr.validators.instance_of(RoutingInfoKey))
    payload_key = attr.ib(validator=attr.validators.instance_of(PayloadKey))


def create_hmac_key(shared_secret):
    "Compute a hash of the shared secret to use as a key for the MAC"
    digest = SphinxDigest()
    return IntegrityKey(digest.hash(HMAC_HASH_PREFIX + shared_secret))


def create_stream_cipher_key(shared_secret):
    digest = SphinxDigest()
    return RoutingInfoKey(digest.hash(STREAM_CIPHER_HASH_PREFIX + shared_secret))


def create_block_cipher_key(shared_secret):
    """
    Compute a LIONESS key using the shared secret; the key is longer
    than a digest so it is expanded with the stream cipher.
    """
    digest = SphinxDigest()
    stream_cipher = SphinxStreamCipher()
    seed = digest.hash(BLOCK_CIPHER_HASH_PREFIX + shared_secret)
    return PayloadKey(stream_cipher.generate_stream(seed, PAYLOAD_KEY_SIZE))


def derive_keys(shared_secret):
    """
    derive_keys is deterministic: equal shared secrets always give
    bit identical keys, which is what lets the sender and each relay
    agree.

    :param bytes shared_secret: a KEM shared secret.

    :returns: a KDFOutput.
    """
    assert isinstance(shared_secret, bytes) and len(shared_secret) == SHARED_SECRET_SIZE
    return KDFOutput(
        integrity_key=create_hmac_key(shared_secret),
        routing_info_key=create_stream_cipher_key(shared_secret),
        payload_key=create_block_cipher_key(shared_secret),
    )


def hash_replay(shared_secret):
    "Compute a hash of the shared secret to use to see if we've seen it before"
    digest = SphinxDigest()
    return digest.hash(REPLAY_HASH_PREFIX + shared_secret)
