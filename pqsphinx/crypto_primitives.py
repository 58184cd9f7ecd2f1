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
This module holds the primitive suite used to encrypt/decrypt
post-quantum sphinx mixnet packets: an ML-KEM-768 key encapsulation
mechanism, the LIONESS wide-block cipher, the ChaCha20 stream cipher
and keyed BLAKE2b.
"""

from Cryptodome.Cipher import ChaCha20
from Cryptodome.Hash import BLAKE2b
from Cryptodome.Util.strxor import strxor
from kyber_py.ml_kem import ML_KEM_768

from pqsphinx.keys import IntegrityKey, RoutingInfoKey, PayloadKey, require_key
from pqsphinx.errors import InvalidPublicKeyError, KEMCiphertextSizeMismatchError, KeyMismatchError


# Sphinx provides 128 bits of security; this is also the MAC tag length
SECURITY_PARAMETER = 16

# ML-KEM-768 sizes, FIPS 203 table 3
KEM_PUBLIC_KEY_SIZE = 1184
KEM_PRIVATE_KEY_SIZE = 2400
KEM_CIPHERTEXT_SIZE = 1088
SHARED_SECRET_SIZE = 32

# the decapsulation key is dk_pke || ek || H(ek) || z
KEM_PUBLIC_KEY_OFFSET = 384 * 3

HASH_SIZE = 32
STREAM_KEY_SIZE = 32


def xor(str1, str2):
    # XOR two strings
    assert len(str1) == len(str2)
    return bytes(strxor(str1, str2))


class SphinxKEM:
    """
    ML-KEM-768 key encapsulation.

    Decapsulation under the wrong private key does not fail: FIPS 203
    implicit rejection returns an unrelated shared secret which the
    caller's MAC check then rejects.
    """

    def generate_keypair(self):
        public_key, private_key = ML_KEM_768.keygen()
        return public_key, private_key

    def to_public(self, private_key):
        """
        derive the public (encapsulation) key from a private key
        """
        if not isinstance(private_key, bytes) or len(private_key) != KEM_PRIVATE_KEY_SIZE:
            raise KeyMismatchError("private key must be a %d byte value" % KEM_PRIVATE_KEY_SIZE)
        return private_key[KEM_PUBLIC_KEY_OFFSET:KEM_PUBLIC_KEY_OFFSET + KEM_PUBLIC_KEY_SIZE]

    def encapsulate(self, public_key):
        """
        returns a 2-tuple, the KEM ciphertext and a fresh shared secret
        """
        if not isinstance(public_key, bytes) or len(public_key) != KEM_PUBLIC_KEY_SIZE:
            raise InvalidPublicKeyError("public key must be a %d byte value" % KEM_PUBLIC_KEY_SIZE)
        try:
            shared_secret, ciphertext = ML_KEM_768.encaps(public_key)
        except ValueError as e:
            raise InvalidPublicKeyError(str(e))
        return ciphertext, shared_secret

    def decapsulate(self, private_key, ciphertext):
        if not isinstance(private_key, bytes) or len(private_key) != KEM_PRIVATE_KEY_SIZE:
            raise KeyMismatchError("private key must be a %d byte value" % KEM_PRIVATE_KEY_SIZE)
        if len(ciphertext) != KEM_CIPHERTEXT_SIZE:
            raise KEMCiphertextSizeMismatchError()
        return ML_KEM_768.decaps(private_key, ciphertext)


class SphinxStreamCipher:

    def _cipher(self, key):
        assert len(key) == STREAM_KEY_SIZE
        nonce = b"\x00" * 8  # it's OK to use zero nonce because we only use it once
        return ChaCha20.new(key=key, nonce=nonce)

    def generate_stream(self, key, length):
        """
        The PRG; key is 32 bytes, output is of size length
        """
        return self._cipher(key).encrypt(b"\x00" * length)

    def apply(self, key, data):
        """
        XOR the keystream of a RoutingInfoKey into data;
        applying it twice is the identity.
        """
        raw_key = require_key(key, RoutingInfoKey)
        return self._cipher(raw_key).encrypt(data)


class SphinxDigest:

    def hash(self, data, digest_size=HASH_SIZE):
        b = BLAKE2b.new(digest_bits=digest_size * 8)
        b.update(data)
        return b.digest()

    def keyed_hash(self, key, data, digest_size=HASH_SIZE):
        b = BLAKE2b.new(digest_bits=digest_size * 8, key=key)
        b.update(data)
        return b.digest()

    def hmac(self, key, data):
        """
        key is an IntegrityKey
        output is of length SECURITY_PARAMETER
        """
        raw_key = require_key(key, IntegrityKey)
        return self.keyed_hash(raw_key, data, digest_size=SECURITY_PARAMETER)

    def verify_hmac(self, key, data, tag):
        """
        constant time comparison of tag against the MAC of data
        """
        raw_key = require_key(key, IntegrityKey)
        b = BLAKE2b.new(digest_bits=SECURITY_PARAMETER * 8, key=raw_key)
        b.update(data)
        try:
            b.verify(tag)
        except ValueError:
            return False
        return True


class SphinxLioness:
    """
    LIONESS (Anderson and Biham) over ChaCha20 and keyed BLAKE2b,
    a super-pseudorandom permutation over blocks of any size larger
    than the BLAKE2b digest.
    """
    KEY_LEN = 4 * STREAM_KEY_SIZE
    MIN_BLOCK_SIZE = HASH_SIZE + 1

    def __init__(self):
        self.stream_cipher = SphinxStreamCipher()
        self.digest = SphinxDigest()

    def _subkeys(self, key):
        raw_key = require_key(key, PayloadKey)
        return [raw_key[i:i + STREAM_KEY_SIZE] for i in range(0, self.KEY_LEN, STREAM_KEY_SIZE)]

    def _stream_round(self, left, right, key):
        return xor(right, self.stream_cipher.generate_stream(xor(left, key), len(right)))

    def _hash_round(self, left, right, key):
        return xor(left, self.digest.keyed_hash(key, right))

    def encrypt(self, key, block):
        k1, k2, k3, k4 = self._subkeys(key)
        assert len(block) >= self.MIN_BLOCK_SIZE
        left, right = block[:HASH_SIZE], block[HASH_SIZE:]
        right = self._stream_round(left, right, k1)
        left = self._hash_round(left, right, k2)
        right = self._stream_round(left, right, k3)
        left = self._hash_round(left, right, k4)
        return left + right

    def decrypt(self, key, block):
        k1, k2, k3, k4 = self._subkeys(key)
        assert len(block) >= self.MIN_BLOCK_SIZE
        left, right = block[:HASH_SIZE], block[HASH_SIZE:]
        left = self._hash_round(left, right, k4)
        right = self._stream_round(left, right, k3)
        left = self._hash_round(left, right, k2)
        right = self._stream_round(left, right, k1)
        return left + right
