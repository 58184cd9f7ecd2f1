
import binascii

from pqsphinx.key_schedule import derive_keys, hash_replay, create_stream_cipher_key
from pqsphinx.key_schedule import create_hmac_key, create_block_cipher_key
from pqsphinx.crypto_primitives import SphinxDigest, SphinxStreamCipher, SphinxLioness
from pqsphinx.keys import IntegrityKey, RoutingInfoKey, PayloadKey


SECRET = binascii.unhexlify("56f7f7946e62a79f2a4440cc5ca459a9d1b080c5972014c782230fa38cfe8277")


def test_create_stream_cipher_key():
    key = create_stream_cipher_key(SECRET)
    want = binascii.unhexlify("44cbf1428c9e7f6915cb923e55e0835cfcf778822abbf323dee0fa4c76dde986")
    assert key == RoutingInfoKey(want)


def test_create_hmac_key():
    key = create_hmac_key(SECRET)
    want = binascii.unhexlify("1db6f24cadd67e955857f87edd48b715cd93f52621159bd05269e75fba3f9c19")
    assert key == IntegrityKey(want)


def test_stream_cipher_key_expansion():
    stream_cipher = SphinxStreamCipher()
    stream = stream_cipher.generate_stream(create_stream_cipher_key(SECRET).key, 128)
    want = binascii.unhexlify(
        "8c8efb9ab5606f3ba6c4c2ec57f4c751147088dbab36fd464a561668472830480b409b9c0b3b4e64"
        "ab1f5542959fc24ca4b87c4927fd95eba14c541b18c59770fb0503288dd033f6c82542ad83618af3"
        "efa9ac6962892774b9c139832e307f5df711f505b5992fa09553259827769ba913fd36038ab15b75"
        "3056124b9631e767")
    assert stream == want


def test_create_block_cipher_key():
    # BLAKE2b-256(0x44 || secret) expanded to 128 bytes of ChaCha20 keystream
    key = create_block_cipher_key(SECRET)
    want = binascii.unhexlify(
        "25b89549ba80349707731d6ecc9115a27f0b71eaf1fd3841b183527c95e29f8cae49df2737905b29"
        "6442301933ad877def657054a19fe6193b662f2f3b6a05086434020921ea75d0f591908a77d09536"
        "cbe2ff921f1e8cad69fcd4691c804ae61aa58870e72524f7b80bc1be717e12395bb54bd00e22af25"
        "f4322ed3e98d9855")
    assert key == PayloadKey(want)
    assert derive_keys(SECRET).payload_key.key == want


def test_derive_keys_is_deterministic():
    assert derive_keys(SECRET) == derive_keys(bytes(SECRET))


def test_derive_keys_types():
    keys = derive_keys(SECRET)
    assert isinstance(keys.integrity_key, IntegrityKey)
    assert isinstance(keys.routing_info_key, RoutingInfoKey)
    assert isinstance(keys.payload_key, PayloadKey)


def test_distinct_secrets_give_distinct_keys():
    other = derive_keys(b"\x01" * 32)
    keys = derive_keys(SECRET)
    assert other.integrity_key != keys.integrity_key
    assert other.routing_info_key != keys.routing_info_key
    assert other.payload_key != keys.payload_key


def test_keys_are_separated():
    keys = derive_keys(SECRET)
    integrity = keys.integrity_key.key
    routing = keys.routing_info_key.key
    payload = keys.payload_key.key
    assert integrity != routing
    assert integrity not in payload
    assert routing not in payload
    assert hash_replay(SECRET) not in (integrity, routing)


def test_cross_purpose_keys_do_not_validate():
    """
    reusing the routing info key bytes as a MAC key, or the integrity
    key bytes as a stream key, must not reproduce the real outputs
    """
    digest = SphinxDigest()
    stream_cipher = SphinxStreamCipher()
    lioness = SphinxLioness()
    keys = derive_keys(SECRET)
    routing_info = b"R" * 200

    tag = digest.hmac(keys.integrity_key, routing_info)
    assert not digest.verify_hmac(IntegrityKey(keys.routing_info_key.key), routing_info, tag)

    ciphertext = stream_cipher.apply(keys.routing_info_key, routing_info)
    assert stream_cipher.apply(RoutingInfoKey(keys.integrity_key.key), ciphertext) != routing_info

    block = b"P" * 1024
    ciphertext = lioness.encrypt(keys.payload_key, block)
    swapped = PayloadKey(keys.routing_info_key.key + keys.integrity_key.key + keys.payload_key.key[64:])
    assert lioness.decrypt(swapped, ciphertext) != block
