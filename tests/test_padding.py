
import binascii

import pytest

from pqsphinx.padding import add_padding, remove_padding
from pqsphinx.errors import CorruptMessageError, SphinxMessageTooLargeError


def test_add_padding():
    message = b"the quick brown fox"
    padded = add_padding(message, 100)
    want = binascii.unhexlify("74686520717569636b2062726f776e20666f78000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000000005100")
    assert padded == want
    unpadded = remove_padding(padded)
    assert unpadded == message


def test_add_padding_largest_message():
    message = b"M" * 97
    padded = add_padding(message, 100)
    assert len(padded) == 100
    assert remove_padding(padded) == message


def test_add_padding_too_large():
    with pytest.raises(SphinxMessageTooLargeError):
        add_padding(b"M" * 98, 100)
    with pytest.raises(SphinxMessageTooLargeError):
        add_padding(b"", 100)


def test_remove_padding_corrupt():
    with pytest.raises(CorruptMessageError):
        remove_padding(b"A" * 98 + b"\xff\xff")
    with pytest.raises(CorruptMessageError):
        remove_padding(b"A" * 98 + b"\x02\x00")
    with pytest.raises(CorruptMessageError):
        remove_padding(b"\x05")
