import pytest
import zope.interface

from pqsphinx import SphinxParams, SphinxNodeKeyState, IMixPKI


@zope.interface.implementer(IMixPKI)
class DummyPKI(object):

    def __init__(self):
        self.node_map = {}
        self.addr_map = {}

    def set(self, node_id, pub_key, addr):
        assert node_id not in self.node_map.keys()
        self.node_map[node_id] = pub_key
        self.addr_map[node_id] = addr

    def get(self, node_id):
        return self.node_map[node_id]

    def identities(self):
        return list(self.node_map.keys())


@pytest.fixture
def params():
    return SphinxParams(max_hops=5, payload_size=1024)


@pytest.fixture(scope="session")
def key_states():
    """
    ML-KEM key generation is slow in pure python, so the relay
    key pairs are shared by the whole session.
    """
    return [SphinxNodeKeyState.generate() for _ in range(5)]


@pytest.fixture(scope="session")
def pki(key_states):
    pki = DummyPKI()
    for i, key_state in enumerate(key_states):
        pki.set(b"\xff" + bytes([i]) * 15, key_state.get_public_key(), i)
    return pki
