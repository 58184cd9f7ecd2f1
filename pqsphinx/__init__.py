"""
pqsphinx is a crypto library for writing mix nets using a
post-quantum variant of the Sphinx mix network cryptographic
packet format
"""

from pqsphinx._metadata import __version__, __author__, __contact__
from pqsphinx._metadata import __license__, __copyright__, __url__

from pqsphinx.errors import SphinxError, KeyMismatchError, PacketDropError, IncorrectMACError
from pqsphinx.errors import ReplayError, CorruptMessageError, PacketDecodeError, InvalidMessageTypeError
from pqsphinx.errors import KEMCiphertextSizeMismatchError, RoutingInfoSizeMismatchError
from pqsphinx.errors import SphinxBodySizeMismatchError, RoutingCommandDecodeError
from pqsphinx.errors import SphinxPreconditionError, InvalidRouteError, InvalidPublicKeyError
from pqsphinx.errors import SphinxMessageTooLargeError, InvalidMessageError

from pqsphinx.keys import IntegrityKey, RoutingInfoKey, PayloadKey
from pqsphinx.crypto_primitives import SECURITY_PARAMETER, SphinxKEM, SphinxLioness
from pqsphinx.crypto_primitives import SphinxStreamCipher, SphinxDigest
from pqsphinx.key_schedule import KDFOutput, derive_keys, hash_replay
from pqsphinx.params import SphinxParams, ROUTING_COMMAND_SIZE
from pqsphinx.routing import RoutingCommands, DeliverCommand
from pqsphinx.routing import encode_routing_commands, decode_routing_commands
from pqsphinx.packet import SphinxPacket
from pqsphinx.client import SphinxClient, RandReader, create_routing_info, create_forward_packet
from pqsphinx.node import sphinx_packet_unwrap, SphinxNode, SphinxNodeKeyState
from pqsphinx.node import PacketReplayCacheDict, UnwrappedMessage
from pqsphinx.padding import add_padding, remove_padding
from pqsphinx.interfaces import IReader, IMixPKI, IPacketReplayCache, IKeyState

__all__ = [
    "SECURITY_PARAMETER",
    "ROUTING_COMMAND_SIZE",

    "SphinxError",
    "KeyMismatchError",
    "PacketDropError",
    "IncorrectMACError",
    "ReplayError",
    "CorruptMessageError",
    "PacketDecodeError",
    "InvalidMessageTypeError",
    "KEMCiphertextSizeMismatchError",
    "RoutingInfoSizeMismatchError",
    "SphinxBodySizeMismatchError",
    "RoutingCommandDecodeError",
    "SphinxPreconditionError",
    "InvalidRouteError",
    "InvalidPublicKeyError",
    "SphinxMessageTooLargeError",
    "InvalidMessageError",

    "IMixPKI",
    "IPacketReplayCache",
    "IKeyState",
    "IReader",

    "IntegrityKey",
    "RoutingInfoKey",
    "PayloadKey",
    "KDFOutput",
    "SphinxParams",
    "SphinxPacket",
    "RoutingCommands",
    "DeliverCommand",
    "SphinxClient",
    "SphinxNode",
    "SphinxNodeKeyState",
    "UnwrappedMessage",
    "PacketReplayCacheDict",
    "RandReader",
    "SphinxKEM",
    "SphinxLioness",
    "SphinxStreamCipher",
    "SphinxDigest",

    "derive_keys",
    "hash_replay",
    "encode_routing_commands",
    "decode_routing_commands",
    "create_routing_info",
    "create_forward_packet",
    "sphinx_packet_unwrap",
    "add_padding",
    "remove_padding",

    "__version__", "__author__", "__contact__",
    "__license__", "__copyright__", "__url__",
]
