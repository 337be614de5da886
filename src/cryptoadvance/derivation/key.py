import logging
from types import MappingProxyType

from embit import bip32

from .errors import FormatError
from .networks import get_network
from .util.xpub import convert_xpub_prefix, decode_base58check

logger = logging.getLogger(__name__)

# The "xpub" version bytes of bitcoin mainnet. Everything gets normalized to this
# before it's handed over to bip32.
STANDARD_XPUB_PREFIX = b"\x04\x88\xb2\x1e"
HARDENED_INDEX = 0x80000000

# Electrum encodes the script type into the version bytes of the master public key:
# https://github.com/spesmilo/electrum/blob/11733d6bc271646a00b69ff07657119598874da4/electrum/constants.py
# The labels are what a derivation scheme needs to express the same script type.
ELECTRUM_PREFIXES = MappingProxyType(
    {
        0x0488B21E: ("legacy",),  # xpub, p2pkh
        0x049D7CB2: ("p2sh",),  # ypub, p2wpkh-p2sh
        0x04B24746: (),  # zpub, p2wpkh
    }
)


def parse_path(path):
    """Converts "0/0", "m/0/0" or [0, 0] to a list of unhardened indexes"""
    if isinstance(path, (list, tuple)):
        indexes = list(path)
    else:
        parts = [p for p in str(path).strip().split("/") if p != ""]
        if parts and parts[0] == "m":
            parts = parts[1:]
        try:
            indexes = [int(p) for p in parts]
        except ValueError as e:
            raise FormatError(
                f"Invalid key path {path}, "
                "only unhardened indexes can be derived from a public key"
            ) from e
    for idx in indexes:
        if not isinstance(idx, int) or idx < 0 or idx >= HARDENED_INDEX:
            raise FormatError(f"Invalid index {idx} in key path {path}")
    return indexes


class ExtPubKey:
    """An extended public key bound to a network. The network only decides about
    the version bytes used for serialization, the key material is the same on
    all of them.
    """

    def __init__(self, hdkey, network):
        self.hdkey = hdkey
        self.network = get_network(network)

    @classmethod
    def parse(cls, xpub, network):
        """Parses xpub which has to carry the xpub-version of network"""
        network = get_network(network)
        data = decode_base58check(xpub.strip())
        if len(data) != 78:
            raise FormatError(f"Invalid length for an extended public key: {xpub}")
        if data[:4] != network.xpub_prefix:
            raise FormatError(
                f"{xpub} is not an extended public key for {network.name}"
            )
        return cls.from_bytes(data, network)

    @classmethod
    def from_bytes(cls, data, network):
        """Builds the key from decoded bytes regardless of their version prefix"""
        standard = convert_xpub_prefix(data, STANDARD_XPUB_PREFIX)
        try:
            hdkey = bip32.HDKey.from_base58(standard)
        except Exception as e:
            raise FormatError(f"Invalid extended public key: {e}") from e
        if hdkey.is_private:
            raise FormatError("Expected an extended public key, got a private one")
        return cls(hdkey, network)

    def to_network(self, network):
        return ExtPubKey(self.hdkey, network)

    @property
    def key(self):
        return self.hdkey.key

    def derive(self, path):
        """Returns the embit PublicKey at the relative path"""
        return self.hdkey.derive(parse_path(path)).key

    def to_string(self):
        return self.hdkey.to_base58(version=self.network.xpub_prefix)

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"ExtPubKey({self.to_string()})"

    def __eq__(self, other):
        return isinstance(other, ExtPubKey) and str(self) == str(other)

    def __hash__(self):
        return hash(str(self))


def read_prefix(data):
    return int.from_bytes(data[:4], "big")


def normalize_electrum_key(data, network):
    """Takes a decoded Electrum master public key and returns the standard
    ExtPubKey on network together with the labels its prefix stands for.
    Raises FormatError if the prefix is not one Electrum uses.
    """
    if len(data) < 4:
        raise FormatError("Too short to carry a version prefix")
    prefix = read_prefix(data)
    if prefix not in ELECTRUM_PREFIXES:
        raise FormatError(f"Unsupported key prefix: {prefix:#010x}")
    key = ExtPubKey.from_bytes(data, "main").to_network(network)
    return key, ELECTRUM_PREFIXES[prefix]


def try_normalize_electrum_key(data, network):
    """Like normalize_electrum_key but returns None where that one would fail,
    which means the data is either not a key or already a standard one.
    """
    if len(data) < 4 or read_prefix(data) not in ELECTRUM_PREFIXES:
        return None
    try:
        return normalize_electrum_key(data, network)
    except FormatError as e:
        logger.debug(f"Not an Electrum key: {e}")
        return None
