import logging
from types import MappingProxyType

from embit.networks import NETWORKS

from .errors import FormatError

logger = logging.getLogger(__name__)

# Dogecoin never activated segwit, so there's no bech32 hrp and no slip132 prefixes
DOGECOIN = {
    "name": "Dogecoin",
    "wif": b"\x9e",
    "p2pkh": b"\x1e",
    "p2sh": b"\x16",
    "bech32": None,
    "xprv": b"\x02\xfa\xc3\x98",
    "xpub": b"\x02\xfa\xca\xfd",
    "bip32": 3,
}


class Network:
    """Wraps an embit network dict and adds the consensus bits the
    derivation code needs to know about.
    """

    def __init__(self, chain, params, supports_segwit=True):
        self.chain = chain
        self.params = params
        self.supports_segwit = supports_segwit

    @property
    def name(self):
        return self.params["name"]

    @property
    def xpub_prefix(self):
        return self.params["xpub"]

    @property
    def is_mainnet(self):
        return self.chain == "main"

    def __getitem__(self, key):
        # so it can be passed wherever embit expects a network dict
        return self.params[key]

    def __eq__(self, other):
        return isinstance(other, Network) and self.chain == other.chain

    def __hash__(self):
        return hash(self.chain)

    def __repr__(self):
        return f"Network({self.chain})"


_networks = MappingProxyType(
    {
        "main": Network("main", NETWORKS["main"]),
        "test": Network("test", NETWORKS["test"]),
        "regtest": Network("regtest", NETWORKS["regtest"]),
        "signet": Network("signet", NETWORKS["signet"]),
        "dogecoin": Network("dogecoin", DOGECOIN, supports_segwit=False),
    }
)

# bitcoind and the rest of the cryptoadvance code base use these names as well
_aliases = {"mainnet": "main", "bitcoin": "main", "testnet": "test"}


def get_network(chain):
    """Returns the Network for a chain name, passes Network instances through"""
    if isinstance(chain, Network):
        return chain
    name = _aliases.get(chain, chain)
    if name not in _networks:
        raise FormatError(f"Unknown network: {chain}")
    return _networks[name]


def all_networks():
    return list(_networks.values())
