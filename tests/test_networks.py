import pytest
from embit.networks import NETWORKS

from cryptoadvance.derivation.errors import DerivationError, FormatError
from cryptoadvance.derivation.networks import Network, all_networks, get_network


def test_get_network():
    main = get_network("main")
    assert main.is_mainnet
    assert main.supports_segwit
    assert main.xpub_prefix == NETWORKS["main"]["xpub"]
    assert main["p2pkh"] == NETWORKS["main"]["p2pkh"]
    assert get_network("mainnet") is main
    assert get_network("bitcoin") is main
    assert get_network("testnet") is get_network("test")
    assert get_network(main) is main
    assert not get_network("regtest").is_mainnet


def test_get_network_unknown():
    with pytest.raises(FormatError, match="Unknown network"):
        get_network("liquidv1")
    # still a DerivationError, so it can be shown to the user
    with pytest.raises(DerivationError):
        get_network("foo")


def test_dogecoin(dogecoin):
    assert not dogecoin.supports_segwit
    assert dogecoin.xpub_prefix == bytes.fromhex("02facafd")
    assert dogecoin.name == "Dogecoin"


def test_all_networks():
    chains = [n.chain for n in all_networks()]
    assert chains == ["main", "test", "regtest", "signet", "dogecoin"]
    assert all(isinstance(n, Network) for n in all_networks())
    assert Network("main", {}) == get_network("main")
    assert repr(get_network("signet")) == "Network(signet)"
