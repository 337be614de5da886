import pytest
from embit.networks import NETWORKS

from cryptoadvance.derivation.errors import FormatError
from cryptoadvance.derivation.key import (
    ELECTRUM_PREFIXES,
    ExtPubKey,
    normalize_electrum_key,
    parse_path,
    try_normalize_electrum_key,
)
from cryptoadvance.derivation.util.xpub import decode_base58check
from fix_keys_and_seeds import DGUB, TPUB, XPUB


def test_electrum_prefixes():
    assert dict(ELECTRUM_PREFIXES) == {
        0x0488B21E: ("legacy",),
        0x049D7CB2: ("p2sh",),
        0x04B24746: (),
    }
    with pytest.raises(TypeError):
        ELECTRUM_PREFIXES[0x043587CF] = ("legacy",)


@pytest.mark.parametrize("prefix", list(ELECTRUM_PREFIXES))
def test_normalize_electrum_key_roundtrip(prefix, acc84_hold_accident):
    electrum_key = acc84_hold_accident.to_base58(version=prefix.to_bytes(4, "big"))
    key, labels = normalize_electrum_key(decode_base58check(electrum_key), "main")
    assert str(key) == acc84_hold_accident.to_base58(version=XPUB)
    assert labels == ELECTRUM_PREFIXES[prefix]


def test_normalize_electrum_key_retargets(zpub_hold_accident, tpub_hold_accident):
    key, labels = normalize_electrum_key(decode_base58check(zpub_hold_accident), "test")
    assert str(key) == tpub_hold_accident
    assert key.network.chain == "test"
    assert labels == ()


def test_normalize_electrum_key_unknown_prefix(tpub_hold_accident):
    data = decode_base58check(tpub_hold_accident)
    with pytest.raises(FormatError, match="Unsupported key prefix"):
        normalize_electrum_key(data, "main")
    assert try_normalize_electrum_key(data, "main") is None


def test_try_normalize_electrum_key_short_data():
    assert try_normalize_electrum_key(b"\x04\x88", "main") is None
    # a known prefix, but no key behind it
    assert try_normalize_electrum_key(XPUB + b"\x00" * 10, "main") is None


def test_extpubkey_parse(xpub_hold_accident, acc84_hold_accident):
    key = ExtPubKey.parse(xpub_hold_accident, "main")
    assert str(key) == xpub_hold_accident
    assert key.key.sec() == acc84_hold_accident.key.sec()
    assert key == ExtPubKey.parse(f"  {xpub_hold_accident}\n", "main")


def test_extpubkey_parse_wrong_network(xpub_hold_accident, tpub_hold_accident):
    with pytest.raises(FormatError, match="not an extended public key for"):
        ExtPubKey.parse(xpub_hold_accident, "test")
    assert str(ExtPubKey.parse(tpub_hold_accident, "test")) == tpub_hold_accident


def test_extpubkey_rejects_private_keys(rootkey_hold_accident):
    xprv = rootkey_hold_accident.to_base58(version=NETWORKS["main"]["xprv"])
    with pytest.raises(FormatError):
        ExtPubKey.parse(xprv, "main")


def test_extpubkey_to_network(xpub_hold_accident, acc84_hold_accident):
    key = ExtPubKey.parse(xpub_hold_accident, "main")
    assert str(key.to_network("test")) == acc84_hold_accident.to_base58(version=TPUB)
    assert str(key.to_network("dogecoin")) == acc84_hold_accident.to_base58(
        version=DGUB
    )
    # same key material
    assert key.to_network("test").key.sec() == key.key.sec()


def test_extpubkey_derive(xpub_hold_accident, first_pubkey_hold_accident):
    key = ExtPubKey.parse(xpub_hold_accident, "main")
    assert key.derive("0/0").sec() == first_pubkey_hold_accident.sec()
    assert key.derive("m/0/0").sec() == first_pubkey_hold_accident.sec()
    assert key.derive([0, 0]).sec() == first_pubkey_hold_accident.sec()
    assert key.derive("0/1").sec() != first_pubkey_hold_accident.sec()


def test_parse_path():
    assert parse_path("0/0") == [0, 0]
    assert parse_path("m/1/5") == [1, 5]
    assert parse_path("m") == []
    assert parse_path((3, 4)) == [3, 4]
    with pytest.raises(FormatError):
        parse_path("0h/0")
    with pytest.raises(FormatError):
        parse_path("0'/0")
    with pytest.raises(FormatError):
        parse_path([0x80000000])
