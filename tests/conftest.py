import logging

import pytest

from cryptoadvance.derivation.config import load_config
from cryptoadvance.derivation.networks import get_network

logger = logging.getLogger(__name__)

pytest_plugins = [
    "fix_keys_and_seeds",
]


@pytest.fixture
def config():
    return load_config("TestConfig")


@pytest.fixture
def mainnet():
    return get_network("main")


@pytest.fixture
def testnet():
    return get_network("test")


@pytest.fixture
def dogecoin():
    return get_network("dogecoin")
