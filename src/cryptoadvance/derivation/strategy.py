"""
Derivation strategies
*********************

A derivation strategy describes how the addresses of a wallet get derived from
one or more extended public keys. It's serialized as a dash separated string of
keys followed by optional labels in brackets:

* ``xpub...`` native segwit single key (p2wpkh)
* ``xpub...-[legacy]`` legacy single key (p2pkh)
* ``xpub...-[p2sh]`` nested segwit single key (p2sh-p2wpkh)
* ``2-of-xpub1...-xpub2...`` native segwit multisig with sorted keys (p2wsh)
* ``2-of-xpub1...-xpub2...-[keeporder]`` same but keys are used in the given order
* ``2-of-xpub1...-xpub2...-[p2sh]`` nested segwit multisig (p2sh-p2wsh)
* ``2-of-xpub1...-xpub2...-[legacy]`` legacy multisig (p2sh)

``[legacy]`` wins over ``[p2sh]``. Labels can be given in any order, the
canonical string always uses ``[legacy]``, ``[keeporder]``, ``[p2sh]``.
"""
import logging
import re

from embit import script
from embit.descriptor.checksum import add_checksum

from .errors import FormatError
from .key import ExtPubKey
from .networks import get_network

logger = logging.getLogger(__name__)

KNOWN_LABELS = ("legacy", "keeporder", "p2sh")

MULTISIG_REGEX = re.compile(r"^([0-9]{1,2})-of(-[A-Za-z0-9]+)+$")

MAX_MULTISIG_KEYS = 16


def is_label(token):
    return token.startswith("[") and token.endswith("]")


def strip_labels(text):
    """Removes all [label] parts from a derivation scheme"""
    return "-".join(t for t in text.split("-") if not is_label(t))


class Derivation:
    """The scripts of a strategy at one key path"""

    def __init__(self, script_pubkey, redeem_script=None, witness_script=None):
        self.script_pubkey = script_pubkey
        self.redeem_script = redeem_script
        self.witness_script = witness_script

    def address(self, network):
        return self.script_pubkey.address(get_network(network))


class DerivationStrategy:
    is_multisig = False

    def derive(self, path):
        raise NotImplementedError()

    def to_string(self):
        raise NotImplementedError()

    def _descriptor_body(self, change):
        raise NotImplementedError()

    def to_descriptor(self, change=0):
        """The equivalent output descriptor (with checksum) for the
        receiving (change=0) or the change (change=1) branch
        """
        return add_checksum(self._descriptor_body(change))

    @property
    def labels(self):
        return [t[1:-1] for t in self.to_string().split("-") if is_label(t)]

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_string()})"

    def __eq__(self, other):
        return type(self) == type(other) and self.to_string() == other.to_string()

    def __hash__(self):
        return hash(self.to_string())


class DirectDerivationStrategy(DerivationStrategy):
    def __init__(self, root, segwit=True):
        self.root = root
        self.segwit = segwit

    def derive(self, path):
        pubkey = self.root.derive(path)
        if self.segwit:
            return Derivation(script.p2wpkh(pubkey))
        return Derivation(script.p2pkh(pubkey))

    def to_string(self):
        if self.segwit:
            return str(self.root)
        return f"{self.root}-[legacy]"

    def _descriptor_body(self, change):
        wrapper = "wpkh" if self.segwit else "pkh"
        return f"{wrapper}({self.root}/{change}/*)"


class MultisigDerivationStrategy(DerivationStrategy):
    is_multisig = True

    def __init__(
        self, required_signatures, keys, legacy=False, lexicographic_order=True
    ):
        self.required_signatures = required_signatures
        self.keys = list(keys)
        self.legacy = legacy
        self.lexicographic_order = lexicographic_order

    def derive(self, path):
        pubkeys = [k.derive(path) for k in self.keys]
        if self.lexicographic_order:
            pubkeys = sorted(pubkeys, key=lambda pub: pub.sec())
        return Derivation(script.multisig(self.required_signatures, pubkeys))

    def to_string(self):
        s = f"{self.required_signatures}-of-" + "-".join(str(k) for k in self.keys)
        if self.legacy:
            s += "-[legacy]"
        if not self.lexicographic_order:
            s += "-[keeporder]"
        return s

    def _descriptor_body(self, change):
        multi = "sortedmulti" if self.lexicographic_order else "multi"
        keys = ",".join(f"{k}/{change}/*" for k in self.keys)
        return f"{multi}({self.required_signatures},{keys})"


class P2WSHDerivationStrategy(DerivationStrategy):
    def __init__(self, inner):
        self.inner = inner

    @property
    def is_multisig(self):
        return self.inner.is_multisig

    def derive(self, path):
        witness_script = self.inner.derive(path).script_pubkey
        return Derivation(script.p2wsh(witness_script), witness_script=witness_script)

    def to_string(self):
        return self.inner.to_string()

    def _descriptor_body(self, change):
        return f"wsh({self.inner._descriptor_body(change)})"


class P2SHDerivationStrategy(DerivationStrategy):
    def __init__(self, inner, segwit):
        self.inner = inner
        self.segwit = segwit

    @property
    def is_multisig(self):
        return self.inner.is_multisig

    def derive(self, path):
        inner = self.inner.derive(path)
        redeem_script = inner.script_pubkey
        return Derivation(
            script.p2sh(redeem_script),
            redeem_script=redeem_script,
            witness_script=inner.witness_script,
        )

    def to_string(self):
        if self.segwit:
            return f"{self.inner.to_string()}-[p2sh]"
        return self.inner.to_string()

    def _descriptor_body(self, change):
        return f"sh({self.inner._descriptor_body(change)})"


class DerivationStrategyFactory:
    """Parses and creates derivation strategies for one network"""

    def __init__(self, network):
        self.network = get_network(network)

    def parse(self, text):
        if text is None:
            raise FormatError("No derivation scheme given")
        tokens = text.strip().split("-")
        labels = set()
        for token in tokens:
            if not is_label(token):
                continue
            label = token[1:-1]
            if label not in KNOWN_LABELS:
                raise FormatError(f"Unknown label [{label}] in {text}")
            labels.add(label)
        body = "-".join(t for t in tokens if not is_label(t))
        options = dict(
            legacy="legacy" in labels,
            p2sh="p2sh" in labels,
        )

        match = MULTISIG_REGEX.match(body)
        if match:
            required_signatures = int(match.group(1))
            keys = [self._parse_key(k) for k in body.split("-")[2:]]
            return self.create_multisig_strategy(
                keys,
                required_signatures,
                keep_order="keeporder" in labels,
                **options,
            )
        # [keeporder] has no meaning for a single key and is ignored
        return self.create_direct_strategy(self._parse_key(body), **options)

    def _parse_key(self, text):
        return ExtPubKey.parse(text, self.network)

    def _check_segwit(self, legacy):
        if not legacy and not self.network.supports_segwit:
            raise FormatError(f"{self.network.name} does not support segwit")

    def create_direct_strategy(self, key, legacy=False, p2sh=False):
        self._check_segwit(legacy)
        strategy = DirectDerivationStrategy(key, segwit=not legacy)
        if p2sh and not legacy:
            strategy = P2SHDerivationStrategy(strategy, segwit=True)
        return strategy

    def create_multisig_strategy(
        self, keys, required_signatures, keep_order=False, legacy=False, p2sh=False
    ):
        if not 0 < len(keys) <= MAX_MULTISIG_KEYS:
            raise FormatError(
                f"A multisig needs between 1 and {MAX_MULTISIG_KEYS} keys, "
                f"got {len(keys)}"
            )
        if not 0 < required_signatures <= len(keys):
            raise FormatError(
                f"Multisig threshold must be between 1 and {len(keys)}, "
                f"got {required_signatures}"
            )
        self._check_segwit(legacy)
        strategy = MultisigDerivationStrategy(
            required_signatures,
            keys,
            legacy=legacy,
            lexicographic_order=not keep_order,
        )
        if legacy:
            return P2SHDerivationStrategy(strategy, segwit=False)
        strategy = P2WSHDerivationStrategy(strategy)
        if p2sh:
            strategy = P2SHDerivationStrategy(strategy, segwit=True)
        return strategy
