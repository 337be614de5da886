import logging

from .config import load_config
from .errors import FormatError
from .key import normalize_electrum_key, try_normalize_electrum_key
from .networks import get_network
from .scripts import (
    Destination,
    address_to_script,
    classify_destination,
    same_script,
    to_script,
)
from .strategy import DerivationStrategyFactory, is_label, strip_labels
from .util.combinations import item_combinations
from .util.xpub import decode_base58check, try_decode_base58check

logger = logging.getLogger(__name__)

# The first receiving address, that's what a hint script gets compared with
FIRST_KEY_PATH = "0/0"


class LabelHints:
    """The labels a derivation scheme probably needs, collected in two phases:

    * seeding: inferred from the network (no segwit -> legacy) and from the
      destination of the hint script (p2pkh -> legacy, p2sh -> p2sh)
    * explicit: as soon as the scheme itself contains a [label], the labels
      seeded from the hint script are dropped. The network one and the ones
      implied by Electrum key prefixes stay.
    """

    def __init__(self, network, destination=Destination.NONE):
        self.network = get_network(network)
        self.has_explicit = False
        self._labels = {}
        self._seeded = []
        self._inferred = set()
        if destination == Destination.KEY_HASH:
            self._seed("legacy")
        if destination == Destination.SCRIPT_HASH:
            self._seed("p2sh")
        self._add_network_defaults()

    def _seed(self, label):
        self._labels[label] = None
        self._seeded.append(label)

    def _add_network_defaults(self):
        if not self.network.supports_segwit:
            self._labels["legacy"] = None

    def add(self, label):
        label = label.lower()
        self._labels[label] = None
        self._inferred.add(label)

    def add_explicit(self, label):
        if not self.has_explicit:
            self.has_explicit = True
            for seeded in self._seeded:
                if seeded not in self._inferred:
                    self._labels.pop(seeded, None)
            self._add_network_defaults()
        self.add(label)

    def discard(self, label):
        self._labels.pop(label, None)

    def to_list(self):
        return list(self._labels)

    def __iter__(self):
        return iter(self.to_list())

    def __len__(self):
        return len(self._labels)

    def __contains__(self, label):
        return label in self._labels

    def __repr__(self):
        return f"LabelHints({self.to_list()})"


class DerivationSchemeParser:
    """Turns whatever a user pastes as derivation scheme into a DerivationStrategy.

    Besides the canonical format this understands Electrum master public keys
    (ypub/zpub) anywhere in the scheme. If a hint_script (the output script of
    the first receiving address) is given, the resulting strategy is
    guaranteed to derive that script at 0/0, otherwise FormatError is raised.
    """

    def __init__(self, network, hint_script=None):
        self.network = get_network(network)
        self.hint_script = to_script(hint_script)
        self.factory = DerivationStrategyFactory(self.network)

    @classmethod
    def from_config(cls, config, hint_script=None):
        return cls(config["DERIVATION_NETWORK"], hint_script=hint_script)

    @property
    def hint_destination(self):
        return classify_destination(self.hint_script)

    def parse_electrum(self, text):
        """Parses a single Electrum master public key (xpub/ypub/zpub)"""
        if text is None:
            raise FormatError("No master public key given")
        data = decode_base58check(text.strip())
        if len(data) < 4:
            raise FormatError(f"Not a master public key: {text}")
        key, labels = normalize_electrum_key(data, self.network)
        if len(labels) == 0:
            return self.factory.create_direct_strategy(key)
        if labels[0] == "legacy":
            return self.factory.create_direct_strategy(key, legacy=True)
        if labels[0] == "p2sh":
            return self.factory.parse(f"{key}-[p2sh]")
        raise FormatError(f"Unsupported label {labels[0]} for {text}")

    def parse(self, text):
        if text is None:
            raise FormatError("No derivation scheme given")
        text = text.strip()
        hints = LabelHints(self.network, self.hint_destination)

        strategy = self._try_parse(text)
        if strategy is not None:
            return self.find_match(hints, strategy)

        tokens = text.split("-")
        for i, token in enumerate(tokens):
            if is_label(token):
                hints.add_explicit(token[1:-1])
                continue
            normalized = self._normalize_token(token)
            if normalized is None:
                continue
            key, labels = normalized
            for label in labels:
                hints.add(label)
            tokens[i] = str(key)

        if self.hint_destination == Destination.WITNESS_KEY_HASH:
            # a p2wpkh output is neither legacy nor nested
            hints.discard("legacy")
            hints.discard("p2sh")

        scheme = "-".join(t for t in tokens if not is_label(t))
        for label in hints:
            scheme = f"{scheme}-[{label}]"
        logger.debug(f"Reassembled {text} to {scheme}")
        return self.find_match(hints, self.factory.parse(scheme))

    def find_match(self, hints, strategy):
        """Returns strategy if it derives the hint script, otherwise the first
        relabeled variant of it which does.
        """
        if self.hint_script is None:
            return strategy
        if self._matches(strategy):
            return strategy

        labels = list(hints)
        # multisig can be serialized with or without sorting the keys
        if strategy.is_multisig and "keeporder" not in labels:
            labels.append("keeporder")

        base = strip_labels(strategy.to_string())
        for combination in item_combinations(labels):
            scheme = base + "-" + "-".join(f"[{label}]" for label in combination)
            hinted = self._try_parse(scheme)
            if hinted is not None and self._matches(hinted):
                logger.info(f"Found {hinted} matching the hint script")
                return hinted
        raise FormatError(
            f"Could not find any match, no labeling of {base} derives the hint script"
        )

    def _matches(self, strategy):
        return same_script(
            strategy.derive(FIRST_KEY_PATH).script_pubkey, self.hint_script
        )

    def _try_parse(self, scheme):
        try:
            return self.factory.parse(scheme)
        except FormatError as e:
            logger.debug(f"{scheme} is not a valid derivation scheme: {e}")
            return None

    def _normalize_token(self, token):
        """Returns (key, labels) if token is an Electrum key, None for anything else"""
        data = try_decode_base58check(token)
        if data is None or len(data) < 4:
            return None
        return try_normalize_electrum_key(data, self.network)


def parse_derivation_scheme(text, network=None, hint_script=None, hint_address=None):
    """Convenience function around DerivationSchemeParser.parse.
    The network defaults to DERIVATION_NETWORK of the active config.
    """
    if network is None:
        network = load_config()["DERIVATION_NETWORK"]
    if hint_script is None and hint_address is not None:
        hint_script = address_to_script(hint_address)
    return DerivationSchemeParser(network, hint_script=hint_script).parse(text)
