import logging
import re
from enum import Enum

from embit import script
from embit.script import Script

from .errors import FormatError

logger = logging.getLogger(__name__)

HEX_REGEX = re.compile(r"^([0-9a-fA-F]{2})+$")


class Destination(Enum):
    """The kind of destination an output script pays to"""

    NONE = "none"
    KEY_HASH = "key-hash"
    SCRIPT_HASH = "script-hash"
    WITNESS_KEY_HASH = "witness-key-hash"
    OTHER = "other"


_script_types = {
    "p2pkh": Destination.KEY_HASH,
    "p2sh": Destination.SCRIPT_HASH,
    "p2wpkh": Destination.WITNESS_KEY_HASH,
    "p2wsh": Destination.OTHER,
    "p2tr": Destination.OTHER,
}


def classify_destination(sc):
    """Returns the Destination of an output script, Destination.NONE for
    None and for scripts which are no standard destination
    """
    if sc is None:
        return Destination.NONE
    return _script_types.get(sc.script_type(), Destination.NONE)


def address_to_script(address):
    try:
        return script.address_to_scriptpubkey(address.strip())
    except Exception as e:
        raise FormatError(f"Invalid address: {address}") from e


def to_script(value):
    """Converts an output script given as Script, bytes, hex-string or address"""
    if value is None or isinstance(value, Script):
        return value
    if isinstance(value, (bytes, bytearray)):
        return Script(bytes(value))
    if isinstance(value, str):
        if HEX_REGEX.match(value):
            return Script(bytes.fromhex(value))
        return address_to_script(value)
    raise FormatError(f"Can't convert {type(value).__name__} to a script")


def same_script(a, b):
    return a is not None and b is not None and a.data == b.data
