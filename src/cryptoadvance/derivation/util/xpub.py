import logging

from embit import base58

from ..errors import FormatError

logger = logging.getLogger(__name__)


def decode_base58check(s):
    """Decodes a base58check string, raises FormatError if that's not possible"""
    try:
        return base58.decode_check(s)
    except Exception as e:
        raise FormatError(f"Invalid base58check string {s}: {e}") from e


def try_decode_base58check(s):
    """Same as decode_base58check but returns None for anything which is not
    base58check. Used where arbitrary tokens get probed for keys.
    """
    if not s:
        return None
    try:
        return decode_base58check(s)
    except FormatError:
        return None


def convert_xpub_prefix(xpub, prefix_bytes):
    """Update xpub (base58 string or decoded bytes) to specified prefix and re-encode"""
    b = decode_base58check(xpub) if isinstance(xpub, str) else bytes(xpub)
    if len(b) < 4:
        raise FormatError("Too short to carry a version prefix")
    return base58.encode_check(prefix_bytes + b[4:])
