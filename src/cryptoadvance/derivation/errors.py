import logging

logger = logging.getLogger(__name__)


class DerivationError(Exception):
    """A DerivationError contains meaningfull messages which can be passed
    directly to the user
    """

    def __init__(self, message):
        super(DerivationError, self).__init__(message)


class FormatError(DerivationError):
    """Raised whenever a derivation scheme, a key or a label combination can't be
    turned into a strategy. There is no partial result, the whole resolution fails.
    """

    pass
