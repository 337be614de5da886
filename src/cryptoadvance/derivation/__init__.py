from .errors import DerivationError, FormatError
from .networks import Network, get_network
from .parser import DerivationSchemeParser, parse_derivation_scheme
from .strategy import DerivationStrategyFactory
