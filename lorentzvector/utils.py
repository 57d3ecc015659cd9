import logging
from enum import StrEnum


class Colour(StrEnum):
    PURPLE = '\033[95m'
    CYAN = '\033[96m'
    DARKCYAN = '\033[36m'
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    UNDERLINE = '\033[4m'
    END = '\033[0m'


LOG_FORMAT: str = f'{Colour.GREEN}%(levelname)s{Colour.END} {Colour.BLUE}%(funcName)s l.%(lineno)d{Colour.END} {Colour.CYAN}t=%(asctime)s.%(msecs)03d{Colour.END} > %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d,%H:%M:%S'

logger = logging.getLogger('LorentzVector')

# Relative tolerance used when reporting invariant-mass conservation
TOLERANCE: float = 1e-10


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    logger.setLevel(level)


class LorentzVectorException(Exception):
    pass


class ComponentIndexError(LorentzVectorException, IndexError):
    pass


class SignError(LorentzVectorException, ValueError):
    pass


class CastError(LorentzVectorException, ValueError):
    pass


class FieldCapabilityError(LorentzVectorException, TypeError):
    pass


class KinematicsError(LorentzVectorException, ArithmeticError):
    pass


class ConversionError(LorentzVectorException, TypeError):
    pass


class DeserializationError(LorentzVectorException, ValueError):
    pass


def format_components(values, spec: str = '+.16e') -> str:
    """Render a list of scalars the way log messages show momenta."""
    return ', '.join(format(v, spec) for v in values)
