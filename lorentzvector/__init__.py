from .vectors import LorentzVector, Vector
from .fields import Field, RealNumberLike, RealField, ScalarOps, register_backend, ops_for, cast_scalar
from .utils import (
    LorentzVectorException, ComponentIndexError, SignError, CastError, FieldCapabilityError,
    KinematicsError, ConversionError, DeserializationError,
)

__version__ = '0.1.0'
