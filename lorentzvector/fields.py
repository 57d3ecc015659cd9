from __future__ import annotations
import math
import cmath
import sys
from typing import Any, Callable, Protocol, runtime_checkable

import numpy as np

from .utils import CastError, FieldCapabilityError


@runtime_checkable
class Field(Protocol):
    """Ring arithmetic with a multiplicative inverse, equality and formatting."""

    def __add__(self, other: Any, /) -> Any: ...
    def __sub__(self, other: Any, /) -> Any: ...
    def __mul__(self, other: Any, /) -> Any: ...
    def __truediv__(self, other: Any, /) -> Any: ...
    def __neg__(self) -> Any: ...
    def __eq__(self, other: object, /) -> bool: ...
    def __format__(self, format_spec: str, /) -> str: ...


@runtime_checkable
class RealNumberLike(Field, Protocol):
    """A Field that also behaves as a floating-point number."""

    def __lt__(self, other: Any, /) -> bool: ...
    def __gt__(self, other: Any, /) -> bool: ...
    def __abs__(self) -> Any: ...
    def __float__(self) -> float: ...


@runtime_checkable
class RealField(Field, Protocol):
    """A Field admitting mixed arithmetic and ordering against a plain float."""

    def __radd__(self, other: float, /) -> Any: ...
    def __rsub__(self, other: float, /) -> Any: ...
    def __rmul__(self, other: float, /) -> Any: ...
    def __rtruediv__(self, other: float, /) -> Any: ...
    def __lt__(self, other: float, /) -> bool: ...
    def __gt__(self, other: float, /) -> bool: ...


class ScalarOps(object):
    """Scalar functions that Python operators do not cover, for one family of scalar types."""

    name: str = 'abstract'
    real_field: bool = False

    def is_real(self, value: Any) -> bool:
        return False

    def zero(self, like: Any) -> Any:
        return type(like)(0)

    def one(self, like: Any) -> Any:
        return type(like)(1)

    def inv(self, a: Any) -> Any:
        return self.one(a) / a

    def mul_add(self, a: Any, b: Any, c: Any) -> Any:
        return a * b + c

    def real_part(self, a: Any) -> Any:
        return a.real

    def imag_part(self, a: Any) -> Any:
        return a.imag

    def sqrt(self, a: Any) -> Any:
        raise NotImplementedError("Abstract method not implemented.")

    def abs(self, a: Any) -> Any:
        return abs(a)

    def log(self, a: Any) -> Any:
        raise NotImplementedError("Abstract method not implemented.")

    def tan(self, a: Any) -> Any:
        raise NotImplementedError("Abstract method not implemented.")

    def acos(self, a: Any) -> Any:
        raise NotImplementedError("Abstract method not implemented.")

    def atan2(self, y: Any, x: Any) -> Any:
        raise FieldCapabilityError(f'atan2 is not defined for {self.name} scalars.')

    def copysign(self, magnitude: Any, sign: Any) -> Any:
        raise FieldCapabilityError(f'copysign is not defined for {self.name} scalars.')

    def epsilon(self, like: Any) -> Any:
        raise FieldCapabilityError(f'Machine epsilon is not defined for {self.name} scalars.')

    def max_value(self, like: Any) -> Any:
        raise FieldCapabilityError(f'A maximum value is not defined for {self.name} scalars.')

    def min_value(self, like: Any) -> Any:
        raise FieldCapabilityError(f'A minimum value is not defined for {self.name} scalars.')


class RealOps(ScalarOps):

    name = 'real'
    real_field = True

    def is_real(self, value: Any) -> bool:
        return True

    def zero(self, like: Any) -> Any:
        return 0. if isinstance(like, float) else 0

    def one(self, like: Any) -> Any:
        return 1. if isinstance(like, float) else 1

    def inv(self, a: Any) -> Any:
        # float division raises ZeroDivisionError for a zero scalar
        return 1. / a

    def mul_add(self, a: Any, b: Any, c: Any) -> Any:
        # math.fma only exists from Python 3.13
        if _fma is None:
            return a * b + c
        return _fma(a, b, c)

    def sqrt(self, a: Any) -> Any:
        if a < 0.:
            return math.nan
        return math.sqrt(a)

    def log(self, a: Any) -> Any:
        if a > 0.:
            return math.log(a)
        if a == 0.:
            return -math.inf
        return math.nan

    def tan(self, a: Any) -> Any:
        return math.tan(a)

    def acos(self, a: Any) -> Any:
        if abs(a) > 1.:
            return math.nan
        return math.acos(a)

    def atan2(self, y: Any, x: Any) -> Any:
        return math.atan2(y, x)

    def copysign(self, magnitude: Any, sign: Any) -> Any:
        return math.copysign(magnitude, sign)

    def epsilon(self, like: Any) -> Any:
        return sys.float_info.epsilon

    def max_value(self, like: Any) -> Any:
        return sys.float_info.max

    def min_value(self, like: Any) -> Any:
        return -sys.float_info.max


class ComplexOps(ScalarOps):

    name = 'complex'

    def zero(self, like: Any) -> Any:
        return 0j

    def one(self, like: Any) -> Any:
        return complex(1., 0.)

    def sqrt(self, a: Any) -> Any:
        return cmath.sqrt(a)

    def log(self, a: Any) -> Any:
        return cmath.log(a)

    def tan(self, a: Any) -> Any:
        return cmath.tan(a)

    def acos(self, a: Any) -> Any:
        return cmath.acos(a)


class NumpyOps(ScalarOps):
    """numpy scalars: float32, float64, longdouble and their complex counterparts."""

    name = 'numpy'
    real_field = True

    def is_real(self, value: Any) -> bool:
        return not np.iscomplexobj(value)

    def zero(self, like: Any) -> Any:
        return np.zeros_like(like)[()]

    def one(self, like: Any) -> Any:
        return np.ones_like(like)[()]

    def inv(self, a: Any) -> Any:
        with np.errstate(divide='ignore', invalid='ignore'):
            return self.one(a) / a

    def sqrt(self, a: Any) -> Any:
        with np.errstate(invalid='ignore'):
            return np.sqrt(a)

    def log(self, a: Any) -> Any:
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.log(a)

    def tan(self, a: Any) -> Any:
        return np.tan(a)

    def acos(self, a: Any) -> Any:
        with np.errstate(invalid='ignore'):
            return np.arccos(a)

    def atan2(self, y: Any, x: Any) -> Any:
        return np.arctan2(y, x)

    def copysign(self, magnitude: Any, sign: Any) -> Any:
        return np.copysign(magnitude, sign)

    def _finfo(self, like: Any) -> np.finfo:
        if np.iscomplexobj(like):
            raise FieldCapabilityError('Complex numpy scalars have no ordering.')
        dtype = np.result_type(like)
        if not np.issubdtype(dtype, np.inexact):
            # Integer operands mixed into a floating computation
            dtype = np.float64
        return np.finfo(dtype)

    def epsilon(self, like: Any) -> Any:
        return self._finfo(like).eps

    def max_value(self, like: Any) -> Any:
        return self._finfo(like).max

    def min_value(self, like: Any) -> Any:
        return self._finfo(like).min


class JaxOps(ScalarOps):
    """jax arrays and tracers, the automatic-differentiation backend.

    jax is imported lazily so that the package works without it; a jax value can only
    reach this backend if jax is installed.
    """

    name = 'jax'
    real_field = True

    @property
    def jnp(self):
        import jax.numpy
        return jax.numpy

    def is_real(self, value: Any) -> bool:
        return not self.jnp.iscomplexobj(value)

    def zero(self, like: Any) -> Any:
        return self.jnp.zeros_like(like)

    def one(self, like: Any) -> Any:
        return self.jnp.ones_like(like)

    def inv(self, a: Any) -> Any:
        return 1. / a

    def real_part(self, a: Any) -> Any:
        # Drops the tangent information carried by tracers
        import jax
        return jax.lax.stop_gradient(self.jnp.real(a))

    def imag_part(self, a: Any) -> Any:
        return self.jnp.imag(a)

    def sqrt(self, a: Any) -> Any:
        return self.jnp.sqrt(a)

    def abs(self, a: Any) -> Any:
        return self.jnp.abs(a)

    def log(self, a: Any) -> Any:
        return self.jnp.log(a)

    def tan(self, a: Any) -> Any:
        return self.jnp.tan(a)

    def acos(self, a: Any) -> Any:
        return self.jnp.arccos(a)

    def atan2(self, y: Any, x: Any) -> Any:
        return self.jnp.arctan2(y, x)

    def copysign(self, magnitude: Any, sign: Any) -> Any:
        return self.jnp.copysign(magnitude, sign)

    def _finfo(self, like: Any):
        if self.jnp.iscomplexobj(like):
            raise FieldCapabilityError('Complex jax values have no ordering.')
        dtype = self.jnp.result_type(like)
        if not self.jnp.issubdtype(dtype, self.jnp.inexact):
            dtype = self.jnp.result_type(float)
        return self.jnp.finfo(dtype)

    def epsilon(self, like: Any) -> Any:
        return self._finfo(like).eps

    def max_value(self, like: Any) -> Any:
        return self._finfo(like).max

    def min_value(self, like: Any) -> Any:
        return self._finfo(like).min


_fma: Callable[[float, float, float], float] | None = getattr(math, 'fma', None)

_BACKENDS: list[tuple[int, Callable[[Any], bool], ScalarOps]] = []


def register_backend(predicate: Callable[[Any], bool], ops: ScalarOps, priority: int = 0) -> None:
    """Make `ops` available for every scalar accepted by `predicate`.

    When the operands of one computation belong to several backends, the one with the
    highest priority handles it, so a backend that can absorb plain floats should be
    registered above the native ones.
    """
    _BACKENDS.append((priority, predicate, ops))
    _BACKENDS.sort(key=lambda entry: -entry[0])


def _is_jax(value: Any) -> bool:
    return type(value).__module__.split('.')[0] in ('jax', 'jaxlib')


register_backend(lambda v: isinstance(v, (int, float)), RealOps(), priority=0)
register_backend(lambda v: isinstance(v, complex), ComplexOps(), priority=10)
register_backend(lambda v: isinstance(v, np.generic), NumpyOps(), priority=20)
register_backend(_is_jax, JaxOps(), priority=30)


def _lookup(value: Any) -> tuple[int, ScalarOps]:
    for priority, predicate, ops in _BACKENDS:
        if predicate(value):
            return priority, ops
    raise FieldCapabilityError(f'No scalar backend registered for type {type(value).__name__}.')


def ops_for(*values: Any) -> ScalarOps:
    best: tuple[int, ScalarOps] | None = None
    for value in values:
        candidate = _lookup(value)
        if best is None or candidate[0] > best[0]:
            best = candidate
    if best is None:
        raise FieldCapabilityError('At least one scalar is needed to select a backend.')
    return best[1]


def real_ops_for(*values: Any) -> ScalarOps:
    """Same as `ops_for`, but every value must be an ordered, real number."""
    for value in values:
        if not _lookup(value)[1].is_real(value):
            raise FieldCapabilityError(
                f'Operation requires real scalars, got {type(value).__name__} value {value}.')
    return ops_for(*values)


def is_real_number_like(value: Any) -> bool:
    try:
        return _lookup(value)[1].is_real(value)
    except FieldCapabilityError:
        return False


def is_real_field(value: Any) -> bool:
    try:
        ops = _lookup(value)[1]
    except FieldCapabilityError:
        return False
    return ops.real_field and ops.is_real(value)


def _is_complex(value: Any) -> bool:
    return isinstance(value, complex) or np.iscomplexobj(value)


def cast_scalar(value: Any, target: type) -> Any:
    """Convert `value` to `target`, refusing any conversion that loses the value."""
    try:
        _lookup(value)
    except FieldCapabilityError as e:
        raise CastError(f'Cannot cast {value!r}: {e}') from e

    if _is_complex(value):
        if target is complex or (isinstance(target, type) and issubclass(target, np.complexfloating)):
            return target(value)
        if value.imag != 0:
            raise CastError(f'Cannot cast complex value {value} with non-zero imaginary part to {target.__name__}.')
        value = value.real

    if target is bool:
        raise CastError('Casting to bool is not a numeric conversion.')

    if target is int or (isinstance(target, type) and issubclass(target, np.integer)):
        if not isinstance(value, (int, np.integer)) and not np.isfinite(value):
            raise CastError(f'Cannot cast non-finite value {value} to {target.__name__}.')
        result = int(value)
        if target is int:
            return result
        info = np.iinfo(target)
        if result < info.min or result > info.max:
            raise CastError(f'Value {value} is out of range for {target.__name__}.')
        return target(result)

    if target is float or (isinstance(target, type) and issubclass(target, np.floating)):
        try:
            with np.errstate(over='ignore', invalid='ignore'):
                result = target(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise CastError(f'Cannot cast {value!r} to {target.__name__}: {e}') from e
        if np.isfinite(value) and not np.isfinite(result):
            raise CastError(f'Value {value} overflows {target.__name__}.')
        return result

    try:
        return target(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise CastError(f'Cannot cast {value!r} to {getattr(target, "__name__", target)}: {e}') from e
