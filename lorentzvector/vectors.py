from __future__ import annotations
import operator
from typing import Any, Callable, Iterator, Sequence

from .fields import ops_for, real_ops_for, cast_scalar
from .utils import ComponentIndexError, SignError
from . import kinematics
from . import boosts


def _component_index(index: Any) -> int:
    if isinstance(index, bool):
        raise ComponentIndexError(f'Index {index!r} is not an integer.')
    try:
        return operator.index(index)
    except TypeError as e:
        raise ComponentIndexError(f'Index {index!r} is not an integer.') from e


class Vector(object):
    """Spatial 3-vector, the (x, y, z) part of a LorentzVector."""

    __slots__ = ('x', 'y', 'z')
    # numpy scalars on the left of an operator defer to our reflected methods
    __array_ufunc__ = None

    def __init__(self, x: Any, y: Any, z: Any):
        self.x = x
        self.y = y
        self.z = z

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Any) -> Vector:
        return Vector(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: Any) -> Vector:
        return self.__mul__(other)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return bool(self.x == other.x and self.y == other.y and self.z == other.z)

    __hash__ = None

    def dot(self, other: Vector) -> Any:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def squared(self) -> Any:
        return self.dot(self)

    def norm(self) -> Any:
        return real_ops_for(self.x, self.y, self.z).sqrt(self.squared())

    def to_list(self) -> list[Any]:
        return [self.x, self.y, self.z]

    def __repr__(self) -> str:
        return f"Vector({self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self) -> str:
        return f"Vector({self.x:.16e}, {self.y:.16e}, {self.z:.16e})"


class LorentzVector(object):
    """Four-vector (t, x, y, z) over any scalar type satisfying the Field contract.

    The metric signature is (+,-,-,-). Every arithmetic operation returns a new vector,
    except item assignment and the in-place operators.
    """

    __slots__ = ('t', 'x', 'y', 'z')
    __array_ufunc__ = None

    def __init__(self, t: Any = 0., x: Any = 0., y: Any = 0., z: Any = 0.):
        self.t = t
        self.x = x
        self.y = y
        self.z = z

    @classmethod
    def from_args(cls, t: Any, x: Any, y: Any, z: Any) -> LorentzVector:
        return cls(t, x, y, z)

    @classmethod
    def from_list(cls, values: Sequence[Any]) -> LorentzVector:
        if len(values) != 4:
            raise ComponentIndexError(
                f'A LorentzVector needs exactly 4 components, got {len(values)}.')
        t, x, y, z = values
        return cls(t, x, y, z)

    @classmethod
    def from_spatial(cls, spatial: Vector, t: Any = None) -> LorentzVector:
        if t is None:
            t = ops_for(spatial.x).zero(spatial.x)
        return cls(t, spatial.x, spatial.y, spatial.z)

    @classmethod
    def zero(cls, like: Any = 0.) -> LorentzVector:
        """The all-zero vector over the scalar type of `like`."""
        ops = ops_for(like)
        return cls(ops.zero(like), ops.zero(like), ops.zero(like), ops.zero(like))

    # Component access

    def __getitem__(self, index: int) -> Any:
        match _component_index(index):
            case 0: return self.t
            case 1: return self.x
            case 2: return self.y
            case 3: return self.z
            case _: raise ComponentIndexError(f'Index {index!r} is not between 0 and 3.')

    def __setitem__(self, index: int, value: Any) -> None:
        match _component_index(index):
            case 0: self.t = value
            case 1: self.x = value
            case 2: self.y = value
            case 3: self.z = value
            case _: raise ComponentIndexError(f'Index {index!r} is not between 0 and 3.')

    def __iter__(self) -> Iterator[Any]:
        return iter((self.t, self.x, self.y, self.z))

    def __len__(self) -> int:
        return 4

    def to_list(self) -> list[Any]:
        return [self.t, self.x, self.y, self.z]

    def spatial(self) -> Vector:
        return Vector(self.x, self.y, self.z)

    def copy(self) -> LorentzVector:
        return LorentzVector(self.t, self.x, self.y, self.z)

    def __copy__(self) -> LorentzVector:
        return self.copy()

    # Arithmetic

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LorentzVector):
            return NotImplemented
        return bool(self.t == other.t and self.x == other.x and self.y == other.y and self.z == other.z)

    __hash__ = None

    def __neg__(self) -> LorentzVector:
        return LorentzVector(-self.t, -self.x, -self.y, -self.z)

    def __pos__(self) -> LorentzVector:
        return self.copy()

    def __add__(self, other: LorentzVector) -> LorentzVector:
        if not isinstance(other, LorentzVector):
            return NotImplemented
        return LorentzVector(self.t + other.t, self.x + other.x, self.y + other.y, self.z + other.z)

    def __radd__(self, other: Any) -> LorentzVector:
        # Lets sum() start from its default integer 0
        if isinstance(other, int) and other == 0:
            return self.copy()
        return NotImplemented

    def __iadd__(self, other: LorentzVector) -> LorentzVector:
        if not isinstance(other, LorentzVector):
            return NotImplemented
        self.t += other.t
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def __sub__(self, other: LorentzVector) -> LorentzVector:
        if not isinstance(other, LorentzVector):
            return NotImplemented
        return LorentzVector(self.t - other.t, self.x - other.x, self.y - other.y, self.z - other.z)

    def __isub__(self, other: LorentzVector) -> LorentzVector:
        if not isinstance(other, LorentzVector):
            return NotImplemented
        self.t -= other.t
        self.x -= other.x
        self.y -= other.y
        self.z -= other.z
        return self

    def __mul__(self, other: Any) -> LorentzVector:
        if isinstance(other, (LorentzVector, Vector)):
            return NotImplemented
        return LorentzVector(self.t * other, self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: Any) -> LorentzVector:
        return self.__mul__(other)

    def __imul__(self, other: Any) -> LorentzVector:
        if isinstance(other, (LorentzVector, Vector)):
            return NotImplemented
        self.t *= other
        self.x *= other
        self.y *= other
        self.z *= other
        return self

    def __truediv__(self, other: Any) -> LorentzVector:
        if isinstance(other, (LorentzVector, Vector)):
            return NotImplemented
        return self * ops_for(other).inv(other)

    def __itruediv__(self, other: Any) -> LorentzVector:
        if isinstance(other, (LorentzVector, Vector)):
            return NotImplemented
        self *= ops_for(other).inv(other)
        return self

    def inv(self) -> LorentzVector:
        return self.map(lambda c: ops_for(c).inv(c))

    def __invert__(self) -> LorentzVector:
        return self.inv()

    def comp_mul(self, other: LorentzVector) -> LorentzVector:
        return LorentzVector(self.t * other.t, self.x * other.x, self.y * other.y, self.z * other.z)

    def add_signed(self, other: LorentzVector, sign: int) -> LorentzVector:
        match sign:
            case 0: return self.copy()
            case 1: return self + other
            case -1: return self - other
            case _: raise SignError(f'Sign {sign!r} is not -1, 0 or 1.')

    def dual(self) -> LorentzVector:
        return LorentzVector(self.t, -self.x, -self.y, -self.z)

    # Products

    def dot(self, other: LorentzVector) -> Any:
        return self.t * other.t - self.x * other.x - self.y * other.y - self.z * other.z

    def square(self) -> Any:
        return self.t * self.t - self.x * self.x - self.y * self.y - self.z * self.z

    def spatial_dot(self, other: LorentzVector) -> Any:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def spatial_squared(self) -> Any:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def dot_spatial_dot(self, other: LorentzVector) -> tuple[Any, Any]:
        """Minkowski and spatial products with other, sharing the spatial multiplications."""
        s = self.x * other.x + self.y * other.y + self.z * other.z
        return (self.t * other.t - s, s)

    def euclidean_dot(self, other: LorentzVector) -> Any:
        return self.t * other.t + self.x * other.x + self.y * other.y + self.z * other.z

    def euclidean_square(self) -> Any:
        return self.t * self.t + self.x * self.x + self.y * self.y + self.z * self.z

    # Fused multiply-add variants. Native floats are fused only where math.fma exists (Python 3.13+);
    # elsewhere each step rounds separately, as in the plain products above.

    def spatial_squared_impr(self) -> Any:
        """spatial_squared with fused multiply-adds for native floats on Python 3.13+."""
        ops = ops_for(*self)
        return ops.mul_add(self.x, self.x, ops.mul_add(self.y, self.y, self.z * self.z))

    def spatial_dot_impr(self, other: LorentzVector) -> Any:
        """spatial_dot with fused multiply-adds for native floats on Python 3.13+."""
        ops = ops_for(*self, *other)
        return ops.mul_add(self.x, other.x, ops.mul_add(self.y, other.y, self.z * other.z))

    def square_impr(self) -> Any:
        """square with fused multiply-adds for native floats on Python 3.13+, plain ones before."""
        return ops_for(*self).mul_add(self.t, self.t, -self.spatial_squared_impr())

    def dot_impr(self, other: LorentzVector) -> Any:
        """dot with fused multiply-adds for native floats on Python 3.13+, plain ones before."""
        return ops_for(*self, *other).mul_add(self.t, other.t, -self.spatial_dot_impr(other))

    # Conversions

    def map(self, fn: Callable[[Any], Any]) -> LorentzVector:
        return LorentzVector(fn(self.t), fn(self.x), fn(self.y), fn(self.z))

    def convert(self, target: Callable[[Any], Any]) -> LorentzVector:
        return self.map(target)

    def cast(self, target: type) -> LorentzVector:
        return self.map(lambda c: cast_scalar(c, target))

    def to_complex(self, real: bool = True) -> LorentzVector:
        """Embed this real vector as the real (or imaginary) part of a complex vector."""
        real_ops_for(*self)
        if real:
            return self.map(lambda c: c + 0j)
        return self.map(lambda c: c * 1j)

    def real(self) -> LorentzVector:
        return self.map(lambda c: ops_for(c).real_part(c))

    def imag(self) -> LorentzVector:
        return self.map(lambda c: ops_for(c).imag_part(c))

    # Kinematic observables

    def spatial_distance(self) -> Any:
        return kinematics.spatial_distance(self)

    def euclidean_distance(self) -> Any:
        return kinematics.euclidean_distance(self)

    def pt(self) -> Any:
        return kinematics.pt(self)

    def pseudo_rap(self) -> Any:
        return kinematics.pseudo_rap(self)

    def getdelphi(self, other: LorentzVector) -> Any:
        return kinematics.getdelphi(self, other)

    def delta_r(self, other: LorentzVector) -> Any:
        return kinematics.delta_r(self, other)

    # Boosts

    def boost(self, boost_vector: LorentzVector | Vector) -> LorentzVector:
        return boosts.boost(self, boost_vector)

    def boost_from_to(self, p: LorentzVector, q: LorentzVector) -> LorentzVector:
        return boosts.boost_from_to(self, p, q)

    @staticmethod
    def boost_from_com_to_lab_frame(momenta: list[LorentzVector], x1: float, x2: float, ebeam1: float, ebeam2: float) -> list[LorentzVector]:
        return boosts.boost_from_com_to_lab_frame(momenta, x1, x2, ebeam1, ebeam2)

    # Formatting

    def __repr__(self) -> str:
        return f"LorentzVector({self.t!r}, {self.x!r}, {self.y!r}, {self.z!r})"

    def __str__(self) -> str:
        return f"(t:{self.t}, x:{self.x}, y:{self.y}, z:{self.z})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return f"(t:{self.t:{format_spec}}, x:{self.x:{format_spec}}, y:{self.y:{format_spec}}, z:{self.z:{format_spec}})"
