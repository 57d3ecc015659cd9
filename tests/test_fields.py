""" Test the scalar field contracts and backends. """

# pylint: disable=invalid-name, redefined-outer-name

import math
import sys
from fractions import Fraction

import numpy as np
import pytest

from lorentzvector import fields
from lorentzvector.fields import (
    Field, RealNumberLike, RealField, ScalarOps, RealOps, ComplexOps, NumpyOps,
    ops_for, real_ops_for, register_backend, is_real_number_like, is_real_field, cast_scalar,
)
from lorentzvector.utils import CastError, FieldCapabilityError
from lorentzvector.vectors import LorentzVector


def test_structural_contracts():
    assert isinstance(1.5, Field)
    assert isinstance(1.5, RealNumberLike)
    assert isinstance(1.5, RealField)
    assert isinstance(2j, Field)
    assert not isinstance(2j, RealNumberLike)
    assert isinstance(np.float32(1.), RealNumberLike)
    assert not isinstance('abc', Field)


def test_backend_selection():
    assert isinstance(ops_for(1.), RealOps)
    assert isinstance(ops_for(1), RealOps)
    assert isinstance(ops_for(1., 2j), ComplexOps)
    assert isinstance(ops_for(np.float32(1.), 1.), NumpyOps)
    assert isinstance(ops_for(np.float64(1.)), NumpyOps)


def test_unknown_scalar_type():
    with pytest.raises(FieldCapabilityError):
        ops_for('abc')


def test_real_ops_rejects_complex():
    with pytest.raises(FieldCapabilityError):
        real_ops_for(1., 2j)
    with pytest.raises(FieldCapabilityError):
        real_ops_for(np.complex128(1.))
    with pytest.raises(FieldCapabilityError):
        ops_for(1j).epsilon(1j)


def test_capability_queries():
    assert is_real_number_like(1.)
    assert is_real_number_like(np.float32(1.))
    assert not is_real_number_like(1j)
    assert not is_real_number_like('abc')
    assert is_real_field(1.)
    assert not is_real_field(1j)


def test_real_ops_follow_ieee():
    ops = RealOps()
    assert ops.log(0.) == -math.inf
    assert math.isnan(ops.log(-1.))
    assert math.isnan(ops.sqrt(-1.))
    assert ops.sqrt(4.) == 2.
    assert ops.epsilon(1.) == sys.float_info.epsilon
    assert ops.max_value(1.) == sys.float_info.max
    assert ops.min_value(1.) == -sys.float_info.max
    assert ops.mul_add(2., 3., 4.) == 10.
    with pytest.raises(ZeroDivisionError):
        ops.inv(0.)


def test_numpy_extremes():
    ops = NumpyOps()
    assert ops.epsilon(np.float32(1.)) == np.finfo(np.float32).eps
    assert ops.max_value(np.float32(1.)) == np.finfo(np.float32).max
    assert ops.min_value(np.float64(1.)) == np.finfo(np.float64).min
    assert np.isinf(ops.inv(np.float64(0.)))
    assert ops.zero(np.float32(3.)).dtype == np.float32
    assert ops.epsilon(5) == np.finfo(np.float64).eps
    assert ops.max_value(np.int32(5)) == np.finfo(np.float64).max


@pytest.mark.parametrize('value, target, expected', [
    (2.7, int, 2),
    (-2.7, int, -2),
    (100., np.int8, np.int8(100)),
    (1.5, np.float32, np.float32(1.5)),
    (3 + 0j, float, 3.),
    (2., complex, 2 + 0j),
    (math.inf, np.float32, np.float32(math.inf)),
    (10**400, int, 10**400),
    (np.int64(7), np.int8, np.int8(7)),
])
def test_cast_scalar(value, target, expected):
    result = cast_scalar(value, target)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize('value, target', [
    (math.nan, int),
    (math.inf, int),
    (300., np.int8),
    (1e300, np.float32),
    (1 + 2j, float),
    ('abc', float),
    (10**400, np.int64),
])
def test_cast_scalar_fails_loudly(value, target):
    with pytest.raises(CastError):
        cast_scalar(value, target)


class FractionOps(ScalarOps):

    name = 'fraction'
    real_field = True

    def is_real(self, value):
        return True


def test_register_backend(monkeypatch):
    monkeypatch.setattr(fields, '_BACKENDS', list(fields._BACKENDS))
    register_backend(lambda v: isinstance(v, Fraction), FractionOps(), priority=5)

    v = LorentzVector(Fraction(1), Fraction(2), Fraction(3), Fraction(4))
    assert isinstance(ops_for(Fraction(1), 1), FractionOps)
    assert (v / Fraction(2)).to_list() == [Fraction(1, 2), 1, Fraction(3, 2), 2]
    assert v.square() == Fraction(-28)
    assert (~v).to_list() == [1, Fraction(1, 2), Fraction(1, 3), Fraction(1, 4)]


def test_mul_add_without_fused_instruction(monkeypatch):
    monkeypatch.setattr(fields, '_fma', None)
    v = LorentzVector(1.5, -2.25, 3.0, 0.5)
    assert RealOps().mul_add(2., 3., 4.) == 10.
    assert v.square_impr() == 1.5 * 1.5 - (-2.25 * -2.25 + (3.0 * 3.0 + 0.5 * 0.5))
