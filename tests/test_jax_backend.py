""" Test differentiating through vector operations with the jax backend. """

# pylint: disable=invalid-name, redefined-outer-name

import pytest

from lorentzvector import LorentzVector, Vector
from lorentzvector.fields import ops_for, is_real_field

jax = pytest.importorskip('jax')
jnp = pytest.importorskip('jax.numpy')


def test_jax_values_select_the_jax_backend():
    value = jnp.asarray(1.5)
    assert ops_for(value).name == 'jax'
    assert ops_for(2., value, 3.).name == 'jax'
    assert is_real_field(value)
    assert not is_real_field(jnp.asarray(1. + 2.j))


def test_grad_square():
    def square(t):
        return LorentzVector(t, 1., 2., 3.).square()

    assert float(jax.grad(square)(5.)) == pytest.approx(10., rel=1e-6)


def test_grad_pt():
    def transverse(x):
        return LorentzVector(10., x, 4., 0.).pt()

    assert float(jax.grad(transverse)(3.)) == pytest.approx(0.6, rel=1e-6)


def test_grad_through_boost():
    beta = Vector(0., 0., 0.6)

    def boosted_z(e):
        return LorentzVector(e, 0., 0., 0.).boost(beta).z

    assert float(jax.grad(boosted_z)(2.)) == pytest.approx(0.75, rel=1e-6)


def test_real_part_stops_gradient():
    def real_energy(t):
        return LorentzVector(t, 1., 1., 1.).real().t + t

    assert float(jax.grad(real_energy)(3.)) == pytest.approx(1., rel=1e-6)
