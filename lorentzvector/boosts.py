from __future__ import annotations
from typing import Any, TYPE_CHECKING

from .fields import real_ops_for
from .utils import Colour, logger, format_components
from . import vectors

if TYPE_CHECKING:
    from .vectors import LorentzVector, Vector


def boost(v: LorentzVector, boost_vector: LorentzVector | Vector) -> LorentzVector:
    """Boost v by the dimensionless velocity given by the spatial part of boost_vector."""
    bx, by, bz = boost_vector.x, boost_vector.y, boost_vector.z
    ops = real_ops_for(v.t, v.x, v.y, v.z, bx, by, bz)

    b2 = bx * bx + by * by + bz * bz
    gamma = ops.inv(ops.sqrt(1 - b2))
    bp = v.x * bx + v.y * by + v.z * bz
    if b2 > 0:
        gamma2 = (gamma - 1) / b2
    else:
        # At rest: (gamma - 1) / b2 is 0 / 0
        logger.debug(f"{Colour.YELLOW}Zero boost vector{Colour.END}, only the energy is rescaled by gamma = 1.")
        gamma2 = ops.zero(b2)
    factor = gamma2 * bp + gamma * v.t

    return vectors.LorentzVector(
        gamma * (v.t + bp),
        ops.mul_add(bx, factor, v.x),
        ops.mul_add(by, factor, v.y),
        ops.mul_add(bz, factor, v.z),
    )


def boost_from_to(v: LorentzVector, p: LorentzVector, q: LorentzVector) -> LorentzVector:
    """Apply to v the pure boost that sends p onto q.

    The boost is built from the two light-cone directions along the unit spatial vector
    pointing from p to q. See appendix A.2.2 of S. Lionetti's PhD thesis.
    """
    ops = real_ops_for(*v, *p, *q)
    eps = ops.epsilon(p.t) + ops.epsilon(p.t)
    p_abs = p.euclidean_distance()
    q_abs = q.euclidean_distance()

    if (p - q).spatial_distance() < eps * eps:
        logger.debug(
            f"Source and target of the boost coincide at [{Colour.BLUE}{format_components(p.spatial().to_list())}{Colour.END}], returning the zero offset.")
        return vectors.LorentzVector.zero(v.t)

    n_vec = q - p
    n_vec = n_vec / n_vec.spatial_distance()

    one = ops.one(n_vec.x)
    na = vectors.LorentzVector(one, n_vec.x, n_vec.y, n_vec.z)
    nb = vectors.LorentzVector(one, -n_vec.x, -n_vec.y, -n_vec.z)

    p_plus = p.dot(nb)
    p_minus = p.dot(na)
    q_plus = q.dot(nb)
    q_minus = q.dot(na)

    # A light-cone component that is negligible for both p and q cannot fix its ratio,
    # which is then the reciprocal of the other one.
    if p_minus / p_abs < eps and q_minus / q_abs < eps:
        if p_plus / p_abs < eps and q_plus / q_abs < eps:
            ratioa = one
            ratiob = one
        else:
            ratiob = q_plus / p_plus
            ratioa = one / ratiob
    else:
        if p_plus / p_abs < eps and q_plus / q_abs < eps:
            ratioa = q_minus / p_minus
            ratiob = one / ratioa
        else:
            ratioa = q_minus / p_minus
            ratiob = q_plus / p_plus

    plus = v.dot(nb)
    minus = v.dot(na)

    return v + na * (ratiob - one) / 2 * plus + nb * (ratioa - one) / 2 * minus


def boost_from_com_to_lab_frame(momenta: list[LorentzVector], x1: Any, x2: Any, ebeam1: Any, ebeam2: Any) -> list[LorentzVector]:
    """Boost a kinematic configuration from the centre-of-mass frame to the lab frame
    given the Bjorken x's x1 and x2 and the two beam energies.

    The first two momenta are the incoming ones: the sign of their z-component sets the
    direction of the corresponding beam. The list is updated in place and returned.
    """
    ops = real_ops_for(x1, x2, ebeam1, ebeam2, momenta[0].z, momenta[1].z)
    e1 = x1 * ebeam1
    e2 = x2 * ebeam2
    zero = ops.zero(e1)

    target_summed = vectors.LorentzVector(e1, zero, zero, ops.copysign(e1, momenta[0].z)) \
        + vectors.LorentzVector(e2, zero, zero, ops.copysign(e2, momenta[1].z))
    source_summed = vectors.LorentzVector(
        2 * ops.sqrt(x1 * x2 * ebeam1 * ebeam2), zero, zero, zero)

    logger.debug(
        f"Boosting {len(momenta)} momenta from {Colour.BLUE}{source_summed}{Colour.END} to {Colour.BLUE}{target_summed}{Colour.END}")
    # We want to send the source to the target
    for i_vec, vec in enumerate(momenta):
        momenta[i_vec] = boost_from_to(vec, source_summed, target_summed)
    return momenta
