from __future__ import annotations
from typing import Any, TYPE_CHECKING

from .fields import real_ops_for
from .utils import KinematicsError, Colour, logger

if TYPE_CHECKING:
    from .vectors import LorentzVector


def spatial_distance(v: LorentzVector) -> Any:
    ops = real_ops_for(v.x, v.y, v.z)
    return ops.sqrt(v.x * v.x + v.y * v.y + v.z * v.z)


def euclidean_distance(v: LorentzVector) -> Any:
    ops = real_ops_for(v.t, v.x, v.y, v.z)
    return ops.sqrt(v.t * v.t + v.x * v.x + v.y * v.y + v.z * v.z)


def pt(v: LorentzVector) -> Any:
    """Compute transverse momentum."""
    ops = real_ops_for(v.x, v.y)
    return ops.sqrt(v.x * v.x + v.y * v.y)


def pseudo_rap(v: LorentzVector) -> Any:
    """Compute pseudorapidity.

    Along the beam axis (or for a vector with no spatial extent) the polar angle is
    undefined and the largest representable value is returned, with the sign of z.
    """
    ops = real_ops_for(v.x, v.y, v.z)
    p_t = pt(v)
    eps = ops.epsilon(v.z)
    if p_t < eps and ops.abs(v.z) < eps:
        logger.debug(
            f"Pseudorapidity of {Colour.BLUE}{v}{Colour.END} is undefined, returning the extremal value.")
        if v.z < 0:
            return ops.min_value(v.z)
        return ops.max_value(v.z)
    th = ops.atan2(p_t, v.z)
    return -ops.log(ops.tan(th / 2))


def getdelphi(p1: LorentzVector, p2: LorentzVector) -> Any:
    """Compute the phi-angle separation between p1 and p2."""
    ops = real_ops_for(p1.x, p1.y, p2.x, p2.y)
    pt1 = pt(p1)
    pt2 = pt(p2)
    if pt1 == 0 or pt2 == 0:
        logger.debug(
            f"Azimuthal angle undefined for vanishing transverse momentum ({pt1}, {pt2}).")
        return ops.max_value(pt1 * pt2)

    tmp = (p1.x * p2.x + p1.y * p2.y) / (pt1 * pt2)
    one = ops.one(tmp)
    if ops.abs(tmp) > one + ops.epsilon(tmp):
        raise KinematicsError(
            f'Cosine larger than 1. in phase-space cuts: {tmp} for p1 = {p1}, p2 = {p2}.')
    if ops.abs(tmp) > one:
        return ops.acos(tmp / ops.abs(tmp))
    return ops.acos(tmp)


def delta_r(p1: LorentzVector, p2: LorentzVector) -> Any:
    """Compute the deltaR separation between p1 and p2."""
    delta_eta = pseudo_rap(p1) - pseudo_rap(p2)
    delta_phi = getdelphi(p1, p2)
    ops = real_ops_for(delta_eta, delta_phi)
    return ops.sqrt(delta_eta * delta_eta + delta_phi * delta_phi)
