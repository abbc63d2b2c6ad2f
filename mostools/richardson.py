"""
Richardson number conversions
=============================

Forward maps from the scaled height zeta = z/L to

    gradient Richardson number   Ri_g = zeta * phi_h / phi_m**2
    bulk Richardson number       Ri_b = zeta * (ln(z/z0) - psi_h)
                                             / (ln(z/z0) - psi_m)**2
"""
import logging
import warnings

import numpy as np

from .config import resolve_parameters, min_denominator
from .errors import DegenerateDenominator
from .profiles import get_profile
from .similarity import psi_m, psi_h
from .stability import phi_m, phi_h, _as_array, _output

logger = logging.getLogger(__name__)


def log_z_over_z0(z, z0):
    """Calculate ln(z/z0) from the measurement height z and the
    roughness length z0 [m]
    """
    if not z0 > 0:
        raise ValueError('roughness length must be positive, got {}'.format(z0))
    if not z > z0:
        raise ValueError('height z={} must be above the roughness length z0={}'.format(z, z0))
    return float(np.log(z/z0))


def ri_g(zeta, profile='BD71'):
    """Gradient Richardson number for scaled height(s) zeta"""
    profile = get_profile(profile)
    zeta, scalar = _as_array(zeta)
    pm = phi_m(zeta, profile)
    ph = phi_h(zeta, profile)
    return _output(zeta * ph / (pm * pm), scalar)


def _ri_b(zeta, profile, L, params):
    """Scalar bulk Richardson number, returns (value, degenerate)"""
    if abs(zeta) < params.singularity_tolerance:
        return 0.0, False
    denom = (L - psi_m(zeta, profile, params))**2
    if denom < min_denominator:
        return 0.0, True
    return zeta * (L - psi_h(zeta, profile, params)) / denom, False


def _get_log_z_over_z0(value, params):
    if value is None:
        value = params.log_z_over_z0
    if not value > 0:
        raise ValueError('log_z_over_z0 must be strictly positive, got {}'.format(value))
    return float(value)


def ri_b(zeta, profile='BD71', log_z_over_z0=None, params=None,
         full_output=False):
    """Bulk Richardson number for scaled height zeta

    Parameters
    ----------
    zeta : float
        Scaled height z/L
    profile : str or Profile
        Registry key or coefficient record
    log_z_over_z0 : float, optional
        ln(z/z0); defaults to params.log_z_over_z0
    params : NumericalParameters, optional
    full_output : bool
        If True, return (Ri_b, degenerate) instead of Ri_b

    Near neutral (|zeta| below the singularity tolerance) the result is
    0. If the denominator collapses, 0 is returned and a
    DegenerateDenominator warning is issued.
    """
    profile = get_profile(profile)
    params = resolve_parameters(params)
    L = _get_log_z_over_z0(log_z_over_z0, params)
    value, degenerate = _ri_b(float(zeta), profile, L, params)
    if degenerate:
        msg = ('Bulk Richardson denominator vanishes at zeta={:g} for {} with '
               'log(z/z0)={:g}; returning 0').format(zeta, profile.key, L)
        logger.warning(msg)
        warnings.warn(msg, DegenerateDenominator, stacklevel=2)
    if full_output:
        return value, degenerate
    return value
