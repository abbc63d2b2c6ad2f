"""
Surface Layer Stability Functions
=================================

Dimensionless flux-gradient relationships (phi) of Monin-Obukhov
similarity theory:

    phi_m(z/L) = kappa*z/ustar * dU/dz
    phi_h(z/L) = kappa*z/thetastar * dtheta/dz

where z is the height a.g.l. and L is the Obukhov length. The
coefficients come from a Profile (see profiles.py).

Functions accept a scalar zeta (and return a float) or an array of
zeta values (and return an ndarray). Each stability branch is evaluated
only where it applies, so the unstable power law is never evaluated
with a negative base.
"""
import numpy as np

from .profiles import get_profile


def _as_array(zeta):
    zeta = np.asarray(zeta, dtype=float)
    return zeta, (zeta.ndim == 0)


def _output(values, scalar):
    if scalar:
        return float(values)
    return values


def _phi(zeta, a, b_uns, b_sta, c_sta):
    phi = np.empty(zeta.shape)
    # Unstable conditions
    uns = zeta < 0
    phi[uns] = (1 - a*zeta[uns])**(-b_uns)
    # Stable conditions
    sta = ~uns
    phi[sta] = 1 + b_sta*zeta[sta]
    if c_sta is not None:
        phi[sta] += c_sta * zeta[sta]**2
    return phi


def phi_m(zeta, profile='BD71'):
    """Momentum stability function

    Parameters
    ----------
    zeta : float or array-like
        Scaled height z/L
    profile : str or Profile
        Registry key or coefficient record
    """
    profile = get_profile(profile)
    zeta, scalar = _as_array(zeta)
    phi = _phi(zeta, profile.unstable.a_m, profile.unstable.b_m,
               profile.stable.b_m, profile.stable.c_m)
    return _output(phi, scalar)


def phi_h(zeta, profile='BD71'):
    """Heat stability function

    Parameters
    ----------
    zeta : float or array-like
        Scaled height z/L
    profile : str or Profile
        Registry key or coefficient record
    """
    profile = get_profile(profile)
    zeta, scalar = _as_array(zeta)
    phi = _phi(zeta, profile.unstable.a_h, profile.unstable.b_h,
               profile.stable.b_h, profile.stable.c_h)
    return _output(phi, scalar)
