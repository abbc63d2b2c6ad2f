"""
Surface Layer Similarity Functions
==================================

Integral similarity functions (psi) used in the log profile equations:

    U(z) = ustar/kappa * (log(z/z0) - psi_m(z/L) + psi_m(z0/L))
    theta(z) - theta(0) =
            thetastar/kappa * (log(z/z0) - psi_h(z/L) + psi_h(z0/L))

where z is the height a.g.l. For unstable conditions the Paulson (1970)
closed forms are used. For stable conditions

    psi(z/L) = (1/phi(x) - 1) integrated from x = 0 to z/L

is evaluated with a composite rectangle rule (right endpoints) on
`psi_steps` equal subintervals. The scheme is first order; accuracy of
roughly 1e-4 or better in the stable branch requires raising psi_steps
above the default.
"""
import numpy as np

from .config import resolve_parameters
from .profiles import get_profile
from .stability import phi_m, phi_h, _as_array, _output


def Paulson_m(x):
    """Momentum similarity function for unstable conditions, with
    x = (1 - a_m*zeta)**0.25

    Ref: Paulson, C.A., 1970: The mathematical representation of wind
         speed and temperature in the unstable atmospheric surface layer.
         J. Appl. Meteor., 9, 857-861.
    """
    return 2*np.log((1 + x)/2) + np.log((1 + x**2)/2) \
            - 2*np.arctan(x) + np.pi/2

def Paulson_h(y):
    """Heat similarity function for unstable conditions, with
    y = (1 - a_h*zeta)**0.5

    Ref: Paulson, C.A., 1970: The mathematical representation of wind
         speed and temperature in the unstable atmospheric surface layer.
         J. Appl. Meteor., 9, 857-861.
    """
    return 2*np.log((1 + y)/2)


def integrate_stable(zeta, phi, profile, steps):
    """Right-endpoint rectangle rule for (1/phi - 1) over [0, zeta]

    Parameters
    ----------
    zeta : ndarray
        Upper integration limits, one per output value
    phi : callable
        phi_m or phi_h
    profile : Profile
    steps : int
        Number of equal subintervals
    """
    zeta = np.asarray(zeta, dtype=float)
    dz = zeta / steps
    z = np.arange(1, steps+1).reshape((steps,) + (1,)*zeta.ndim) * dz
    return np.sum(1/phi(z, profile) - 1, axis=0) * dz


def _psi(zeta, profile, params, unstable_func, phi, a, power):
    params = resolve_parameters(params)
    zeta, scalar = _as_array(zeta)
    psi = np.zeros(zeta.shape)
    # Neutral conditions: psi is exactly zero
    neutral = np.abs(zeta) < params.singularity_tolerance
    # Unstable conditions
    uns = (zeta < 0) & ~neutral
    psi[uns] = unstable_func((1 - a*zeta[uns])**power)
    # Stable conditions
    sta = (zeta >= 0) & ~neutral
    if np.any(sta):
        psi[sta] = integrate_stable(zeta[sta], phi, profile, params.psi_steps)
    return _output(psi, scalar)


def psi_m(zeta, profile='BD71', params=None):
    """Integral momentum similarity function

    Parameters
    ----------
    zeta : float or array-like
        Scaled height z/L
    profile : str or Profile
        Registry key or coefficient record
    params : NumericalParameters, optional
        Supplies psi_steps and singularity_tolerance
    """
    profile = get_profile(profile)
    return _psi(zeta, profile, params, Paulson_m, phi_m,
                profile.unstable.a_m, 0.25)


def psi_h(zeta, profile='BD71', params=None):
    """Integral heat similarity function

    Parameters
    ----------
    zeta : float or array-like
        Scaled height z/L
    profile : str or Profile
        Registry key or coefficient record
    params : NumericalParameters, optional
        Supplies psi_steps and singularity_tolerance
    """
    profile = get_profile(profile)
    return _psi(zeta, profile, params, Paulson_h, phi_h,
                profile.unstable.a_h, 0.5)
