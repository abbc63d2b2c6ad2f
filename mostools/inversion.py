"""
Richardson number inversion
===========================

Recover zeta = z/L from a gradient or bulk Richardson number with a
bounded Newton-Raphson iteration. The derivative of the forward map is
estimated with a central difference, and every iterate is clamped to
params.zeta_bounds.

The forward maps are smooth and monotone within each stability branch
but not across the neutral point, so the initial guess should be on
the same side of zero as the target (the default does this).
"""
from collections import namedtuple
import logging
import warnings

from .config import resolve_parameters, min_derivative
from .errors import DegenerateDenominator, NonConvergence, StalledDerivative
from .profiles import get_profile
from .richardson import ri_g, _ri_b, _get_log_z_over_z0

logger = logging.getLogger(__name__)

CONVERGED = 'converged'
NONCONVERGENCE = 'nonconvergence'
STALLED_DERIVATIVE = 'stalled_derivative'

InversionResult = namedtuple('InversionResult', [
    'zeta',        # returned root estimate
    'converged',   # True if |forward(zeta) - target| < newton_tolerance
    'iterations',  # number of Newton updates performed
    'residual',    # forward(zeta) - target at the returned zeta
    'status',      # CONVERGED, NONCONVERGENCE or STALLED_DERIVATIVE
    'degenerate',  # a bulk Richardson evaluation hit a vanishing denominator
])


def default_initial_guess(target):
    """Small guess on the same side of neutral as the target"""
    return 0.1 if target >= 0 else -0.1


def _clamp(zeta, bounds):
    return min(max(zeta, bounds[0]), bounds[1])


def newton(forward, target, initial_guess, params=None, neutral_guard=False):
    """Solve forward(zeta) = target for zeta

    Parameters
    ----------
    forward : callable
        Scalar function of zeta
    target : float
    initial_guess : float
    params : NumericalParameters, optional
        Supplies the tolerance, iteration budget, derivative step and
        zeta bounds
    neutral_guard : bool
        Move iterates closer to zero than params.singularity_tolerance
        out to the tolerance before evaluating forward()

    Returns
    -------
    (zeta, status, iterations, residual)
    """
    params = resolve_parameters(params)
    h = params.derivative_step
    tol = params.singularity_tolerance
    zeta = _clamp(float(initial_guess), params.zeta_bounds)
    status = NONCONVERGENCE
    residual = None
    iterations = 0
    for _ in range(params.newton_max_iterations):
        if neutral_guard and abs(zeta) < tol:
            zeta = tol if zeta >= 0 else -tol
        residual = forward(zeta) - target
        if abs(residual) < params.newton_tolerance:
            status = CONVERGED
            break
        deriv = (forward(zeta + h) - forward(zeta - h)) / (2*h)
        if abs(deriv) < min_derivative:
            status = STALLED_DERIVATIVE
            break
        zeta = _clamp(zeta - residual/deriv, params.zeta_bounds)
        iterations += 1
        logger.debug('iteration %d: zeta=%.12g residual=%.3e',
                     iterations, zeta, residual)
    if status == NONCONVERGENCE:
        residual = forward(zeta) - target
    return zeta, status, iterations, residual


def _report(result, kind, target, profile):
    if result.converged:
        logger.debug('%s=%g -> zeta=%.10g for %s after %d iterations',
                     kind, target, result.zeta, profile.key, result.iterations)
        return
    if result.status == STALLED_DERIVATIVE:
        category = StalledDerivative
        msg = 'derivative vanished'
    else:
        category = NonConvergence
        msg = 'no convergence after {} iterations'.format(result.iterations)
    msg = ('Inverting {}={:g} for {}: {}; returning zeta={:g} '
           '(residual {:.3e})').format(kind, target, profile.key, msg,
                                       result.zeta, result.residual)
    logger.warning(msg)
    warnings.warn(msg, category, stacklevel=3)


def zeta_from_rig(target, profile='BD71', initial_guess=None, params=None,
                  full_output=False):
    """Scaled height zeta for a gradient Richardson number

    Parameters
    ----------
    target : float
        Gradient Richardson number Ri_g
    profile : str or Profile
        Registry key or coefficient record
    initial_guess : float, optional
        Starting zeta; +0.1 for target >= 0 and -0.1 otherwise
    params : NumericalParameters, optional
    full_output : bool
        If True, return (zeta, InversionResult)

    If the iteration does not converge the last iterate is returned and
    a NonConvergence (or StalledDerivative) warning is issued.
    """
    profile = get_profile(profile)
    params = resolve_parameters(params)
    target = float(target)
    if initial_guess is None:
        initial_guess = default_initial_guess(target)

    def forward(zeta):
        return ri_g(zeta, profile)

    zeta, status, iterations, residual = newton(forward, target,
                                                initial_guess, params)
    result = InversionResult(zeta, status == CONVERGED, iterations,
                             residual, status, False)
    _report(result, 'Ri_g', target, profile)
    if full_output:
        return zeta, result
    return zeta


def zeta_from_rib(target, profile='BD71', log_z_over_z0=None,
                  initial_guess=None, params=None, full_output=False):
    """Scaled height zeta for a bulk Richardson number

    Parameters
    ----------
    target : float
        Bulk Richardson number Ri_b
    profile : str or Profile
        Registry key or coefficient record
    log_z_over_z0 : float, optional
        ln(z/z0); defaults to params.log_z_over_z0
    initial_guess : float, optional
        Starting zeta; +0.1 for target >= 0 and -0.1 otherwise
    params : NumericalParameters, optional
    full_output : bool
        If True, return (zeta, InversionResult)

    The returned InversionResult.degenerate flag is set if any
    evaluation of Ri_b fell back to 0 because its denominator vanished.
    """
    profile = get_profile(profile)
    params = resolve_parameters(params)
    L = _get_log_z_over_z0(log_z_over_z0, params)
    target = float(target)
    if initial_guess is None:
        initial_guess = default_initial_guess(target)
    degenerate = False

    def forward(zeta):
        nonlocal degenerate
        value, flag = _ri_b(zeta, profile, L, params)
        degenerate = degenerate or flag
        return value

    zeta, status, iterations, residual = newton(forward, target,
                                                initial_guess, params,
                                                neutral_guard=True)
    result = InversionResult(zeta, status == CONVERGED, iterations,
                             residual, status, degenerate)
    if degenerate:
        msg = ('Bulk Richardson denominator vanished while inverting '
               'Ri_b={:g} for {} with log(z/z0)={:g}').format(target, profile.key, L)
        logger.warning(msg)
        warnings.warn(msg, DegenerateDenominator, stacklevel=2)
    _report(result, 'Ri_b', target, profile)
    if full_output:
        return zeta, result
    return zeta
