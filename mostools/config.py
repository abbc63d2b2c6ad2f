"""
Numerical configuration
=======================

Constants that control quadrature, root finding, and the physical
clamp applied to every solved or generated zeta. A parameter set is an
immutable namedtuple; alternative settings are derived copies created
with get_parameters(), e.g.

    params = get_parameters(psi_steps=1000, log_z_over_z0=np.log(2/0.01))

and passed explicitly to the functions that need them.
"""
from collections import namedtuple
import numbers

import numpy as np


NumericalParameters = namedtuple('NumericalParameters', [
    'psi_steps',              # quadrature subintervals for stable psi
    'newton_tolerance',       # |f| below which a root is accepted
    'newton_max_iterations',  # Newton-Raphson iteration budget
    'derivative_step',        # central-difference step h
    'singularity_tolerance',  # |zeta| below which zeta is neutral
    'zeta_bounds',            # (min, max) clamp for solved/generated zeta
    'log_z_over_z0',          # ln(z/z0) used by the bulk Richardson number
    'table_threshold',        # |zeta| below which tables report Ri_b = 0
    'table_step',             # zeta spacing of the reference tables
], defaults=[
    100,
    1e-10,
    100,
    1e-8,
    1e-10,
    (-10.0, 10.0),
    np.log(10.0/0.1),  # 10 m measurement height over 0.1 m roughness
    1e-5,
    0.1,
])

default_parameters = NumericalParameters()

# derivative underflow threshold and degenerate-denominator threshold
min_derivative = 1e-15
min_denominator = 1e-15


def _check_positive(name, value):
    if not isinstance(value, numbers.Real) or not value > 0:
        raise ValueError('{} must be a positive number, got {}'.format(name, value))


def validate_parameters(params):
    """Raise ValueError if any field of `params` is out of range"""
    for name in ['psi_steps', 'newton_max_iterations']:
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) \
                or value < 1:
            raise ValueError('{} must be a positive integer, got {}'.format(name, value))
    for name in ['newton_tolerance', 'derivative_step', 'singularity_tolerance',
                 'log_z_over_z0', 'table_threshold', 'table_step']:
        _check_positive(name, getattr(params, name))
    try:
        zmin, zmax = params.zeta_bounds
    except (TypeError, ValueError):
        raise ValueError('zeta_bounds must be a (min, max) pair, got {}'.format(
            params.zeta_bounds))
    if not zmin < zmax:
        raise ValueError('zeta_bounds must satisfy min < max, got {}'.format(
            params.zeta_bounds))
    return params


def get_parameters(overrides=None, base=None, **kwargs):
    """Return a validated NumericalParameters instance

    Parameters
    ----------
    overrides : dict, optional
        Parameter values that replace the defaults
    base : NumericalParameters, optional
        Starting point, `default_parameters` if not given
    **kwargs :
        Additional overrides; these take precedence over `overrides`
    """
    if base is None:
        base = default_parameters
    changes = dict(overrides or {})
    changes.update(kwargs)
    unknown = [key for key in changes if key not in NumericalParameters._fields]
    if unknown:
        raise ValueError('{} is not supported; expected one of {}'.format(
            ', '.join(sorted(unknown)), ', '.join(NumericalParameters._fields)))
    if isinstance(changes.get('zeta_bounds'), list):
        changes['zeta_bounds'] = tuple(changes['zeta_bounds'])
    return validate_parameters(base._replace(**changes))


def resolve_parameters(params=None):
    """Return `params`, or the defaults when None"""
    if params is None:
        return default_parameters
    if not isinstance(params, NumericalParameters):
        # allow plain dicts of overrides
        return get_parameters(params)
    return params
