"""
Parameter conversions from raw user input

    rig_to_zeta : Ri_g -> zeta (then Ri_b, phi_m, phi_h at that zeta)
    rib_to_zeta : Ri_b -> zeta (then Ri_g, phi_m, phi_h)
    zeta_to_all : zeta -> Ri_g, Ri_b, phi_m, phi_h
"""
from collections import OrderedDict
import math
import numbers

from .config import resolve_parameters
from .errors import InvalidInput
from .inversion import zeta_from_rig, zeta_from_rib
from .profiles import get_profile
from .richardson import ri_g, ri_b
from .stability import phi_m, phi_h

modes = ['rig_to_zeta', 'rib_to_zeta', 'zeta_to_all']


def parse_value(raw):
    """Interpret `raw` (a number or numeric string) as a finite float

    Raises
    ------
    InvalidInput
        For empty, non-numeric, NaN or infinite input
    """
    if isinstance(raw, bool):
        raise InvalidInput('Invalid input: {!r}'.format(raw))
    if isinstance(raw, numbers.Real):
        value = float(raw)
    elif isinstance(raw, str):
        if raw.strip() == '':
            raise InvalidInput('Invalid input: empty value')
        try:
            value = float(raw)
        except ValueError:
            raise InvalidInput('Invalid input: {!r} is not a number'.format(raw)) from None
    else:
        raise InvalidInput('Invalid input: unsupported type {}'.format(type(raw).__name__))
    if not math.isfinite(value):
        raise InvalidInput('Invalid input: {!r} is not finite'.format(raw))
    return value


def convert(raw, mode='rig_to_zeta', profile='BD71', params=None):
    """Convert one stability parameter into all the others

    Parameters
    ----------
    raw : str or float
        Input value, e.g. the contents of a text field
    mode : str
        'rig_to_zeta', 'rib_to_zeta' or 'zeta_to_all'
    profile : str or Profile
        Registry key or coefficient record
    params : NumericalParameters, optional

    Returns
    -------
    OrderedDict with 'input' (a label such as 'Ri_g = 0.1'), 'zeta',
    'Ri_g', 'Ri_b', 'phi_m', 'phi_h', and for the inversion modes
    'converged' and 'status'
    """
    if mode not in modes:
        raise ValueError('Unknown mode: {}; expected one of {}'.format(
            mode, ', '.join(modes)))
    profile = get_profile(profile)
    params = resolve_parameters(params)
    value = parse_value(raw)
    result = OrderedDict()
    info = None
    if mode == 'rig_to_zeta':
        result['input'] = 'Ri_g = {:g}'.format(value)
        zeta, info = zeta_from_rig(value, profile, params=params,
                                   full_output=True)
    elif mode == 'rib_to_zeta':
        result['input'] = 'Ri_b = {:g}'.format(value)
        zeta, info = zeta_from_rib(value, profile, params=params,
                                   full_output=True)
    else:
        zmin, zmax = params.zeta_bounds
        if not zmin <= value <= zmax:
            raise InvalidInput('Invalid input: zeta={:g} is outside [{:g}, {:g}]'.format(
                value, zmin, zmax))
        result['input'] = 'zeta = {:g}'.format(value)
        zeta = value
    result['zeta'] = zeta
    result['Ri_g'] = ri_g(zeta, profile)
    result['Ri_b'] = ri_b(zeta, profile, params=params)
    result['phi_m'] = phi_m(zeta, profile)
    result['phi_h'] = phi_h(zeta, profile)
    if info is not None:
        result['converged'] = info.converged
        result['status'] = info.status
    return result
