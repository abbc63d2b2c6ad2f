"""
Profile coefficient registry
============================

Literature parameterizations of the flux-gradient relationships

    phi_m(zeta) = (1 - a_m*zeta)**(-b_m)            zeta < 0
    phi_h(zeta) = (1 - a_h*zeta)**(-b_h)

    phi_m(zeta) = 1 + b_m*zeta [+ c_m*zeta**2]      zeta >= 0
    phi_h(zeta) = 1 + b_h*zeta [+ c_h*zeta**2]

The quadratic stable correction is only applied for profiles that
define c_m/c_h. The table below is fixed; a different set of profiles
may be supplied as a custom registry mapping wherever `registry` is
accepted.
"""
from collections import namedtuple, OrderedDict
from types import MappingProxyType

from .errors import UnknownProfile


Profile = namedtuple('Profile', ['key', 'name', 'unstable', 'stable'])

UnstableCoefficients = namedtuple('UnstableCoefficients',
                                  ['a_m', 'a_h', 'b_m', 'b_h'])

StableCoefficients = namedtuple('StableCoefficients',
                                ['b_m', 'b_h', 'c_m', 'c_h'],
                                defaults=[None, None])


# Coefficient sets
# ================

# Ref: Businger, J.A., J.C. Wyngaard, Y. Izumi and E.F. Bradley, 1971:
#      Flux-profile relationships in the atmospheric surface layer.
#      J. Atmos. Sci., 28, 181-189.
#      Dyer, A.J., 1974: A review of flux-profile relationships.
#      Bound.-Layer Meteor., 7, 363-372.
BD71 = Profile(
    key='BD71',
    name='Businger-Dyer 1971',
    unstable=UnstableCoefficients(a_m=16.0, a_h=16.0, b_m=0.25, b_h=0.5),
    stable=StableCoefficients(b_m=5.0, b_h=5.0),
)

# Ref: Hogstrom, U., 1988: Non-dimensional wind and temperature profiles
#      in the atmospheric surface layer: A re-evaluation.
#      Bound.-Layer Meteor., 42, 55-78.
HOG88 = Profile(
    key='HOG88',
    name='Högström 1988',
    unstable=UnstableCoefficients(a_m=19.3, a_h=11.6, b_m=0.25, b_h=0.5),
    stable=StableCoefficients(b_m=6.0, b_h=7.8),
)

# Ref: Cheng, Y. and W. Brutsaert, 2005: Flux-profile relationships for
#      wind speed and temperature in the stable atmospheric boundary
#      layer. Bound.-Layer Meteor., 114, 519-538.
CB05 = Profile(
    key='CB05',
    name='Cheng-Brutsaert 2005',
    unstable=UnstableCoefficients(a_m=16.0, a_h=16.0, b_m=0.25, b_h=0.5),
    stable=StableCoefficients(b_m=6.1, b_h=6.1, c_m=5.3, c_h=5.3),
)

registry = MappingProxyType(OrderedDict(
    (profile.key, profile) for profile in [BD71, HOG88, CB05]
))


def list_profiles(registry=registry):
    """Registered profile keys, in registry order"""
    return list(registry.keys())


def get_profile(name, registry=registry):
    """Look up a profile by key

    A Profile passed in is returned unchanged, so that every function
    in this package can accept either a key or a record.

    Raises
    ------
    UnknownProfile
        If `name` is not a key of `registry`
    """
    if isinstance(name, Profile):
        return name
    try:
        return registry[name]
    except (KeyError, TypeError):
        raise UnknownProfile(name, known=registry.keys()) from None


def _fmt(coef):
    return '{:g}'.format(coef)


def describe_profile(profile):
    """Formula summary for a profile, one string per line"""
    profile = get_profile(profile)
    uns = profile.unstable
    sta = profile.stable
    lines = [
        '{} ({})'.format(profile.name, profile.key),
        'Unstable (zeta < 0):',
        '  phi_m = (1 - {}*zeta)^(-{})'.format(_fmt(uns.a_m), _fmt(uns.b_m)),
        '  phi_h = (1 - {}*zeta)^(-{})'.format(_fmt(uns.a_h), _fmt(uns.b_h)),
        'Stable (zeta >= 0):',
    ]
    for var, b, c in [('m', sta.b_m, sta.c_m), ('h', sta.b_h, sta.c_h)]:
        line = '  phi_{} = 1 + {}*zeta'.format(var, _fmt(b))
        if c is not None:
            line += ' + {}*zeta^2'.format(_fmt(c))
        lines.append(line)
    return lines
