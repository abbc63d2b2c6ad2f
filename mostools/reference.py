"""
Reference tables
================

Sweeps of phi_m, phi_h, Ri_g and Ri_b over a regular zeta grid for one
profile and stability regime:

    'unstable' : zeta from zeta_bounds[0] to 0
    'stable'   : zeta from 0 to zeta_bounds[1]
    'full'     : zeta over all of zeta_bounds

With the default parameters these are 101, 101 and 201 points spaced
by 0.1. Tables are lazy: rows are recomputed on every iteration, and
repeated iterations produce identical rows.

Output routines (pandas DataFrame, CSV text and xarray Dataset) use the
fixed column order zeta, phi_m, phi_h, Ri_g, Ri_b.
"""
from collections import namedtuple
import logging
import warnings

import numpy as np
import pandas as pd
import xarray as xr

from .config import resolve_parameters
from .errors import DegenerateDenominator
from .profiles import get_profile, registry
from .richardson import ri_g, _ri_b, _get_log_z_over_z0
from .stability import phi_m, phi_h

logger = logging.getLogger(__name__)

SampleRow = namedtuple('SampleRow', ['zeta', 'phi_m', 'phi_h', 'Ri_g', 'Ri_b'])

columns = list(SampleRow._fields)

regimes = ['unstable', 'stable', 'full']

# default output precision (decimal places)
precision = 4


def zeta_grid(regime='full', params=None):
    """Grid of zeta values for a stability regime

    Points are computed as start + i*step (rather than by accumulation)
    so that every call yields the same values.
    """
    params = resolve_parameters(params)
    zmin, zmax = params.zeta_bounds
    if regime == 'unstable':
        start, stop = zmin, 0.0
    elif regime == 'stable':
        start, stop = 0.0, zmax
    elif regime == 'full':
        start, stop = zmin, zmax
    else:
        raise ValueError('Unknown regime: {}; expected one of {}'.format(
            regime, ', '.join(regimes)))
    step = params.table_step
    npoints = int(round((stop - start) / step)) + 1
    return [start + i*step for i in range(npoints)]


class ReferenceTable(object):
    """Lazy, restartable sequence of SampleRows for one profile and
    regime
    """
    def __init__(self, profile='BD71', regime='full', params=None):
        self.profile = get_profile(profile)
        self.params = resolve_parameters(params)
        self.regime = regime
        self.zeta = zeta_grid(regime, self.params)
        self.log_z_over_z0 = _get_log_z_over_z0(None, self.params)

    def __repr__(self):
        return 'ReferenceTable(profile={!r}, regime={!r}, rows={:d})'.format(
            self.profile.key, self.regime, len(self))

    def __len__(self):
        return len(self.zeta)

    def __iter__(self):
        degenerate = []
        for zeta in self.zeta:
            row, flag = self._sample(zeta)
            if flag:
                degenerate.append(zeta)
            yield row
        if degenerate:
            msg = ('Ri_b set to 0 at {:d} of {:d} points of the {} {} table '
                   '(log(z/z0)={:g})').format(len(degenerate), len(self),
                                              self.profile.key, self.regime,
                                              self.log_z_over_z0)
            logger.warning(msg)
            warnings.warn(msg, DegenerateDenominator, stacklevel=2)

    def _sample(self, zeta):
        """Returns (SampleRow, degenerate)"""
        rib, degenerate = 0.0, False
        if abs(zeta) > self.params.table_threshold:
            rib, degenerate = _ri_b(zeta, self.profile,
                                    self.log_z_over_z0, self.params)
        row = SampleRow(
            zeta=zeta,
            phi_m=phi_m(zeta, self.profile),
            phi_h=phi_h(zeta, self.profile),
            Ri_g=ri_g(zeta, self.profile),
            Ri_b=rib,
        )
        return row, degenerate

    @property
    def filename(self):
        """Default export file name"""
        return 'MOST_reference_{}_{}.csv'.format(self.profile.key, self.regime)

    def to_dataframe(self):
        """All rows as a pandas DataFrame with the standard columns"""
        return pd.DataFrame(list(self), columns=columns)

    def to_csv(self, fpath=None, precision=precision, verbose=False):
        """Write the table as comma-separated text

        Parameters
        ----------
        fpath : str or path-like, optional
            Output file; if None, the CSV text is returned
        precision : int
            Number of decimal places written for every value
        verbose : bool
            Print the output path after writing
        """
        df = self.to_dataframe()
        csv = df.to_csv(fpath, index=False,
                        float_format='%.{:d}f'.format(precision),
                        lineterminator='\n')
        if fpath is not None:
            logger.info('Wrote %d rows to %s', len(df), fpath)
            if verbose:
                print('Wrote '+str(fpath))
        return csv


def generate(profile='BD71', regime='full', params=None):
    """Reference table of phi_m, phi_h, Ri_g and Ri_b for a profile

    Parameters
    ----------
    profile : str or Profile
        Registry key or coefficient record
    regime : str
        'unstable', 'stable' or 'full'
    params : NumericalParameters, optional

    Returns
    -------
    ReferenceTable
        Iterable of SampleRow(zeta, phi_m, phi_h, Ri_g, Ri_b); Ri_b is
        0 wherever |zeta| <= params.table_threshold
    """
    return ReferenceTable(profile, regime, params)


def reference_dataset(profiles=None, regime='full', params=None):
    """Reference tables for several profiles as an xarray Dataset with
    dimensions (profile, zeta)

    Parameters
    ----------
    profiles : list, optional
        Profile keys or records; all registered profiles by default
    regime : str
        'unstable', 'stable' or 'full'
    params : NumericalParameters, optional
    """
    if profiles is None:
        profiles = list(registry.keys())
    profiles = [get_profile(profile) for profile in profiles]
    if len(profiles) == 0:
        raise ValueError('Need to specify at least one profile')
    tables = [generate(profile, regime, params).to_dataframe()
              for profile in profiles]
    zeta = tables[0]['zeta'].values
    data_vars = {
        field: (('profile', 'zeta'),
                np.stack([df[field].values for df in tables]))
        for field in columns[1:]
    }
    ds = xr.Dataset(
        data_vars,
        coords={
            'profile': [profile.key for profile in profiles],
            'zeta': zeta,
            'profile_name': ('profile', [profile.name for profile in profiles]),
        },
        attrs={'regime': regime},
    )
    return ds
