"""
Standardized plots of reference tables

Two panels per figure: Richardson numbers vs zeta and stability
functions vs zeta.
"""
import numpy as np
import matplotlib.pyplot as plt
import pandas as pd

from .reference import ReferenceTable

# Standard field labels
standard_fieldlabels = {'zeta': r'$\zeta = z/L$',
                        'Ri_g': r'$Ri_g$',
                        'Ri_b': r'$Ri_b$',
                        'phi_m': r'$\phi_m$',
                        'phi_h': r'$\phi_h$',
                        }

# Fields drawn in each panel
panel_fields = [['Ri_g', 'Ri_b'], ['phi_m', 'phi_h']]
panel_labels = ['Richardson number', r'$\phi$']

# Default color cycle
default_colors = plt.rcParams['axes.prop_cycle'].by_key()['color']
default_linestyles = ['-', '--']


def _as_dataframes(tables):
    """Return an ordered dict of <label>: DataFrame"""
    if isinstance(tables, (ReferenceTable, pd.DataFrame)):
        tables = [tables]
    if not isinstance(tables, dict):
        tables = {
            (table.profile.key if isinstance(table, ReferenceTable)
             else str(i)): table
            for i, table in enumerate(tables)
        }
    dataframes = {}
    for label, table in tables.items():
        if isinstance(table, ReferenceTable):
            table = table.to_dataframe()
        dataframes[label] = table
    return dataframes


def plot_reference(tables,
                   fig=None, ax=None,
                   fieldlabels={},
                   zetalimits=None,
                   subfigsize=(6,4),
                   labelsubplots=False,
                   **kwargs):
    """
    Plot Richardson numbers and stability functions against zeta

    Usage
    =====
    tables : ReferenceTable, pandas.DataFrame, list, or dict
        Table(s) to plot. DataFrames need the columns of
        ReferenceTable.to_dataframe(). A dict should have entries
        <label>: table; lists are labeled by profile key
    fig : figure handle
        Custom figure handle. Should be specified together with ax
    ax : list or numpy ndarray with two axes handles
        Custom axes handles for the Richardson and phi panels
    fieldlabels : dict
        Custom field labels, entries <fieldname>: label
    zetalimits : list or tuple
        zeta axis limits
    subfigsize : list or tuple
        Standard size of subfigures
    labelsubplots : bool
        Label subplots as (a), (b)
    **kwargs : other keyword arguments
        Options that are passed on to ax.plot()
    """
    dataframes = _as_dataframes(tables)
    fieldlabels = {**standard_fieldlabels, **fieldlabels}

    if ax is None:
        fig, ax = plt.subplots(nrows=1, ncols=2,
                               figsize=(subfigsize[0]*2, subfigsize[1]))
        fig.subplots_adjust(wspace=0.3)
    else:
        assert (np.asarray(ax).size == 2), 'Specified axes does not have the right size'
    axv = np.asarray(ax).reshape(-1)

    for i, (label, df) in enumerate(dataframes.items()):
        color = default_colors[i % len(default_colors)]
        for axi, fields in zip(axv, panel_fields):
            for field, ls in zip(fields, default_linestyles):
                if len(dataframes) > 1:
                    linelabel = '{} {}'.format(label, fieldlabels[field])
                else:
                    linelabel = fieldlabels[field]
                plotting_properties = {'color': color, 'linestyle': ls,
                                       'label': linelabel}
                plotting_properties = {**plotting_properties, **kwargs}
                axi.plot(df['zeta'], df[field], **plotting_properties)

    for axi, ylabel in zip(axv, panel_labels):
        axi.set_xlabel(fieldlabels['zeta'])
        axi.set_ylabel(ylabel)
        axi.grid(True, which='both')
        axi.legend(loc='best')
        if zetalimits is not None:
            axi.set_xlim(zetalimits)

    # Number sub figures as a, b
    if labelsubplots:
        for i, axi in enumerate(axv):
            axi.text(-0.14, -0.18, '('+chr(i+97)+')', transform=axi.transAxes, size=16)

    return fig, ax
