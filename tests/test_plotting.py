import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pytest

from mostools.plotting import plot_reference
from mostools.reference import generate


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def test_single_table():
    fig, ax = plot_reference(generate('BD71', 'full'))
    assert len(ax) == 2
    for axi in ax:
        assert len(axi.get_lines()) == 2
    assert ax[0].get_ylabel() == 'Richardson number'


def test_multiple_tables():
    tables = {key: generate(key, 'stable') for key in ['BD71', 'CB05']}
    fig, ax = plot_reference(tables, zetalimits=(0, 5), labelsubplots=True)
    for axi in ax:
        assert len(axi.get_lines()) == 4
        assert axi.get_xlim() == (0, 5)
    labels = [line.get_label() for line in ax[1].get_lines()]
    assert labels[0].startswith('BD71')


def test_list_and_dataframe_input():
    df = generate('HOG88', 'unstable').to_dataframe()
    fig, ax = plot_reference(df)
    assert len(ax[0].get_lines()) == 2
    fig, ax = plot_reference([generate('BD71'), generate('HOG88')])
    assert ax[0].get_lines()[0].get_label().startswith('BD71')


def test_existing_axes():
    fig, ax = plt.subplots(ncols=2)
    fig2, ax2 = plot_reference(generate('CB05'), fig=fig, ax=ax)
    assert fig2 is fig
    assert len(ax[1].get_lines()) == 2
