import logging
import warnings

import pytest

from mostools import inversion
from mostools.config import get_parameters
from mostools.errors import (NonConvergence, StalledDerivative,
                             DegenerateDenominator)
from mostools.inversion import (zeta_from_rig, zeta_from_rib, newton,
                                default_initial_guess, CONVERGED,
                                NONCONVERGENCE, STALLED_DERIVATIVE)
from mostools.profiles import list_profiles
from mostools.richardson import ri_g, ri_b
from mostools.similarity import psi_m

round_trip_zeta = [-5.0, -1.0, -0.1, 0.1, 1.0, 5.0]


@pytest.mark.parametrize('profile', list_profiles())
@pytest.mark.parametrize('zeta', round_trip_zeta)
def test_rig_round_trip(profile, zeta):
    assert zeta_from_rig(ri_g(zeta, profile), profile, zeta) == pytest.approx(zeta, abs=1e-6)


@pytest.mark.parametrize('profile', list_profiles())
@pytest.mark.parametrize('zeta', round_trip_zeta)
def test_rib_round_trip(profile, zeta):
    assert zeta_from_rib(ri_b(zeta, profile), profile, initial_guess=zeta) \
            == pytest.approx(zeta, abs=1e-6)


@pytest.mark.parametrize('zeta', round_trip_zeta)
def test_rig_round_trip_default_guess(zeta):
    target = ri_g(zeta, 'BD71')
    root, result = zeta_from_rig(target, 'BD71', full_output=True)
    assert result.converged
    assert root == pytest.approx(zeta, abs=1e-6)


def test_bd71_scenario():
    root, result = zeta_from_rig(0.01, 'BD71', 0.1, full_output=True)
    assert abs(ri_g(root, 'BD71') - 0.01) < 1e-8
    # stable BD71: Ri_g = zeta/(1 + 5*zeta)
    assert root == pytest.approx(0.01/(1 - 5*0.01), rel=1e-7)
    assert result.converged
    assert result.status == CONVERGED
    assert result.zeta == root
    assert abs(result.residual) < 1e-10
    assert result.iterations > 0
    assert result.degenerate is False


@pytest.mark.parametrize('target', [0.05, 0.3])
def test_rib_default_guess_stable(target):
    root, result = zeta_from_rib(target, 'BD71', full_output=True)
    assert result.converged
    assert ri_b(root, 'BD71') == pytest.approx(target, abs=1e-8)


def test_rib_unstable():
    root, result = zeta_from_rib(-0.5, 'HOG88', initial_guess=-0.5, full_output=True)
    assert result.converged
    assert root < 0
    assert ri_b(root, 'HOG88') == pytest.approx(-0.5, abs=1e-8)


def test_rib_custom_log_z_over_z0():
    L = 3.0
    root = zeta_from_rib(0.1, 'CB05', log_z_over_z0=L)
    assert ri_b(root, 'CB05', log_z_over_z0=L) == pytest.approx(0.1, abs=1e-8)
    with pytest.raises(ValueError):
        zeta_from_rib(0.1, 'CB05', log_z_over_z0=-3.0)


def test_rib_neutral_guard():
    root, result = zeta_from_rib(0.0, 'BD71', initial_guess=0.0, full_output=True)
    assert result.converged
    assert abs(root) < 1e-6


def test_rib_degenerate_denominator_is_flagged():
    # log(z/z0) equal to psi_m(-10) collapses the denominator at the lower bound
    L = psi_m(-10.0, 'BD71')
    with warnings.catch_warnings(record=True) as record:
        warnings.simplefilter('always')
        root, result = zeta_from_rib(-1.0, 'BD71', log_z_over_z0=L,
                                     initial_guess=-9.9, full_output=True)
    categories = [w.category for w in record]
    assert DegenerateDenominator in categories
    assert result.degenerate is True
    assert not result.converged
    assert -10.0 <= root <= 10.0


def test_neutral_guard_moves_zero_to_positive_side():
    evaluated = []

    def forward(zeta):
        evaluated.append(zeta)
        return zeta

    newton(forward, 5.0, -0.0, neutral_guard=True)
    assert evaluated[0] == 1e-10
    evaluated[:] = []
    newton(forward, -5.0, -1e-12, neutral_guard=True)
    assert evaluated[0] == -1e-10


def test_default_initial_guess():
    assert default_initial_guess(0.2) == 0.1
    assert default_initial_guess(0.0) == 0.1
    assert default_initial_guess(-0.2) == -0.1


@pytest.mark.parametrize('profile', list_profiles())
@pytest.mark.parametrize('target', [-1e6, -100.0, 100.0, 1e6])
def test_bounded_output(profile, target):
    with pytest.warns(NonConvergence):
        root, result = zeta_from_rig(target, profile, full_output=True)
    assert -10 <= root <= 10
    assert not result.converged
    with pytest.warns(NonConvergence):
        root = zeta_from_rib(target, profile)
    assert -10 <= root <= 10


def test_initial_guess_outside_bounds_is_clamped():
    root = zeta_from_rig(ri_g(1.0, 'BD71'), 'BD71', initial_guess=50.0)
    assert root == pytest.approx(1.0, abs=1e-6)


def test_custom_bounds():
    params = get_parameters(zeta_bounds=(-2, 2))
    with pytest.warns(NonConvergence):
        root = zeta_from_rig(ri_g(5.0, 'BD71'), 'BD71', params=params)
    assert root == 2


def test_nonconvergence_is_reported(caplog):
    params = get_parameters(newton_max_iterations=2)
    with caplog.at_level(logging.WARNING, logger='mostools'):
        with pytest.warns(NonConvergence):
            root, result = zeta_from_rig(0.19, 'BD71', 0.1, params=params,
                                         full_output=True)
    assert result.status == NONCONVERGENCE
    assert result.iterations == 2
    assert result.residual == pytest.approx(ri_g(root, 'BD71') - 0.19)
    assert 'no convergence' in caplog.text


def test_stalled_derivative(monkeypatch):
    monkeypatch.setattr(inversion, 'ri_g', lambda zeta, profile: 0.5)
    with pytest.warns(StalledDerivative):
        root, result = zeta_from_rig(0.1, 'BD71', 0.3, full_output=True)
    assert root == 0.3
    assert result.status == STALLED_DERIVATIVE
    assert not result.converged


def test_converged_inversion_is_silent():
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        zeta_from_rig(0.1, 'HOG88')
        zeta_from_rib(0.1, 'HOG88')


def test_newton_generic():
    root, status, iterations, residual = newton(lambda z: z**3, 8.0, 1.0)
    assert status == CONVERGED
    assert root == pytest.approx(2.0, abs=1e-9)
    zeta, status, iterations, residual = newton(lambda z: 1.0, 0.0, 0.5)
    assert status == STALLED_DERIVATIVE
    assert iterations == 0
    assert residual == 1.0
