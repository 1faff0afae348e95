"""
Tests for the bandwidth adjustment calibration.
"""

import numpy as np
import pytest


def test_fit_recovers_synthetic_coefficients():
    """Grid search on c2 plus least squares recovers a noiseless model."""
    from rkaiser_design import fit_rho_regression

    beta = np.linspace(0.1, 0.9, 17)
    rho = 0.85 + 0.07 * np.log(beta - 0.05)

    fit = fit_rho_regression(beta, rho, c2_grid=np.linspace(0.0, 0.09, 91))

    assert fit['c2'] == pytest.approx(0.05, abs=1e-6)
    assert fit['c0'] == pytest.approx(0.85, abs=1e-6)
    assert fit['c1'] == pytest.approx(0.07, abs=1e-6)
    assert fit['rmse'] < 1e-8


def test_fit_default_grid_below_min_beta():
    from rkaiser_design import fit_rho_regression

    beta = np.array([0.2, 0.3, 0.4, 0.5])
    rho = np.array([0.68, 0.74, 0.77, 0.79])
    fit = fit_rho_regression(beta, rho)

    assert 0.0 <= fit['c2'] < 0.2
    assert np.isfinite(fit['rmse'])


def test_fit_rejects_too_few_points():
    from rkaiser_design import fit_rho_regression

    with pytest.raises(ValueError):
        fit_rho_regression([0.2, np.nan, 0.4], [0.7, 0.7, np.nan])
    with pytest.raises(ValueError):
        fit_rho_regression([0.2, 0.3, 0.4], [0.7, 0.72, 0.74], c2_grid=[0.3, 0.5])


def test_calibration_table_near_estimates():
    """Optimum rho for m=3 stays close to the tabulated regression."""
    from rkaiser_design import run_rho_calibration, estimate_rho

    beta_grid = [0.2, 0.3, 0.4, 0.5]
    result = run_rho_calibration(m_values=[3], beta_grid=beta_grid, k=2, verbose=False)

    assert result['rho_table'].shape == (1, 4)
    assert result['isi_table'].shape == (1, 4)
    estimates = np.array([estimate_rho(3, b) for b in beta_grid])
    np.testing.assert_allclose(result['rho_table'][0], estimates, atol=0.03)

    c = result['coefficients'][3]
    assert set(c) == {'c0', 'c1', 'c2', 'rmse'}
    assert c['rmse'] < 0.01


def test_calibration_verbose(capsys):
    from rkaiser_design import run_rho_calibration

    run_rho_calibration(m_values=[3], beta_grid=[0.3, 0.4, 0.5], verbose=True)
    out = capsys.readouterr().out
    assert "Starting rho calibration" in out
    assert "RMSE" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
