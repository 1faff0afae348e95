"""
Tests for the exact and approximate root-Nyquist Kaiser designs.
"""

import numpy as np
import pytest


# Approximate design for k=2, m=3, beta=0.3, dt=0
# (rho_hat = 0.7424384172, As = 28.594985 dB, fc = 0.5386342374)
GOLDEN_K2_M3_B03 = np.array([
    -0.0372778455,
    0.0682893181,
    0.0569084098,
    -0.1708660037,
    -0.0714577547,
    0.6186639794,
    1.0711319647,
    0.6186639794,
    -0.0714577547,
    -0.1708660037,
    0.0569084098,
    0.0682893181,
    -0.0372778455,
])


@pytest.mark.parametrize("k,m,beta,dt", [
    (2, 1, 0.5, 0.0),
    (2, 3, 0.3, 0.0),
    (3, 5, 0.2, 0.3),
    (4, 3, 0.25, -0.5),
    (2, 8, 0.35, 1.0),
])
def test_length_and_energy(k, m, beta, dt):
    """Both designs return 2*k*m+1 taps with sum(h**2) == k."""
    from rkaiser_design import design_rkaiser_filter, design_rkaiser_filter_approximate

    for design in (design_rkaiser_filter, design_rkaiser_filter_approximate):
        h = design(k, m, beta, dt)
        assert h.shape == (2 * k * m + 1,)
        assert np.all(np.isfinite(h))
        assert np.sum(h**2) == pytest.approx(k, rel=1e-10)


SWEEP_BETAS = [0.01, 0.05, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 0.99]


@pytest.mark.parametrize("dt", [-1.0, 0.0, 1.0])
@pytest.mark.parametrize("beta", SWEEP_BETAS)
@pytest.mark.parametrize("m", [1, 2, 3, 7])
@pytest.mark.parametrize("k", [2, 4, 8])
def test_valid_inputs_always_design(k, m, beta, dt):
    """Every valid parameter set yields finite taps, including small beta
    where the search wanders far from the estimate."""
    from rkaiser_design import design_rkaiser_filter, design_rkaiser_filter_approximate

    for design in (design_rkaiser_filter, design_rkaiser_filter_approximate):
        h = design(k, m, beta, dt)
        assert h.shape == (2 * k * m + 1,)
        assert np.all(np.isfinite(h))
        assert np.sum(h**2) == pytest.approx(k, rel=1e-10)


@pytest.mark.parametrize("k,m,beta", [
    (8, 1, 0.19),
    (2, 1, 0.03),
])
def test_search_through_negative_cutoff(k, m, beta):
    """Trial rho values that push the cutoff below zero are still evaluated."""
    from rkaiser_design import (
        design_rkaiser_filter,
        estimate_rho,
        parabolic_search,
        rkaiser_filter_isi
    )

    trials = []

    def objective(rho):
        trials.append(rho)
        isi, _ = rkaiser_filter_isi(k, m, beta, 0.0, rho)
        return isi.mse

    opt = parabolic_search(objective, estimate_rho(m, beta))
    trial_fc = [(1 + beta - x * beta) / k for x in trials + [opt.rho]]
    assert min(trial_fc) <= 0.0

    h = design_rkaiser_filter(k, m, beta, 0.0)
    assert np.all(np.isfinite(h))
    assert np.sum(h**2) == pytest.approx(k)


def test_golden_approximate_design():
    """Approximate design reproduces the reference taps."""
    from rkaiser_design import design_rkaiser_filter_approximate

    h = design_rkaiser_filter_approximate(2, 3, 0.3, 0.0)
    np.testing.assert_allclose(h, GOLDEN_K2_M3_B03, rtol=0, atol=1e-5)


def test_exact_not_worse_than_approximate():
    """Optimized rho gives no more ISI than the regression estimate."""
    from rkaiser_design import (
        design_rkaiser_filter,
        design_rkaiser_filter_approximate,
        measure_filter_isi
    )

    k, m, beta = 4, 3, 0.25
    isi_exact = measure_filter_isi(design_rkaiser_filter(k, m, beta, 0.0), k, m)
    isi_approx = measure_filter_isi(design_rkaiser_filter_approximate(k, m, beta, 0.0), k, m)

    assert isi_exact.mse <= isi_approx.mse


def test_approximate_is_idempotent():
    """Repeated designs are bit-identical."""
    from rkaiser_design import design_rkaiser_filter_approximate

    h1 = design_rkaiser_filter_approximate(2, 3, 0.3, 0.1)
    h2 = design_rkaiser_filter_approximate(2, 3, 0.3, 0.1)
    assert np.array_equal(h1, h2)


def test_exact_is_idempotent():
    from rkaiser_design import design_rkaiser_filter

    assert np.array_equal(design_rkaiser_filter(4, 3, 0.25), design_rkaiser_filter(4, 3, 0.25))


@pytest.mark.parametrize("k,m,beta,dt", [
    (1, 3, 0.3, 0.0),
    (0, 3, 0.3, 0.0),
    (2, 0, 0.3, 0.0),
    (2, 3, 0.0, 0.0),
    (2, 3, 1.0, 0.0),
    (2, 3, -0.2, 0.0),
    (2, 3, 0.3, 1.5),
    (2, 3, 0.3, -1.01),
    (2.5, 3, 0.3, 0.0),
])
def test_invalid_arguments_rejected(k, m, beta, dt):
    from rkaiser_design import (
        design_rkaiser_filter,
        design_rkaiser_filter_approximate,
        design_rkaiser_filter_with_rho,
        InvalidArgumentError
    )

    for design in (design_rkaiser_filter,
                   design_rkaiser_filter_approximate,
                   design_rkaiser_filter_with_rho):
        with pytest.raises(InvalidArgumentError):
            design(k, m, beta, dt)


def test_error_message_names_entry_point():
    from rkaiser_design import design_rkaiser_filter_approximate, InvalidArgumentError

    with pytest.raises(InvalidArgumentError, match="design_rkaiser_filter_approximate.*k must be"):
        design_rkaiser_filter_approximate(1, 3, 0.3)


def test_invalid_argument_is_value_error():
    from rkaiser_design import design_rkaiser_filter

    with pytest.raises(ValueError):
        design_rkaiser_filter(2, 3, 0.3, 1.5)


def test_with_rho_returns_optimum():
    """Diagnostic entry point returns the rho the taps were built with."""
    from rkaiser_design import (
        design_rkaiser_filter_with_rho,
        design_rkaiser_filter,
        estimate_rho,
        rkaiser_filter_isi,
        normalize_filter_energy
    )

    h, rho = design_rkaiser_filter_with_rho(2, 3, 0.3, 0.0)

    assert rho != estimate_rho(3, 0.3)
    assert rho == pytest.approx(0.7432, abs=1e-3)
    np.testing.assert_array_equal(h, design_rkaiser_filter(2, 3, 0.3, 0.0))

    _, h_rho = rkaiser_filter_isi(2, 3, 0.3, 0.0, rho)
    np.testing.assert_allclose(h, normalize_filter_energy(h_rho, 2))


def test_output_buffer_receives_final_taps():
    """A caller buffer holds exactly the returned, normalized filter."""
    from rkaiser_design import design_rkaiser_filter, design_rkaiser_filter_approximate

    out = np.full(25, np.nan)
    h = design_rkaiser_filter(4, 3, 0.25, 0.0, out=out)
    assert h is out
    np.testing.assert_array_equal(out, design_rkaiser_filter(4, 3, 0.25, 0.0))

    out = np.zeros(13)
    design_rkaiser_filter_approximate(2, 3, 0.3, 0.0, out=out)
    np.testing.assert_allclose(out, GOLDEN_K2_M3_B03, atol=1e-5)


def test_output_buffer_untouched_on_error():
    from rkaiser_design import design_rkaiser_filter, InvalidArgumentError

    out = np.zeros(13)
    with pytest.raises(InvalidArgumentError):
        design_rkaiser_filter(2, 3, 1.2, 0.0, out=out)
    assert not np.any(out)

    with pytest.raises(InvalidArgumentError):
        design_rkaiser_filter(2, 3, 0.3, 0.0, out=np.zeros(12))
    with pytest.raises(InvalidArgumentError):
        design_rkaiser_filter(2, 3, 0.3, 0.0, out=np.zeros(13, dtype=np.int64))


def test_filter_parameters():
    """Cutoff and attenuation from the bandwidth adjustment."""
    from rkaiser_design.models import rkaiser_filter_parameters

    n, fc, As = rkaiser_filter_parameters(2, 3, 0.3, 0.7424384172)
    assert n == 13
    assert fc == pytest.approx(0.5386342374, abs=1e-9)
    assert As == pytest.approx(28.5949850675, abs=1e-8)


def test_designer_result():
    """Designer returns a populated result container."""
    from rkaiser_design import RKaiserDesigner

    designer = RKaiserDesigner()
    result = designer.design(4, 3, 0.25)

    assert result.method == 'exact'
    assert result.spec.n == 25
    assert result.optimization is not None
    assert result.optimization.rho == result.rho
    assert result.optimization.n_evaluations >= 3

    summary = result.get_quality_summary()
    assert summary['n_taps'] == 25
    assert summary['energy'] == pytest.approx(4.0)
    assert summary['isi_mse_db'] < -30

    approx = designer.design_approximate(4, 3, 0.25)
    assert approx.method == 'approximate'
    assert approx.optimization is None
    assert approx.rho == approx.rho_hat
    assert result.isi.mse <= approx.isi.mse


def test_small_beta_search_leaves_unit_interval():
    """The midpoint bracket rule is kept as is and can wander off for
    small excess bandwidths."""
    from rkaiser_design import RKaiserDesigner

    result = RKaiserDesigner().design(2, 2, 0.05)
    assert result.rho < 0
    assert result.optimization.degenerate
    assert np.sum(result.coefficients**2) == pytest.approx(2.0)


def test_verbose_design(capsys):
    from rkaiser_design import RKaiserDesigner

    RKaiserDesigner(max_iterations=2, verbose=True).design(2, 3, 0.3)
    out = capsys.readouterr().out
    assert "Root-Nyquist Kaiser Design" in out
    assert "rho_hat" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
