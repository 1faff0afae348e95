"""
Visualization utilities for root-Nyquist Kaiser designs.
"""

import numpy as np
import matplotlib.pyplot as plt
try:
    import seaborn as sns
    HAS_SEABORN = True
except ImportError:
    HAS_SEABORN = False

from .models.rkaiser import RKaiserDesignResult, rkaiser_filter_isi
from .postprocessing import compute_frequency_response, compute_matched_response


def plot_filter_design(result: RKaiserDesignResult,
                       n_fft: int = 4096,
                       figsize: tuple = (14, 8),
                       show: bool = True):
    """
    Impulse response, magnitude response and matched-filter cascade of a
    design.

    Parameters
    ----------
    result : RKaiserDesignResult
        Design to inspect.
    n_fft : int
        FFT size for the magnitude response.
    show : bool
        Call ``plt.show()`` before returning.

    Returns
    -------
    matplotlib.figure.Figure
    """
    spec = result.spec
    h = result.coefficients
    t = (np.arange(len(h)) - (len(h) - 1) / 2) / spec.k

    fig = plt.figure(figsize=figsize)
    gs = fig.add_gridspec(2, 2)

    # Plot 1: impulse response
    ax1 = fig.add_subplot(gs[0, 0])
    ax1.plot(t, h, '-o', markersize=3)
    ax1.set_title(f"Impulse Response ({len(h)} taps)", fontsize=12, fontweight='bold')
    ax1.set_xlabel("Time (symbols)", fontsize=10)
    ax1.set_ylabel("Amplitude", fontsize=10)
    ax1.grid(True, alpha=0.3)

    # Plot 2: magnitude response
    ax2 = fig.add_subplot(gs[0, 1])
    f, H_db = compute_frequency_response(h, n_fft)
    ax2.plot(f * spec.k, H_db)
    ax2.axvline(x=0.5 * (1 - spec.beta), color='gray', linestyle='--', linewidth=1)
    ax2.axvline(x=0.5 * (1 + spec.beta), color='gray', linestyle='--', linewidth=1)
    ax2.set_ylim(-120, 10)
    ax2.set_title("Magnitude Response", fontsize=12, fontweight='bold')
    ax2.set_xlabel("Frequency (symbol rate)", fontsize=10)
    ax2.set_ylabel("Magnitude (dB)", fontsize=10)
    ax2.grid(True, alpha=0.3)

    # Plot 3: matched-filter cascade, symbol instants highlighted
    ax3 = fig.add_subplot(gs[1, :])
    g, g_sym = compute_matched_response(h, spec.k)
    tg = (np.arange(len(g)) - (len(g) - 1) / 2) / spec.k
    t_sym = tg[::spec.k]
    ax3.plot(tg, g, linewidth=1)
    ax3.stem(t_sym, g_sym, linefmt='C1-', markerfmt='C1o', basefmt=' ')
    with np.errstate(divide='ignore'):
        isi_db = 20 * np.log10(result.isi.mse)
    ax3.set_title(f"Matched-Filter Cascade (ISI rms {isi_db:.1f} dB, rho={result.rho:.4f})",
                  fontsize=12, fontweight='bold')
    ax3.set_xlabel("Time (symbols)", fontsize=10)
    ax3.set_ylabel("Amplitude", fontsize=10)
    ax3.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()
    return fig


def plot_isi_vs_rho(k: int, m: int, beta: float, dt: float = 0.0,
                    rho_grid: np.ndarray = None,
                    result: RKaiserDesignResult = None,
                    figsize: tuple = (10, 6),
                    show: bool = True):
    """
    RMS ISI as a function of the bandwidth adjustment factor, with the
    estimate and the optimum of ``result`` marked if given.
    """
    if rho_grid is None:
        rho_grid = np.linspace(0.05, 1.0, 96)

    isi_db = np.empty(len(rho_grid))
    for i, rho in enumerate(rho_grid):
        isi, _ = rkaiser_filter_isi(k, m, beta, dt, rho)
        with np.errstate(divide='ignore'):
            isi_db[i] = 20 * np.log10(isi.mse)

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(rho_grid, isi_db, linewidth=1.5)
    if result is not None:
        ax.axvline(x=result.rho_hat, color='C1', linestyle='--', label='estimate')
        ax.axvline(x=result.rho, color='C2', linestyle='-', label='optimum')
        ax.legend()
    ax.set_title(f"ISI vs rho (k={k}, m={m}, beta={beta})", fontsize=14)
    ax.set_xlabel("Bandwidth adjustment rho", fontsize=12)
    ax.set_ylabel("RMS ISI (dB)", fontsize=12)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()
    return fig


def plot_rho_table(calibration: dict, figsize: tuple = (10, 6), show: bool = True):
    """
    Heatmap of the optimum rho table produced by ``run_rho_calibration``.
    """
    table = calibration['rho_table']
    m_values = calibration['m_values']
    beta_grid = calibration['beta_grid']
    beta_labels = [f"{b:.2f}" for b in beta_grid]

    fig, ax = plt.subplots(figsize=figsize)
    if HAS_SEABORN:
        sns.heatmap(table, ax=ax, annot=len(beta_grid) <= 12, fmt=".3f", cmap="viridis",
                    xticklabels=beta_labels, yticklabels=m_values)
    else:
        im = ax.imshow(table, aspect='auto', cmap="viridis")
        ax.set_xticks(range(len(beta_grid)))
        ax.set_xticklabels(beta_labels)
        ax.set_yticks(range(len(m_values)))
        ax.set_yticklabels(m_values)
        plt.colorbar(im, ax=ax, label='rho')

    ax.set_title(f"Optimum Bandwidth Adjustment (k={calibration['k']})", fontsize=14)
    ax.set_xlabel("Excess bandwidth beta", fontsize=12)
    ax.set_ylabel("Filter delay m", fontsize=12)

    plt.tight_layout()
    if show:
        plt.show()
    return fig
