#!/usr/bin/env python3
"""
Bandwidth Adjustment Calibration Runner
=======================================

Recomputes the optimum bandwidth adjustment rho over a grid of filter
delays and excess bandwidths, and refits the regression
rho = c0 + c1*ln(beta - c2) used by the estimator.

Usage:
    # Reproduce the tabulated delays:
    python fit_rho_table.py

    # Longer filters, finer beta grid, save the tables:
    python fit_rho_table.py --m 7 8 9 10 --beta-step 0.02 --out calib/

    # Show the rho heatmap:
    python fit_rho_table.py --plot
"""

import argparse
import os
import sys
import time
import json
import numpy as np

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

try:
    from rkaiser_design import run_rho_calibration
except ImportError as e:
    print(f"Error importing rkaiser_design: {e}")
    print("Please ensure you are in the project root or the package is installed.")
    sys.exit(1)


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Root-Nyquist Kaiser rho regression calibration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --m 7 8 9 10 --beta-step 0.02 --out calib/
        """
    )

    grid = parser.add_argument_group("Grid")
    grid.add_argument("--m", type=int, nargs='+', default=[1, 2, 3, 4, 5, 6],
                      help="Filter delays to calibrate (default: 1..6)")
    grid.add_argument("--beta-min", type=float, default=0.05,
                      help="Smallest excess bandwidth (default: 0.05)")
    grid.add_argument("--beta-max", type=float, default=0.95,
                      help="Largest excess bandwidth (default: 0.95)")
    grid.add_argument("--beta-step", type=float, default=0.05,
                      help="Excess bandwidth step (default: 0.05)")

    design = parser.add_argument_group("Design")
    design.add_argument("-k", type=int, default=2,
                        help="Samples per symbol (default: 2)")
    design.add_argument("--dt", type=float, default=0.0,
                        help="Fractional sample delay (default: 0)")
    design.add_argument("--max-iter", type=int, default=10,
                        help="Parabolic search iterations (default: 10)")

    output = parser.add_argument_group("Output")
    output.add_argument("--out", default=None,
                        help="Directory for the rho table and coefficients")
    output.add_argument("--plot", action="store_true",
                        help="Show the rho heatmap")

    return parser.parse_args()


def main():
    args = parse_args()

    print(f"\n{'='*65}")
    print(f" Root-Nyquist Kaiser Regression Calibration")
    print(f"{'='*65}")

    beta_grid = np.round(np.arange(args.beta_min, args.beta_max + 1e-9, args.beta_step), 6)

    t0 = time.time()
    result = run_rho_calibration(
        m_values=args.m,
        beta_grid=beta_grid,
        k=args.k,
        dt=args.dt,
        max_iterations=args.max_iter,
        verbose=True,
        plot=args.plot
    )
    elapsed = time.time() - t0

    if args.out is not None:
        os.makedirs(args.out, exist_ok=True)
        np.savetxt(os.path.join(args.out, 'rho_table.txt'), result['rho_table'],
                   header='rows: m=' + ' '.join(str(m) for m in result['m_values']) +
                          '; cols: beta=' + ' '.join(f'{b:g}' for b in result['beta_grid']))
        with open(os.path.join(args.out, 'rho_coefficients.json'), 'w') as f:
            json.dump({str(m): c for m, c in result['coefficients'].items()}, f, indent=2)
        print(f"\n✓ Tables saved to: {os.path.abspath(args.out)}")

    print(f"\n{'='*65}")
    print(f" CALIBRATION COMPLETED in {elapsed:.1f}s")
    print(f"{'='*65}\n")


if __name__ == "__main__":
    main()
