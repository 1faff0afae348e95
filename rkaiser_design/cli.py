"""
Command-line interface for rkaiser-design.
"""

import argparse
import os
import sys
import time
import json


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="rkaiser-design: Root-Nyquist Kaiser Filter Design",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rkaiser-design -k 2 -m 3 --beta 0.3
  rkaiser-design -k 4 -m 5 --beta 0.25 --dt 0.5 -o results/
  rkaiser-design -k 2 -m 3 --beta 0.3 --approximate --quiet -o results/
        """
    )

    parser.add_argument('-k', '--samples-per-symbol', dest='k', type=int, required=True,
                       help='Oversampling rate in samples/symbol (>= 2)')
    parser.add_argument('-m', '--delay', dest='m', type=int, required=True,
                       help='Filter delay in symbols (>= 1)')
    parser.add_argument('--beta', type=float, required=True,
                       help='Excess bandwidth factor in (0,1)')
    parser.add_argument('--dt', type=float, default=0.0,
                       help='Fractional sample delay in [-1,1] (default: 0)')

    parser.add_argument('--approximate', action='store_true',
                       help='Skip the ISI search and use the regression estimate')
    parser.add_argument('--max-iter', type=int, default=10,
                       help='Parabolic search iterations (default: 10)')
    parser.add_argument('-o', '--output', default=None,
                       help='Output directory (default: print taps only)')
    parser.add_argument('--prefix', default='rkaiser',
                       help='Filename prefix for outputs (default: rkaiser)')
    parser.add_argument('--quiet', action='store_true',
                       help='Suppress output')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    from rkaiser_design import RKaiserDesigner, InvalidArgumentError, __version__

    # Print header
    if not args.quiet:
        print("\n" + "=" * 60)
        print("RKAISER-DESIGN: ROOT-NYQUIST KAISER FILTER")
        print(f"Version {__version__}")
        print("=" * 60)

    designer = RKaiserDesigner(max_iterations=args.max_iter, verbose=not args.quiet)

    start_time = time.time()
    try:
        if args.approximate:
            result = designer.design_approximate(args.k, args.m, args.beta, args.dt)
        else:
            result = designer.design(args.k, args.m, args.beta, args.dt)
    except InvalidArgumentError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    design_time = time.time() - start_time

    if args.output is not None:
        coeff_path, info_path = result.save(args.output, prefix=args.prefix)

        # add run metadata
        with open(info_path, 'r') as f:
            info = json.load(f)
        info['version'] = __version__
        info['design_time_sec'] = float(design_time)
        with open(info_path, 'w') as f:
            json.dump(info, f, indent=2)

        if not args.quiet:
            print(f"\nResults saved to: {os.path.abspath(args.output)}")
    else:
        for tap in result.coefficients:
            print(f"{tap:16.12f}")

    if not args.quiet:
        print(f"Design time: {design_time*1000:.1f} ms")

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        sys.exit(1)
