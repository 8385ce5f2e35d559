#!/usr/bin/env python
# scripts/check_identities.py
"""CLI entry point for checking the mimetic identities on a grid.

The grid comes from --nx/--ny or from the ``grid`` section of a YAML config;
an optional ``diagnostics`` section supplies ``seed`` and ``tolerance``.
Exits with 0 when every identity holds, 1 otherwise.
"""
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import jax

from jax_mimetic.config import load_config, save_config, geometry_from_config
from jax_mimetic.core.geometry import Geometry
from jax_mimetic.diagnostics import check_identities


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Check discrete vector-calculus identities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --nx 50 --ny 25              Check a 50 x 25 grid
  %(prog)s --config grid.yaml           Read the grid from a YAML file
  %(prog)s --nx 8 --ny 8 -o out.yaml    Save the residuals
""",
    )
    parser.add_argument("--config", help="YAML config with a 'grid' section")
    parser.add_argument("--nx", type=int, help="Interior cells in x")
    parser.add_argument("--ny", type=int, help="Interior cells in y")
    parser.add_argument("--seed", type=int, help="PRNG seed (default: 0)")
    parser.add_argument("--tolerance", type=float, help="Relative tolerance (default: 1e-13)")
    parser.add_argument("--output", "-o", help="Write results to this YAML file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    config = load_config(args.config) if args.config else {}
    diag_config = config.get("diagnostics", {})

    if args.nx is not None or args.ny is not None:
        if args.nx is None or args.ny is None:
            logging.error("--nx and --ny must be given together")
            return 2
        geometry = Geometry(args.nx, args.ny)
    elif config:
        geometry = geometry_from_config(config)
    else:
        parser.print_help()
        return 2

    seed = args.seed if args.seed is not None else int(diag_config.get("seed", 0))
    tolerance = (
        args.tolerance if args.tolerance is not None
        else float(diag_config.get("tolerance", 1e-13))
    )

    results = check_identities(geometry, jax.random.PRNGKey(seed), tolerance)

    print(f"Grid: {geometry.nx} x {geometry.ny}")
    for result in results:
        status = "PASS" if result.passed else "FAIL"
        print(f"  [{status}] {result.name}: {result.value:.2e}")

    if args.output:
        save_config(
            {
                "grid": {"nx": geometry.nx, "ny": geometry.ny},
                "results": {r.name: r.to_dict() for r in results},
            },
            args.output,
        )

    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
