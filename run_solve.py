#!/usr/bin/env python
import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from utils.logging_config import setup_logging, get_logger
from inout.matrix_file import load_matrix_config
from core.matrix_holder import MatrixHolder
from core.cache_solve import cache_solve
from core.exceptions import CacheMatrixError

logger = get_logger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Invert the matrix from a YAML matrix file, reusing the cached inverse.

    Command-line arguments:
      --matrix: Path to the YAML matrix file.
      --repeat: Number of solves per matrix (2+ shows cache hits).
      --dump: Optional path to dump every inverse (e.g., inverses.npz).
      --log-file: Optional path that also receives the log output.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Invert a matrix with a cached inverse.")
    parser.add_argument("--matrix", required=True, help="Path to the YAML matrix file.")
    parser.add_argument("--repeat", type=int, default=1, help="Solves per matrix (default: 1).")
    parser.add_argument("--dump", help="Path to dump the inverses (e.g., inverses.npz)", default=None)
    parser.add_argument("--log-file", help="Also write log output to this file.", default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)
    if args.repeat < 1:
        parser.error("--repeat must be at least 1")

    try:
        config = load_matrix_config(args.matrix)
        holder = MatrixHolder(config.matrix)
        inverses = []
        for step, update in enumerate([None] + config.updates):
            if update is not None:
                holder.set_matrix(update)
                logger.info("Applied update %d (%dx%d).", step, *holder.shape)
            for _ in range(args.repeat):
                inverse = cache_solve(
                    holder,
                    assume_posdef=config.solver.assume_posdef,
                    check_finite=config.solver.check_finite,
                    tol=config.solver.tol,
                )
            inverses.append(inverse)
            print(f"Inverse {step} ({inverse.shape[0]}x{inverse.shape[1]}):")
            print(np.array2string(inverse, precision=6, suppress_small=True))
    except (CacheMatrixError, ValueError) as e:
        logger.error("Matrix inversion failed: %s", e)
        return 1

    if args.dump:
        np.savez(args.dump, **{f"inverse_{i}": inv for i, inv in enumerate(inverses)})
        print(f"Inverses dumped to {args.dump}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
