"""
Command line entry point.

    autoprice Consumer_Reports_April_2019.csv --output-dir figures
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

import pandas as pd

from autoprice import __version__
from autoprice.analysis.config import AnalysisConfig
from autoprice.analysis.pipeline import run_analysis
from autoprice.analysis.report import format_report
from autoprice.core.compute.timing import timed
from autoprice.core.exceptions import AutoPriceError
from autoprice.dataset.prepare import DEFAULT_PRICE_THRESHOLD

logger = logging.getLogger("autoprice")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autoprice",
        description=(
            "Fit and compare OLS models of log(price) on the Consumer Reports "
            "automobile dataset."
        ),
    )
    parser.add_argument("data", type=Path, help="Input CSV (or .tsv) file")
    parser.add_argument(
        "--threshold", type=float, default=DEFAULT_PRICE_THRESHOLD,
        help="Drop rows with price at or above this value (default: %(default)g)",
    )
    parser.add_argument(
        "--output-dir", type=Path, default=None,
        help="Write diagnostic plots as PNG files into this directory",
    )
    parser.add_argument(
        "--no-plots", action="store_true",
        help="Skip plot output even if --output-dir is given",
    )
    parser.add_argument(
        "--backend", choices=("auto", "cpu", "cpu_qr", "cpu_svd"), default="auto",
        help="Regression backend; cpu_svd tolerates collinear predictors",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = AnalysisConfig(
            data_path=args.data,
            price_threshold=args.threshold,
            output_dir=args.output_dir,
            make_plots=not args.no_plots,
            backend=args.backend,
        )
        with timed() as timer:
            result = run_analysis(config)

        print(format_report(result))
        logger.info("Analysis finished in %.3fs", timer.result()["total_seconds"])

        if config.writes_plots:
            from autoprice.analysis.plots import save_plots
            paths = save_plots(result, config.output_dir)
            logger.info("Wrote %d plots to %s", len(paths), config.output_dir)
    except (AutoPriceError, OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
