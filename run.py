"""
Entry Point Script (Demo)
=========================
Runs the analysis on a small built-in data set for development.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' to ensure Python can resolve imports like
   'from fabricanalysis.analysis...' without installing the package.

Usage:
    $ python run.py
"""
import logging
import os
import sys

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from fabricanalysis.core.conversions import lines_to_dcos
from fabricanalysis.logging_config import setup_logging
from fabricanalysis.model.state import AnalysisState, IdCounter
from fabricanalysis.plotting import plot_contours

SAMPLE_LINES = [
    (0, 85), (90, 87), (180, 86), (270, 88),
    (45, 89), (135, 86), (225, 87), (315, 88),
    (20, 70), (200, 72), (110, 65), (300, 75),
]


def main() -> None:
    setup_logging(level=logging.DEBUG, module_levels={"analysis.contouring": logging.INFO})
    logger = logging.getLogger("fabricanalysis.run")

    state = AnalysisState(id_counter=IdCounter("demo"))
    state.set_data(lines_to_dcos(SAMPLE_LINES))
    state.set_contour_options(levels=[2, 4, 6, 8, 10])

    fisher = state.fisher()
    axes = state.principal_axes()
    logger.info(f"Fisher: n={fisher.n}, kappa={fisher.kappa:.2f}, alpha95={fisher.alpha95:.2f} deg")
    logger.info(f"Woodcock: K={axes.K:.3f}, C={axes.C:.3f}")
    logger.info(f"Vollmer: P={axes.P:.3f}, G={axes.G:.3f}, R={axes.R:.3f}")

    contours = state.recompute()
    plot_contours(contours, projection=state.projection, dcos=state.dcos)


if __name__ == "__main__":
    main()
