"""
Command line entry point for ATP yield screening
"""

import argparse
import logging
import os
import sys
import traceback
from datetime import datetime

from .config import N_WORKERS, RECON_VERSION, TEST_RESULTS_FOLDER
from .screening import ATPScreening

logger = logging.getLogger(__name__)


def setup_logging(output_dir: str) -> str:
    """Log to <output_dir>/logs/atp_screen_<timestamp>.log and to the console."""
    log_dir = os.path.join(output_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"atp_screen_{timestamp}.log")

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler()
        ],
        force=True
    )
    logger.info(f"Log file: {log_file}")
    return log_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='atp-screen',
        description='Flag reconstructions with implausible ATP yield on a Western diet',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # refined models only
  atp-screen refinedReconstructions -o TestResults -v AGORA2

  # include translated draft models, 8 worker processes
  atp-screen refinedReconstructions -d translatedDrafts -j 8

  # custom diet and solver
  atp-screen refinedReconstructions --diet my_diet.tsv --solver gurobi

Models whose maximal ATP flux exceeds 150 (aerobic) or 100 (anaerobic)
mmol/gDW/h are written to <TestResults>/tooHighATP.csv.
        """
    )

    parser.add_argument('refined_folder', help='Folder with refined COBRA models')
    parser.add_argument('-o', '--test-results-folder', default=TEST_RESULTS_FOLDER,
                        help=f'Output folder (default: {TEST_RESULTS_FOLDER})')
    parser.add_argument('-v', '--recon-version', default=RECON_VERSION,
                        help=f'Name of the reconstruction resource (default: {RECON_VERSION})')
    parser.add_argument('-j', '--num-workers', type=int, default=N_WORKERS,
                        help=f'Worker processes, 0 = serial (default: {N_WORKERS})')
    parser.add_argument('-d', '--translated-drafts-folder', default=None,
                        help='Folder with translated draft models to test as well')
    parser.add_argument('--diet', default=None,
                        help='Diet table (TSV with columns reaction, flux); Western diet by default')
    parser.add_argument('--solver', default=None,
                        help='LP solver used by cobra (e.g. glpk, gurobi, cplex)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    os.makedirs(args.test_results_folder, exist_ok=True)
    setup_logging(args.test_results_folder)

    try:
        screening = ATPScreening(
            refined_folder=args.refined_folder,
            test_results_folder=args.test_results_folder,
            recon_version=args.recon_version,
            n_workers=args.num_workers,
            translated_drafts_folder=args.translated_drafts_folder,
            diet_path=args.diet,
            solver=args.solver,
        )
        screening.run()
    except KeyboardInterrupt:
        logger.warning("\n⚠️  Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"\n❌ ATP screening failed: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
