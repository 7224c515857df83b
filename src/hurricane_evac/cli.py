# src/hurricane_evac/cli.py

"""
CLI wrapper for the hurricane evacuation resolver.

Sub-commands:
  clean : Resolve the HEvOD export to county-level records and write them (plus the unresolved audit)
  audit : Print the unresolved (State, County) pairs without writing the clean dataset
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from hurricane_evac.data_io import (
    DEFAULT_DELIMITER,
    DEFAULT_ENCODING,
    load_alerts,
    load_registry,
    save_frame,
    validate_paths,
)
from hurricane_evac.pipeline import run_pipeline
from hurricane_evac.registry import ReferenceLoadError

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_INPUT = os.path.join('data', 'hurricane_evac', 'Full Database', 'HEvOD_2014-2022.csv')
DEFAULT_REFERENCE = os.path.join('data', 'county_fips_codes.csv')
DEFAULT_OUTPUT = os.path.join('data', 'evac_data_clean.csv')
DEFAULT_UNRESOLVED = os.path.join('data', 'evac_data_unresolved.csv')


def _load(args: argparse.Namespace):
    validate_paths(args.input)
    # The registry must exist before any alert is touched
    registry = load_registry(args.reference)
    alerts = load_alerts(args.input, delimiter=args.delimiter, encoding=args.encoding)
    return alerts, registry


def clean_command(args: argparse.Namespace) -> None:
    """
    Resolve all alerts and write the clean dataset and the unresolved audit.
    """
    alerts, registry = _load(args)
    result = run_pipeline(alerts, registry, workers=args.workers)

    save_frame(result.resolved, args.output)
    save_frame(result.unresolved, args.unresolved_output)

    print(f"Clean complete: {len(result.resolved)} county records, "
          f"{len(result.unresolved)} unresolved")
    print(f"  Clean dataset: {args.output}")
    print(f"  Unresolved audit: {args.unresolved_output}")


def audit_command(args: argparse.Namespace) -> None:
    """
    Print unresolved (State, County) pairs, most frequent first.
    """
    alerts, registry = _load(args)
    result = run_pipeline(alerts, registry, workers=args.workers)
    summary = result.summary()

    if summary.empty:
        print("All county rows resolved.")
        return

    print(f"{len(result.unresolved)} unresolved rows across {len(summary)} (State, County) pairs:")
    shown = summary if args.top is None else summary.head(args.top)
    print(shown.to_string(index=False))


def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument('--input', default=DEFAULT_INPUT,
                   help='Path to the HEvOD evacuation order export')
    p.add_argument('--reference', default=DEFAULT_REFERENCE,
                   help='County reference table (tidycensus fips_codes CSV or Census national_county file)')
    p.add_argument('--delimiter', default=DEFAULT_DELIMITER,
                   help='Field delimiter of the input file')
    p.add_argument('--encoding', default=DEFAULT_ENCODING,
                   help='Text encoding of the input file')
    p.add_argument('--workers', type=int, default=1,
                   help='Number of parallel worker processes')


def setup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hurricane-evac',
        description='Resolve hurricane evacuation orders to county FIPS codes'
    )
    sub = parser.add_subparsers(dest='command', required=True)

    # clean sub-command
    p_clean = sub.add_parser('clean', help='Write the clean county-level dataset')
    _add_common_arguments(p_clean)
    p_clean.add_argument('--output', default=DEFAULT_OUTPUT,
                         help='Path of the clean CSV')
    p_clean.add_argument('--unresolved-output', default=DEFAULT_UNRESOLVED,
                         help='Path of the unresolved audit CSV')

    # audit sub-command
    p_audit = sub.add_parser('audit', help='List unresolved (State, County) pairs')
    _add_common_arguments(p_audit)
    p_audit.add_argument('--top', type=int, default=None,
                         help='Only show the N most frequent pairs')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)

    if args.workers < 1:
        parser.error(f"--workers must be at least 1, got {args.workers}")

    try:
        if args.command == 'clean':
            clean_command(args)
        elif args.command == 'audit':
            audit_command(args)
    except ReferenceLoadError as e:
        logger.error(f"Reference table could not be loaded: {e}")
        return 1
    except (FileNotFoundError, PermissionError, KeyError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
