# src/hurricane_evac/data_io.py
"""
Module: data_io.py
Responsibilities:
- Validate input paths
- Load the HEvOD alert export (pipe-delimited, quoted, explicit encoding)
- Load the county reference table and build a CountyRegistry
- Write output frames to CSV
"""
import os
import logging

import pandas as pd

from hurricane_evac.registry import CountyRegistry, ReferenceLoadError
from hurricane_evac.schema import COUNTY_COL, FIPS_COL, REQUIRED_ALERT_COLUMNS, STATE_COL

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = '|'
DEFAULT_ENCODING = 'utf-8'


def validate_paths(*paths: str) -> bool:
    """
    Ensure every input file exists and is readable.

    Raises
    ------
    FileNotFoundError
        If a file doesn't exist
    PermissionError
        If a file exists but isn't readable
    """
    for path in paths:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Input file not found: {path}")
        if not os.access(path, os.R_OK):
            raise PermissionError(f"Input file is not readable: {path}")
        logger.info(f"  OK: {path}")
    return True


def load_alerts(
    path: str,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = DEFAULT_ENCODING
) -> pd.DataFrame:
    """
    Load the HEvOD evacuation order export.

    Empty cells and "NA" are read as missing, so an alert with an empty
    County cell is a state-wide order. County FIPS is kept as text to
    preserve leading zeros.

    Parameters
    ----------
    path : str
        Path to the delimited file
    delimiter : str, default='|'
        Field delimiter
    encoding : str, default='utf-8'
        Text encoding

    Returns
    -------
    pd.DataFrame
        One row per alert

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If the file is empty or can't be parsed
    KeyError
        If a required column is missing
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Alert file not found: {path}")

    try:
        df = pd.read_csv(
            path,
            sep=delimiter,
            quotechar='"',
            encoding=encoding,
            dtype={FIPS_COL: str, COUNTY_COL: str, STATE_COL: str},
        )
    except pd.errors.EmptyDataError:
        raise ValueError(f"Alert file is empty: {path}")
    except pd.errors.ParserError as e:
        raise ValueError(f"Error parsing alert file: {e}")

    if df.empty:
        raise ValueError(f"Alert file contains no data: {path}")

    missing = [col for col in REQUIRED_ALERT_COLUMNS if col not in df.columns]
    if missing:
        raise KeyError(f"Alert file missing required columns: {', '.join(missing)}")

    logger.info(f"Loaded {len(df)} alerts from {os.path.basename(path)}; columns: {list(df.columns)}")
    return df


def load_reference(path: str) -> pd.DataFrame:
    """
    Load a county reference table (tidycensus fips_codes export or Census
    national_county2020.txt). The delimiter is taken from the header line:
    pipe, tab, otherwise comma.

    Raises
    ------
    ReferenceLoadError
        If the file is missing, empty or unreadable
    """
    if not os.path.exists(path):
        raise ReferenceLoadError(f"Reference file not found: {path}")

    try:
        with open(path, encoding=DEFAULT_ENCODING) as f:
            header = f.readline()
        delimiter = '|' if '|' in header else ('\t' if '\t' in header else ',')
        df = pd.read_csv(path, sep=delimiter, dtype=str)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise ReferenceLoadError(f"Error reading reference file {path}: {type(e).__name__}: {e}") from e

    if df.empty:
        raise ReferenceLoadError(f"Reference file contains no data: {path}")

    logger.info(f"Loaded {len(df)} reference rows from {os.path.basename(path)}")
    return df


def load_registry(path: str) -> CountyRegistry:
    """Load a reference file and build the registry. Raises ReferenceLoadError on any failure."""
    return CountyRegistry.from_frame(load_reference(path))


def save_frame(df: pd.DataFrame, path: str) -> str:
    """Write a frame to CSV, creating the parent directory if needed."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    df.to_csv(path, index=False)
    logger.info(f"Wrote {len(df)} rows → {path}")
    return path


if __name__ == '__main__':
    import argparse
    import sys

    parser = argparse.ArgumentParser(description='Smoke-test data_io module')
    parser.add_argument('--input', required=True, help='Path to the HEvOD export')
    parser.add_argument('--reference', required=True, help='Path to the county reference table')
    parser.add_argument('--delimiter', default=DEFAULT_DELIMITER, help='Field delimiter of the export')
    args = parser.parse_args()

    try:
        validate_paths(args.input, args.reference)
        print("✓ Path validation successful")

        registry = load_registry(args.reference)
        print(f"✓ Registry built: {len(registry)} counties in {len(registry.states)} states")

        alerts = load_alerts(args.input, delimiter=args.delimiter)
        print(f"✓ Alerts loaded: {len(alerts)} rows")
        print(f"  Columns: {list(alerts.columns)}")
        print(f"  States: {sorted(alerts[STATE_COL].dropna().unique())}")
        print(f"  State-wide rows (empty County): {int(alerts[COUNTY_COL].isna().sum())}")

        print("data_io smoke test completed successfully.")
    except Exception as e:
        print(f"Error during test: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
