# src/hurricane_evac/normalize.py
"""
Module: normalize.py
Responsibilities:
- Split a free-text County field into individual county-name fragments
- Protect county names that contain a connector word
- Reject placeholder fragments and correct known malformed fragments
- Emit one candidate row per fragment (one row with a null County for state-wide orders)
"""
import logging
import re
from typing import List

import pandas as pd

from hurricane_evac.corrections import (
    CONNECTOR_PATTERNS,
    CONNECTOR_REPLACEMENT,
    FRAGMENT_CORRECTIONS,
    PROTECTED_NAMES,
    REJECTED_FRAGMENTS,
    SPLIT_PATTERN,
)
from hurricane_evac.names import apply_replacements
from hurricane_evac.schema import COUNTY_COL

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

_CONNECTORS = [re.compile(pattern) for pattern in CONNECTOR_PATTERNS]
_SPLITTER = re.compile(SPLIT_PATTERN)


def _split(text: str) -> List[str]:
    return [fragment.strip() for fragment in _SPLITTER.split(text)]


def _restore_protected(fragment: str) -> str:
    for placeholder, restored in PROTECTED_NAMES.values():
        fragment = fragment.replace(placeholder, restored)
    return fragment


def split_county_text(text: str) -> List[str]:
    """
    Split one County field into cleaned county-name fragments.

    Steps, in order:
    1. Protect names containing a connector ("King and Queen")
    2. Turn "and", "&" and ";" connectors into commas
    3. Split on commas, trim, restore protected names
    4. Drop rejected fragments ("", "92 counties", ...)
    5. Correct malformed fragments, splitting again when a correction adds a comma
    6. Strip one trailing period

    Parameters
    ----------
    text : str
        Raw County field.

    Returns
    -------
    List[str]
        Fragments in their original order. May be empty.
    """
    working = text
    for name, (placeholder, _) in PROTECTED_NAMES.items():
        working = working.replace(name, placeholder)

    for connector in _CONNECTORS:
        working = connector.sub(CONNECTOR_REPLACEMENT, working)

    fragments = [_restore_protected(f) for f in _split(working)]
    fragments = [f for f in fragments if f not in REJECTED_FRAGMENTS]

    corrected = []
    for fragment in fragments:
        corrected.extend(_split(apply_replacements(fragment, FRAGMENT_CORRECTIONS)))

    cleaned = [re.sub(r"\.$", "", f) for f in corrected]
    return [f for f in cleaned if f not in REJECTED_FRAGMENTS]


def county_fragments(value) -> list:
    """
    Per-record producer: a null County means the whole state and yields a
    single null fragment; any text yields split_county_text(text).
    """
    if pd.isna(value):
        return [None]
    return split_county_text(str(value))


def normalize_records(alerts: pd.DataFrame) -> pd.DataFrame:
    """
    Expand every alert into one candidate row per county fragment.

    All columns other than County are copied unchanged. Alerts whose text
    yields no fragments contribute no rows.

    Parameters
    ----------
    alerts : pd.DataFrame
        Raw alert records with a County column.

    Returns
    -------
    pd.DataFrame
        Candidate county rows with a fresh RangeIndex.
    """
    if COUNTY_COL not in alerts.columns:
        raise KeyError(f"Alert frame missing '{COUNTY_COL}' column")

    df = alerts.copy()
    df[COUNTY_COL] = df[COUNTY_COL].map(county_fragments)

    empty = df[COUNTY_COL].map(len) == 0
    if empty.any():
        logger.info(f"Dropping {int(empty.sum())} alerts with no county fragments")
    df = df[~empty]

    df = df.explode(COUNTY_COL, ignore_index=True)
    logger.info(f"Normalized {len(alerts)} alerts into {len(df)} candidate county rows")
    return df
