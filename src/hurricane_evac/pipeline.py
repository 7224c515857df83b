# src/hurricane_evac/pipeline.py
"""
Module: pipeline.py
Responsibilities:
- Validate the alert frame
- Run normalize -> expand -> resolve over all alerts (optionally in parallel row chunks)
- Add the Storm join key and put the (Storm, County FIPS, Year) columns first
- Summarize unresolved records for the correction-table workflow
"""
import concurrent.futures
import logging
import re
from functools import partial
from typing import NamedTuple, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from hurricane_evac.expand import expand_state_rows
from hurricane_evac.normalize import normalize_records
from hurricane_evac.registry import CountyRegistry
from hurricane_evac.resolve import resolve_records
from hurricane_evac.schema import (
    COUNTY_COL,
    EVENT_COL,
    JOIN_KEY,
    REASON_COL,
    REQUIRED_ALERT_COLUMNS,
    STATE_COL,
    STORM_COL,
)

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

_HURRICANE_PREFIX = re.compile(r"^Hurricane\s+")


class PipelineResult(NamedTuple):
    resolved: pd.DataFrame
    unresolved: pd.DataFrame

    def summary(self) -> pd.DataFrame:
        return summarize_unresolved(self.unresolved)


def validate_alerts(df: pd.DataFrame) -> Tuple[bool, str]:
    """
    Validate that the alert frame has the HEvOD columns the pipeline needs.

    Returns
    -------
    Tuple[bool, str]
        (is_valid, error_message)
    """
    if not isinstance(df, pd.DataFrame):
        return False, "Input must be a pandas DataFrame"

    missing = [col for col in REQUIRED_ALERT_COLUMNS if col not in df.columns]
    if missing:
        return False, f"Missing required columns: {', '.join(missing)}"

    if df.empty:
        return False, "Alert frame is empty"

    return True, ""


def storm_key(event_name) -> str:
    """'Hurricane Irma' -> 'Irma'. Names without the prefix are returned unchanged."""
    if pd.isna(event_name):
        return event_name
    return _HURRICANE_PREFIX.sub("", str(event_name))


def add_storm_key(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of df with a Storm column derived from Event Name."""
    df = df.copy()
    df[STORM_COL] = df[EVENT_COL].map(storm_key)
    return df


def key_columns_first(df: pd.DataFrame) -> pd.DataFrame:
    """Move the (Storm, County FIPS, Year) join key to the front; other columns keep their order."""
    rest = [col for col in df.columns if col not in JOIN_KEY]
    return df[JOIN_KEY + rest]


def summarize_unresolved(unresolved: pd.DataFrame) -> pd.DataFrame:
    """
    Count unresolved rows per (State, County, reason), most frequent first.

    This is the list to work through when extending the correction tables.
    """
    columns = [STATE_COL, COUNTY_COL, REASON_COL]
    if unresolved.empty:
        return pd.DataFrame(columns=columns + ['count'])

    summary = (
        unresolved.groupby(columns, dropna=False)
        .size()
        .reset_index(name='count')
        .sort_values(['count', STATE_COL], ascending=[False, True], kind='mergesort')
        .reset_index(drop=True)
    )
    return summary


def _process_chunk(alerts: pd.DataFrame, registry: CountyRegistry) -> Tuple[pd.DataFrame, pd.DataFrame]:
    candidates = normalize_records(alerts)
    candidates = expand_state_rows(candidates, registry)
    resolved, unresolved = resolve_records(candidates, registry)
    return (key_columns_first(add_storm_key(resolved)),
            key_columns_first(add_storm_key(unresolved)))


def run_pipeline(
    alerts: pd.DataFrame,
    registry: CountyRegistry,
    workers: int = 1
) -> PipelineResult:
    """
    Resolve raw evacuation alerts into county-level records.

    Parameters
    ----------
    alerts : pd.DataFrame
        Raw HEvOD alert records.
    registry : CountyRegistry
        Reference registry, built before any record is processed.
    workers : int, default=1
        Number of worker processes. Values above 1 split the alerts into row
        chunks; output order and content match the serial run.

    Returns
    -------
    PipelineResult
        (resolved, unresolved). Per-row failures end up in unresolved.

    Raises
    ------
    ValueError
        If the alert frame is not usable at all.
    """
    is_valid, error_msg = validate_alerts(alerts)
    if not is_valid:
        raise ValueError(f"Invalid alert frame: {error_msg}")

    if workers is None or workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    logger.info(f"Running pipeline on {len(alerts)} alerts with {workers} worker(s)...")

    if workers == 1 or len(alerts) == 1:
        resolved, unresolved = _process_chunk(alerts, registry)
    else:
        n_chunks = min(len(alerts), workers * 4)
        chunks = [alerts.iloc[idx] for idx in np.array_split(np.arange(len(alerts)), n_chunks)]
        func = partial(_process_chunk, registry=registry)

        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            parts = list(tqdm(executor.map(func, chunks), total=len(chunks), desc="Resolving alerts"))

        resolved = pd.concat([p[0] for p in parts], ignore_index=True)
        unresolved = pd.concat([p[1] for p in parts], ignore_index=True)

    result = PipelineResult(resolved, unresolved)

    if not unresolved.empty:
        pairs = result.summary()
        logger.warning(f"{len(unresolved)} rows unresolved across {len(pairs)} (State, County) pairs")
        for row in pairs.head(20).itertuples(index=False):
            logger.warning(f"  {row[0]} / {row[1]} ({row[2]}): {row[3]} rows")
    logger.info(f"Pipeline complete: {len(resolved)} resolved, {len(unresolved)} unresolved")
    return result
