# src/hurricane_evac/expand.py
"""
Module: expand.py
Responsibilities:
- Recognize state-level County values ("Entire State", "All counties", null, ...)
- Replace each state-level row with one row per county of that state
- Forward rows for states the registry does not know, unexpanded
"""
import logging

import pandas as pd

from hurricane_evac.corrections import STATE_LEVEL_SENTINELS
from hurricane_evac.registry import CountyRegistry
from hurricane_evac.schema import COUNTY_COL, FIPS_COL, STATE_COL

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def is_state_level(value) -> bool:
    """True for a missing County or one of the state-level sentinel phrases."""
    if value is None:
        return True
    if isinstance(value, str):
        return value in STATE_LEVEL_SENTINELS
    return bool(pd.isna(value))


def expand_state_rows(candidates: pd.DataFrame, registry: CountyRegistry) -> pd.DataFrame:
    """
    Replace state-level candidate rows with one row per county of the state.

    Expanded rows take their place in the input order, copy every other
    column, and have County FIPS cleared so the resolver looks each county up.
    A state-level row for a state the registry does not know is kept as is
    and fails resolution downstream.

    Parameters
    ----------
    candidates : pd.DataFrame
        Output of normalize_records.
    registry : CountyRegistry
        Reference registry providing all_counties_of(state).

    Returns
    -------
    pd.DataFrame
        Candidate rows where every known state-level row has been expanded.
    """
    df = candidates.copy()

    state_level = df[COUNTY_COL].map(is_state_level).astype(bool)
    known = df[STATE_COL].map(registry.knows_state).astype(bool)
    to_expand = state_level & known
    unknown = state_level & ~known

    if unknown.any():
        states = sorted(df.loc[unknown, STATE_COL].astype(str).unique())
        logger.warning(f"Cannot expand {int(unknown.sum())} state-level rows for unknown states: {states}")

    if not to_expand.any():
        logger.info("No state-level rows to expand")
        return df.reset_index(drop=True)

    df.loc[to_expand, FIPS_COL] = None
    df[COUNTY_COL] = [
        registry.all_counties_of(state) if expand else [county]
        for state, county, expand in zip(df[STATE_COL], df[COUNTY_COL], to_expand)
    ]
    df = df.explode(COUNTY_COL, ignore_index=True)

    logger.info(f"Expanded {int(to_expand.sum())} state-level rows; "
                f"{len(candidates)} candidate rows -> {len(df)}")
    return df
