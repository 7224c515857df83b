# src/hurricane_evac/resolve.py
"""
Module: resolve.py
Responsibilities:
- Clean a county name (suffix removal, misspellings, spelling conventions, state special cases)
- Attach a FIPS code from the source record or the reference registry
- Split candidate rows into resolved and unresolved frames, never dropping a row
"""
import logging
import re
from typing import Optional, Tuple

import pandas as pd

from hurricane_evac.corrections import MISSPELLINGS, STATE_SPECIAL_CASES
from hurricane_evac.expand import is_state_level
from hurricane_evac.names import apply_replacements, apply_spelling_conventions, strip_county_suffix
from hurricane_evac.registry import CountyRegistry
from hurricane_evac.schema import COUNTY_COL, FIPS_COL, REASON_COL, STATE_COL, UNKNOWN_STATE, UNMATCHED_COUNTY

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

FIPS_PATTERN = re.compile(r"^\d{5}$")

_SPECIAL_CASES = [
    (state, re.compile(pattern, re.IGNORECASE), canonical)
    for state, pattern, canonical in STATE_SPECIAL_CASES
]


def valid_fips(value) -> Optional[str]:
    """Return a pre-supplied FIPS code when it is a 5-digit string, otherwise None."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    code = str(value).strip()
    return code if FIPS_PATTERN.match(code) else None


def apply_state_special_cases(state: str, name: str) -> str:
    """Rewrite names that follow a local convention in one state (first matching rule)."""
    if not isinstance(state, str):
        return name
    state = state.strip().upper()
    for rule_state, pattern, canonical in _SPECIAL_CASES:
        if rule_state == state and pattern.search(name):
            return canonical
    return name


def clean_county_name(state: str, name: str) -> str:
    """
    Bring a county name to the registry's spelling.

    Order matters and must not change: suffix removal, misspellings,
    spelling conventions, state special cases. The result is stable under
    a second application.

    >>> clean_county_name("VA", "Suffolk")
    'Suffolk City'
    >>> clean_county_name("FL", "Miami Dade County")
    'Miami-Dade'
    """
    cleaned = strip_county_suffix(name)
    cleaned = apply_replacements(cleaned, MISSPELLINGS)
    cleaned = apply_spelling_conventions(cleaned)
    return apply_state_special_cases(state, cleaned)


def resolve_county(
    registry: CountyRegistry,
    state: str,
    name: str,
    fips=None
) -> Tuple[str, Optional[str]]:
    """
    Resolve one (state, county name) pair.

    Parameters
    ----------
    registry : CountyRegistry
        Reference registry.
    state : str
        Two-letter state abbreviation.
    name : str
        County name as produced by the normalizer or the expander.
    fips : str, optional
        FIPS code supplied by the source record. A valid 5-digit code is
        trusted and the registry is not consulted.

    Returns
    -------
    Tuple[str, Optional[str]]
        (cleaned name, FIPS code or None when unresolved)
    """
    cleaned = clean_county_name(state, name)
    trusted = valid_fips(fips)
    if trusted is not None:
        return cleaned, trusted
    return cleaned, registry.lookup(state, cleaned)


def resolve_records(
    candidates: pd.DataFrame,
    registry: CountyRegistry
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Attach FIPS codes to every candidate row.

    Every input row lands in exactly one of the two outputs. Unresolved rows
    keep their fully transformed County name and get a reason column:
    ``unknown_state`` when the registry does not know the state,
    ``unmatched_county`` otherwise.

    Parameters
    ----------
    candidates : pd.DataFrame
        Output of expand_state_rows.
    registry : CountyRegistry
        Reference registry.

    Returns
    -------
    Tuple[pd.DataFrame, pd.DataFrame]
        (resolved, unresolved)
    """
    df = candidates.copy()

    names, codes, reasons = [], [], []
    for state, county, fips in zip(df[STATE_COL], df[COUNTY_COL], df[FIPS_COL]):
        if is_state_level(county):
            # Only state-level rows of unknown states reach this point
            names.append(county)
            codes.append(None)
            reasons.append(UNKNOWN_STATE)
            continue

        cleaned, code = resolve_county(registry, state, str(county), fips)
        names.append(cleaned)
        codes.append(code)
        if code is not None:
            reasons.append(None)
        elif registry.knows_state(state):
            reasons.append(UNMATCHED_COUNTY)
        else:
            reasons.append(UNKNOWN_STATE)

    df[COUNTY_COL] = pd.Series(names, index=df.index, dtype=object)
    df[FIPS_COL] = pd.Series(codes, index=df.index, dtype=object)
    is_resolved = pd.Series([r is None for r in reasons], index=df.index, dtype=bool)

    resolved = df[is_resolved].reset_index(drop=True)
    unresolved = df[~is_resolved].copy()
    unresolved[REASON_COL] = [r for r in reasons if r is not None]
    unresolved = unresolved.reset_index(drop=True)

    logger.info(f"Resolved {len(resolved)} of {len(df)} county rows; {len(unresolved)} unresolved")
    return resolved, unresolved
