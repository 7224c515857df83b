# src/hurricane_evac/registry.py
"""
Module: registry.py
Responsibilities:
- Build the authoritative state -> county -> FIPS reference from a frame
- Canonicalize reference county names (title case, suffix stripped, spelling conventions)
- Answer lookups and per-state county listings (read-only after construction)
"""
import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Set

import pandas as pd

from hurricane_evac.names import apply_spelling_conventions, strip_county_suffix, title_case

# Configure logging
logging.basicConfig(level=logging.INFO,
                   format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# tidycensus `fips_codes` layout
TIDYCENSUS_COLUMNS = {
    'state': 'state',
    'state_code': 'state_code',
    'county_code': 'county_code',
    'county': 'county',
}

# Census `national_county2020.txt` layout
CENSUS_COLUMNS = {
    'state': 'STATE',
    'state_code': 'STATEFP',
    'county_code': 'COUNTYFP',
    'county': 'COUNTYNAME',
}


class ReferenceLoadError(RuntimeError):
    """The county reference table could not be built."""


class ReferenceEntry(NamedTuple):
    state: str
    county: str
    fips: str


def canonical_county_name(raw: str) -> str:
    """
    Reduce a reference county name to the form every pipeline stage compares on.

    >>> canonical_county_name("DeSoto County")
    'Desoto'
    >>> canonical_county_name("Suffolk city")
    'Suffolk City'
    """
    name = title_case(str(raw).strip())
    name = strip_county_suffix(name)
    return apply_spelling_conventions(name)


class CountyRegistry:
    """
    Read-only index of county reference entries.

    Keys are (state abbreviation, canonical county name). When the source
    holds the same key twice, the first entry wins and the rest are logged.
    A FIPS code held by more than one key is kept for each and logged.
    """

    def __init__(self, entries: Iterable[ReferenceEntry]):
        self._fips: Dict[tuple, str] = {}
        self._counties: Dict[str, List[str]] = {}
        duplicates = []
        owners: Dict[str, tuple] = {}
        shared_fips = []

        for entry in entries:
            state = entry.state.strip().upper()
            key = (state, entry.county)
            if key in self._fips:
                duplicates.append(key)
                continue
            if entry.fips in owners:
                shared_fips.append((entry.fips, owners[entry.fips], key))
            else:
                owners[entry.fips] = key
            self._fips[key] = entry.fips
            self._counties.setdefault(state, []).append(entry.county)

        if not self._fips:
            raise ReferenceLoadError("Reference table contains no counties")

        if duplicates:
            logger.warning(f"Ignored {len(duplicates)} duplicate reference keys (first entry kept): "
                           f"{duplicates[:5]}")
        if shared_fips:
            logger.warning(f"{len(shared_fips)} reference keys reuse a FIPS code already assigned: "
                           f"{shared_fips[:5]}")

        logger.info(f"Built county registry: {len(self._fips)} counties in {len(self._counties)} states")

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "CountyRegistry":
        """
        Build a registry from a reference DataFrame.

        Parameters
        ----------
        df : pd.DataFrame
            Either the tidycensus ``fips_codes`` layout (state, state_code,
            county_code, county) or the Census ``national_county2020`` layout
            (STATE, STATEFP, COUNTYFP, COUNTYNAME).

        Returns
        -------
        CountyRegistry

        Raises
        ------
        ReferenceLoadError
            If the frame is empty or matches neither layout.
        """
        if not isinstance(df, pd.DataFrame) or df.empty:
            raise ReferenceLoadError("Reference data is empty")

        for layout in (TIDYCENSUS_COLUMNS, CENSUS_COLUMNS):
            if all(col in df.columns for col in layout.values()):
                break
        else:
            raise ReferenceLoadError(
                f"Reference data missing required columns; got {list(df.columns)}"
            )

        ref = df[list(layout.values())].rename(columns={v: k for k, v in layout.items()})
        ref = ref.dropna()
        if ref.empty:
            raise ReferenceLoadError("Reference data has no complete rows")

        state_code = ref['state_code'].astype(str).str.strip().str.zfill(2)
        county_code = ref['county_code'].astype(str).str.strip().str.zfill(3)
        entries = [
            ReferenceEntry(state, canonical_county_name(county), fips)
            for state, county, fips in zip(ref['state'].astype(str), ref['county'], state_code + county_code)
        ]
        return cls(entries)

    def load(self) -> Set[ReferenceEntry]:
        """Return every entry held by the registry."""
        return {ReferenceEntry(state, county, fips) for (state, county), fips in self._fips.items()}

    def lookup(self, state: str, county: str) -> Optional[str]:
        """Return the FIPS code for (state, county) or None when not found."""
        if not isinstance(state, str) or not isinstance(county, str):
            return None
        return self._fips.get((state.strip().upper(), county))

    def all_counties_of(self, state: str) -> List[str]:
        """Canonical county names of a state, in reference order. Empty for unknown states."""
        if not isinstance(state, str):
            return []
        return list(self._counties.get(state.strip().upper(), []))

    def knows_state(self, state: str) -> bool:
        return isinstance(state, str) and state.strip().upper() in self._counties

    @property
    def states(self) -> List[str]:
        return sorted(self._counties)

    def __len__(self) -> int:
        return len(self._fips)

    def __contains__(self, key) -> bool:
        state, county = key
        return self.lookup(state, county) is not None

    def __repr__(self) -> str:
        return f"CountyRegistry({len(self._fips)} counties, {len(self._counties)} states)"
