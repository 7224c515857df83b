# src/hurricane_evac/corrections.py
"""
Module: corrections.py
Responsibilities:
- Hold every name-cleaning table used by the normalizer, expander and resolver
- Keep tables as ordered data so they can be extended without touching the algorithms

Each table was built by inspecting the unresolved output of a run against the
HEvOD 2014-2022 export. When a new unresolved (State, County) pair shows up in
the audit report, the fix belongs here.
"""

# ---------------------------------------------------------------------------
# Name normalizer tables
# ---------------------------------------------------------------------------

# County names that contain a connector word. Protected with a placeholder
# before connectors are turned into commas, restored with the registry spelling.
PROTECTED_NAMES = {
    "King and Queen": ("KING_AND_QUEEN", "King And Queen"),
}

# Connectors that separate county names inside one field
CONNECTOR_PATTERNS = [
    r"\s+and\s+",
    r"\s*&\s*",
    r"\s*;\s*",
]
CONNECTOR_REPLACEMENT = ", "

SPLIT_PATTERN = r",\s*"

# Fragments that do not name a county. "92 counties" and "108 counties" are
# Georgia Hurricane Michael orders with no way to tell which counties apply.
REJECTED_FRAGMENTS = frozenset({
    "",
    "92 counties",
    "108 counties",
})

# Malformed fragments, applied as substring replacements in this order.
# A replacement that introduces a comma is split again.
FRAGMENT_CORRECTIONS = [
    ("Coma!", "Comal"),
    ("McIntosh Meriwether", "McIntosh, Meriwether"),
    ("East of I-95 in Bryan", "Bryan"),
    ('Yadkin ("the Emergency Area")', "Yadkin"),
]

# ---------------------------------------------------------------------------
# State expander tables
# ---------------------------------------------------------------------------

# Values of the County field meaning "every county in the state".
# A missing value is treated the same way.
STATE_LEVEL_SENTINELS = frozenset({
    "Entire State",
    "Entire state",
    "All counties",
    "All Parishes",
    "All",
    "Statewide",
    "Entire parish",
    "Entire Parish",
    "Entire County",
    "All 67 counties",
})

# ---------------------------------------------------------------------------
# Resolver tables
# ---------------------------------------------------------------------------

# Longest first
COUNTY_SUFFIXES = (
    "Counties",
    "counties",
    "County",
    "county",
    "Parish",
    "parish",
)

MISSPELLINGS = [
    ("Miami-Dale", "Miami-Dade"),
    ("Miami Dade", "Miami-Dade"),
    ("Caidwell", "Caldwell"),
    ("Berkely", "Berkeley"),
    ("Bradroed", "Bradford"),
    ("Olaloosa", "Okaloosa"),
    ("Momoe", "Monroe"),
    ("Wailer", "Waller"),
]

# "St Johns" -> "St. Johns" when followed by a capitalized word
SAINT_ABBREVIATION = (r"\bSt\s(?=[A-Z])", "St. ")

# Variants collapsed to the title-cased spelling of the reference table
SPELLING_CONVENTIONS = [
    ("De Soto", "Desoto"),
    ("DeSoto", "Desoto"),
    ("DeWitt", "Dewitt"),
    ("De Kalb", "Dekalb"),
    ("DeKalb", "Dekalb"),
    ("McIntosh", "Mcintosh"),
    ("McDuffie", "Mcduffie"),
    ("McDowell", "Mcdowell"),
    ("McMullen", "Mcmullen"),
    ("Isle of Wight", "Isle Of Wight"),
    ("Mainland of Bryan", "Bryan"),
    ("Prince Georges", "Prince George's"),
    ("Queen Annes", "Queen Anne's"),
]

# (state, case-insensitive pattern, canonical name); first match wins.
# Virginia independent cities are listed as "<Name> City" in the reference
# table, Louisiana and Maryland spell their saints differently.
STATE_SPECIAL_CASES = [
    ("LA", r"^St\.?\s*Mary", "St. Mary"),
    ("MD", r"^St\.?\s*Mary'?s?", "St. Mary's"),
    ("VA", r"\bSuffolk\b", "Suffolk City"),
    ("VA", r"\bNorfolk\b", "Norfolk City"),
    ("VA", r"\bHampton\b", "Hampton City"),
    ("VA", r"\bNewport News\b", "Newport News City"),
    ("VA", r"\bVirginia Beach\b", "Virginia Beach City"),
]
