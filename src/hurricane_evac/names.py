# src/hurricane_evac/names.py
"""
Module: names.py
Responsibilities:
- Title-case county names the way the reference table spells them
- Strip trailing County/Parish suffixes
- Apply ordered substring and spelling-convention replacements
"""
import re
from typing import Iterable, Tuple

from hurricane_evac.corrections import COUNTY_SUFFIXES, SAINT_ABBREVIATION, SPELLING_CONVENTIONS

_WORD_PATTERN = re.compile(r"[^\W\d_]+(?:'[^\W\d_]+)?")
_SUFFIX_PATTERN = re.compile(
    r"\s*(?:" + "|".join(sorted(COUNTY_SUFFIXES, key=len, reverse=True)) + r")$"
)
_SAINT_PATTERN = re.compile(SAINT_ABBREVIATION[0])


def title_case(name: str) -> str:
    """
    Capitalize the first letter of every word and lowercase the rest.

    Apostrophes stay inside the word ("Prince George's", "O'brien") and hyphens
    start a new word ("Miami-Dade"). Accented letters are word letters
    ("Doña Ana", "Mayagüez").
    """
    return _WORD_PATTERN.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), name)


def strip_county_suffix(name: str) -> str:
    """Remove one trailing County/Counties/Parish suffix and the whitespace before it."""
    return _SUFFIX_PATTERN.sub("", name)


def apply_replacements(name: str, replacements: Iterable[Tuple[str, str]]) -> str:
    """Apply literal substring replacements in table order."""
    for old, new in replacements:
        name = name.replace(old, new)
    return name


def apply_spelling_conventions(name: str) -> str:
    """Normalize "St" abbreviations, then collapse spelling variants."""
    name = _SAINT_PATTERN.sub(SAINT_ABBREVIATION[1], name)
    return apply_replacements(name, SPELLING_CONVENTIONS)
