"""
Hurricane Evacuation Order Resolution.

Turns free-text hurricane evacuation order records (HEvOD) into a clean,
county-level dataset keyed by county FIPS code, ready to be joined with
storm exposure data on (Storm, County FIPS, Year).
"""

__version__ = "0.1.0"
