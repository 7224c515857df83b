# src/hurricane_evac/schema.py
"""
Module: schema.py
Responsibilities:
- Store the column names shared by every pipeline stage
- Store the reason codes attached to unresolved records
"""

# Column names as they appear in the HEvOD export
EVENT_COL = "Event Name"
STATE_COL = "State"
COUNTY_COL = "County"
FIPS_COL = "County FIPS"
YEAR_COL = "Year"

# Columns added by the pipeline
STORM_COL = "Storm"
REASON_COL = "reason"

REQUIRED_ALERT_COLUMNS = [EVENT_COL, STATE_COL, COUNTY_COL, FIPS_COL, YEAR_COL]

# Downstream join key for exposure and treatment-effect tables
JOIN_KEY = [STORM_COL, FIPS_COL, YEAR_COL]

# Unresolved reason codes
UNKNOWN_STATE = "unknown_state"
UNMATCHED_COUNTY = "unmatched_county"
