"""
Shared fixtures: a tidycensus-shaped reference table covering every Florida
county and the counties used by the other tests.
"""

import sys
from pathlib import Path

import pandas as pd
import pytest

# Adjust path to import the package without installing it
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from hurricane_evac.registry import CountyRegistry  # noqa: E402
from hurricane_evac.schema import COUNTY_COL, EVENT_COL, FIPS_COL, STATE_COL, YEAR_COL  # noqa: E402

FLORIDA_COUNTIES = [
    ("001", "Alachua County"), ("003", "Baker County"), ("005", "Bay County"),
    ("007", "Bradford County"), ("009", "Brevard County"), ("011", "Broward County"),
    ("013", "Calhoun County"), ("015", "Charlotte County"), ("017", "Citrus County"),
    ("019", "Clay County"), ("021", "Collier County"), ("023", "Columbia County"),
    ("027", "DeSoto County"), ("029", "Dixie County"), ("031", "Duval County"),
    ("033", "Escambia County"), ("035", "Flagler County"), ("037", "Franklin County"),
    ("039", "Gadsden County"), ("041", "Gilchrist County"), ("043", "Glades County"),
    ("045", "Gulf County"), ("047", "Hamilton County"), ("049", "Hardee County"),
    ("051", "Hendry County"), ("053", "Hernando County"), ("055", "Highlands County"),
    ("057", "Hillsborough County"), ("059", "Holmes County"), ("061", "Indian River County"),
    ("063", "Jackson County"), ("065", "Jefferson County"), ("067", "Lafayette County"),
    ("069", "Lake County"), ("071", "Lee County"), ("073", "Leon County"),
    ("075", "Levy County"), ("077", "Liberty County"), ("079", "Madison County"),
    ("081", "Manatee County"), ("083", "Marion County"), ("085", "Martin County"),
    ("086", "Miami-Dade County"), ("087", "Monroe County"), ("089", "Nassau County"),
    ("091", "Okaloosa County"), ("093", "Okeechobee County"), ("095", "Orange County"),
    ("097", "Osceola County"), ("099", "Palm Beach County"), ("101", "Pasco County"),
    ("103", "Pinellas County"), ("105", "Polk County"), ("107", "Putnam County"),
    ("109", "St. Johns County"), ("111", "St. Lucie County"), ("113", "Santa Rosa County"),
    ("115", "Sarasota County"), ("117", "Seminole County"), ("119", "Sumter County"),
    ("121", "Suwannee County"), ("123", "Taylor County"), ("125", "Union County"),
    ("127", "Volusia County"), ("129", "Wakulla County"), ("131", "Walton County"),
    ("133", "Washington County"),
]

OTHER_COUNTIES = {
    ("GA", "13"): [
        ("029", "Bryan County"), ("039", "Camden County"), ("051", "Chatham County"),
        ("089", "DeKalb County"), ("127", "Glynn County"), ("179", "Liberty County"),
        ("191", "McIntosh County"), ("199", "Meriwether County"), ("321", "Worth County"),
    ],
    ("TX", "48"): [
        ("055", "Caldwell County"), ("091", "Comal County"), ("123", "DeWitt County"),
        ("201", "Harris County"), ("311", "McMullen County"), ("473", "Waller County"),
    ],
    ("VA", "51"): [
        ("001", "Accomack County"), ("093", "Isle of Wight County"),
        ("097", "King and Queen County"), ("131", "Northampton County"),
        ("650", "Hampton city"), ("700", "Newport News city"), ("710", "Norfolk city"),
        ("800", "Suffolk city"), ("810", "Virginia Beach city"),
    ],
    ("LA", "22"): [
        ("031", "De Soto Parish"), ("071", "Orleans Parish"), ("101", "St. Mary Parish"),
    ],
    ("MD", "24"): [
        ("033", "Prince George's County"), ("035", "Queen Anne's County"),
        ("037", "St. Mary's County"),
    ],
    ("NC", "37"): [
        ("111", "McDowell County"), ("197", "Yadkin County"),
    ],
    ("SC", "45"): [
        ("019", "Berkeley County"), ("043", "Georgetown County"),
    ],
}

# A few FIPS codes the tests assert on
FIPS = {
    ("GA", "Bryan"): "13029",
    ("GA", "Camden"): "13039",
    ("GA", "Chatham"): "13051",
    ("TX", "Comal"): "48091",
    ("VA", "Suffolk City"): "51800",
    ("FL", "Miami-Dade"): "12086",
    ("FL", "Desoto"): "12027",
}


def _reference_rows():
    rows = [
        {"state": "FL", "state_code": "12", "state_name": "Florida", "county_code": code, "county": name}
        for code, name in FLORIDA_COUNTIES
    ]
    for (state, state_code), counties in OTHER_COUNTIES.items():
        rows.extend(
            {"state": state, "state_code": state_code, "state_name": state, "county_code": code, "county": name}
            for code, name in counties
        )
    return rows


@pytest.fixture
def reference_frame():
    """Reference table in the tidycensus fips_codes layout."""
    return pd.DataFrame(_reference_rows())


@pytest.fixture
def registry(reference_frame):
    return CountyRegistry.from_frame(reference_frame)


def make_alerts(rows):
    """Build an alert frame from (event, state, county, fips, year) tuples plus a passthrough column."""
    return pd.DataFrame(
        [
            {
                EVENT_COL: event,
                STATE_COL: state,
                COUNTY_COL: county,
                FIPS_COL: fips,
                YEAR_COL: year,
                "Order Type": "Mandatory",
                "Announcement Date": f"{year}-09-0{i % 9 + 1}",
            }
            for i, (event, state, county, fips, year) in enumerate(rows)
        ]
    )


@pytest.fixture
def sample_alerts():
    """A small alert frame exercising every stage."""
    return make_alerts([
        ("Hurricane Matthew", "GA", "East of I-95 in Bryan, Camden, Chatham, Glynn, Liberty, and McIntosh Counties", None, 2016),
        ("Hurricane Harvey", "TX", "Coma!", None, 2017),
        ("Hurricane Irma", "FL", None, None, 2017),
        ("Hurricane Florence", "VA", "Suffolk", None, 2018),
        ("Hurricane Florence", "NY", "Long Island", None, 2018),
        ("Hurricane Michael", "GA", "92 counties", None, 2018),
        ("Hurricane Irma", "FL", "Miami-Dade County", "12086", 2017),
    ])
