"""
Unit tests for normalize module.
"""

import pandas as pd
import pytest

from hurricane_evac.normalize import county_fragments, normalize_records, split_county_text
from hurricane_evac.schema import COUNTY_COL

from conftest import make_alerts


@pytest.mark.parametrize("text, expected", [
    ("Bryan, Camden, Chatham", ["Bryan", "Camden", "Chatham"]),
    ("Bryan, Camden and Chatham", ["Bryan", "Camden", "Chatham"]),
    ("Bryan & Camden; Chatham", ["Bryan", "Camden", "Chatham"]),
    ("Glynn, Liberty, and McIntosh Counties", ["Glynn", "Liberty", "McIntosh Counties"]),
    ("Washington County.", ["Washington County"]),
    ("Worth.", ["Worth"]),
    ("Harris County", ["Harris County"]),
])
def test_split_county_text(text, expected):
    assert split_county_text(text) == expected


def test_protected_name_survives_connector_split():
    assert split_county_text("King and Queen, Accomack and Northampton") == [
        "King And Queen", "Accomack", "Northampton"
    ]


def test_rejected_fragments():
    assert split_county_text("") == []
    assert split_county_text("92 counties") == []
    assert split_county_text("108 counties") == []
    assert split_county_text("Bryan, , Camden") == ["Bryan", "Camden"]


def test_fragment_corrections():
    assert split_county_text("Coma!") == ["Comal"]
    assert split_county_text("Coma!, Hays") == ["Comal", "Hays"]
    assert split_county_text("East of I-95 in Bryan, Camden") == ["Bryan", "Camden"]
    assert split_county_text('Yadkin ("the Emergency Area")') == ["Yadkin"]


def test_correction_introducing_separator_splits_again():
    assert split_county_text("Glynn, McIntosh Meriwether") == ["Glynn", "McIntosh", "Meriwether"]


def test_unknown_fragment_passes_through():
    assert split_county_text("Hudson Valley") == ["Hudson Valley"]
    assert split_county_text("Entire State") == ["Entire State"]


def test_county_fragments_null_is_state_level():
    assert county_fragments(None) == [None]
    assert county_fragments(float("nan")) == [None]
    assert county_fragments("") == []


def test_normalize_records_one_to_many():
    alerts = make_alerts([
        ("Hurricane Matthew", "GA", "Bryan, Camden, Chatham", None, 2016),
        ("Hurricane Harvey", "TX", "Coma!", None, 2017),
        ("Hurricane Irma", "FL", None, None, 2017),
        ("Hurricane Michael", "GA", "92 counties", None, 2018),
        ("Hurricane Michael", "GA", "", None, 2018),
    ])
    candidates = normalize_records(alerts)

    assert len(candidates) == 3 + 1 + 1
    assert candidates[COUNTY_COL].iloc[:4].tolist() == ["Bryan", "Camden", "Chatham", "Comal"]
    assert pd.isna(candidates[COUNTY_COL].iloc[4])
    assert list(candidates.index) == list(range(5))


def test_normalize_records_preserves_other_columns():
    alerts = make_alerts([
        ("Hurricane Matthew", "GA", "Bryan, Camden and Chatham", None, 2016),
        ("Hurricane Harvey", "TX", "Coma!", "48091", 2017),
    ])
    candidates = normalize_records(alerts)
    other = [c for c in alerts.columns if c != COUNTY_COL]

    for _, row in candidates.iterrows():
        source = alerts[alerts["Event Name"] == row["Event Name"]].iloc[0]
        assert row[other].tolist() == source[other].tolist()

    # Input frame is left untouched
    assert alerts[COUNTY_COL].tolist() == ["Bryan, Camden and Chatham", "Coma!"]


def test_normalize_records_requires_county_column():
    with pytest.raises(KeyError):
        normalize_records(pd.DataFrame({"State": ["FL"]}))
