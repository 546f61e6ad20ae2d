"""Pytest configuration for repository test runs."""

import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


def make_raw_row(**overrides) -> dict:
    """One raw incident row using the NYC Open Data header spelling."""
    row = {
        "INCIDENT_KEY": 1,
        "OCCUR_DATE": "01/15/2020",
        "OCCUR_TIME": "23:10:00",
        "BORO": "BROOKLYN",
        "LOC_OF_OCCUR_DESC": "OUTSIDE",
        "PRECINCT": 75,
        "STATISTICAL_MURDER_FLAG": False,
        "LOCATION_DESC": "MULTI DWELL - PUBLIC HOUS",
        "PERP_AGE_GROUP": "18-24",
        "PERP_SEX": "M",
        "PERP_RACE": "BLACK",
        "VIC_AGE_GROUP": "25-44",
        "VIC_SEX": "M",
        "VIC_RACE": "BLACK",
        "Latitude": 40.6652,
        "Longitude": -73.8851,
    }
    row.update(overrides)
    return row


@pytest.fixture
def raw_incidents() -> pd.DataFrame:
    """Three raw rows; the second carries every kind of placeholder value."""
    return pd.DataFrame([
        make_raw_row(INCIDENT_KEY=101),
        make_raw_row(
            INCIDENT_KEY=102,
            OCCUR_DATE="07/04/2021",
            BORO="BRONX",
            STATISTICAL_MURDER_FLAG=True,
            LOCATION_DESC=None,
            PERP_AGE_GROUP="25-34",
            PERP_SEX=None,
            PERP_RACE="(null)",
            VIC_AGE_GROUP=None,
            VIC_SEX="UNKNOWN",
            VIC_RACE="(Other)",
        ),
        make_raw_row(
            INCIDENT_KEY=103,
            OCCUR_DATE="not-a-date",
            BORO="BROOKLYN",
            PERP_AGE_GROUP="1020",
            PERP_SEX="F",
            PERP_RACE="WHITE HISPANIC",
            VIC_SEX="X",
        ),
    ])
