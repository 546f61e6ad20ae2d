"""
config.py
Constants for the NYPD Shooting Incident report.
"""

from pathlib import Path

# NYPD Shooting Incident Data (Historic), NYC Open Data
SHOOTING_DATA_URL = (
    "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"
)

FIG_DIR = Path("data/processed/report/plots")
AUDIT_PATH = Path("data/processed/report/cleaning_audit.json")

# Raw header → internal name. Order here is the projection order.
COLUMN_MAP = {
    "INCIDENT_KEY":            "incident_key",
    "OCCUR_DATE":              "occur_date",
    "OCCUR_TIME":              "occur_time",
    "BORO":                    "borough",
    "STATISTICAL_MURDER_FLAG": "is_murder",
    "LOCATION_DESC":           "location_description",
    "PERP_AGE_GROUP":          "perp_age_group",
    "PERP_SEX":                "perp_sex",
    "PERP_RACE":               "perp_race",
    "VIC_AGE_GROUP":           "vic_age_group",
    "VIC_SEX":                 "vic_sex",
    "VIC_RACE":                "vic_race",
    "Latitude":                "latitude",
    "Longitude":               "longitude",
}
RAW_COLUMNS = list(COLUMN_MAP)

OCCUR_DATE_FORMAT = "%m/%d/%Y"

UNKNOWN = "Unknown"

AGE_GROUPS = ("<18", "18-24", "25-44", "45-64", "65+", UNKNOWN)

# Tokens that carry no information; null is always included
SEX_UNKNOWN_TOKENS = frozenset({"(null)", "UNKNOWN"})
RACE_UNKNOWN_TOKENS = SEX_UNKNOWN_TOKENS | {"(Other)"}

# field → allowed values; anything else becomes UNKNOWN
AGE_WHITELIST_RULES = {
    "perp_age_group": AGE_GROUPS,
    "vic_age_group":  AGE_GROUPS,
}

# field → tokens collapsed to UNKNOWN; anything else passes through
UNKNOWN_TOKEN_RULES = {
    "perp_sex":  SEX_UNKNOWN_TOKENS,
    "vic_sex":   SEX_UNKNOWN_TOKENS,
    "perp_race": RACE_UNKNOWN_TOKENS,
    "vic_race":  RACE_UNKNOWN_TOKENS,
}

MURDER_FLAG_TRUE = frozenset({"true", "t", "y", "yes", "1"})

CATEGORICAL_FIELDS = [
    "borough", "is_murder",
    "perp_age_group", "perp_sex", "perp_race",
    "vic_age_group", "vic_sex", "vic_race",
]

# Linear trend: fit on years >= TREND_START_YEAR, extrapolate to TREND_TARGET_YEAR
TREND_START_YEAR = 2020
TREND_TARGET_YEAR = 2024
