"""
data_cleaning.py
Cleaning Pipeline for NYPD Shooting Incident Data

Design principles:
- Every transformation is logged with its affected-row count
- No row is ever dropped: bad values become "Unknown" or null
- Each step takes one DataFrame and returns a new one, no in-place rewrites
- A single `run_pipeline()` call reproduces results end-to-end
"""

import json
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from config import (
    AGE_WHITELIST_RULES,
    AUDIT_PATH,
    CATEGORICAL_FIELDS,
    COLUMN_MAP,
    MURDER_FLAG_TRUE,
    OCCUR_DATE_FORMAT,
    RAW_COLUMNS,
    SHOOTING_DATA_URL,
    UNKNOWN,
    UNKNOWN_TOKEN_RULES,
)
from data_collection import load_shooting_data
from errors import SchemaError

# ── Logging Setup ─────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger(__name__)


# ── Audit Trail ───────────────────────────────────────────────────────────────

class AuditTrail:
    """Tracks every cleaning decision with its affected-row count."""

    def __init__(self, total_rows: int):
        self.total_rows = total_rows
        self.steps: list[dict] = []

    def record(self, step: str, description: str, changed: int, detail: str = ""):
        changed = int(changed)
        pct = changed / self.total_rows * 100 if self.total_rows else 0.0
        self.steps.append({
            "step": step,
            "description": description,
            "rows_affected": changed,
            "pct_affected": round(pct, 2),
            "detail": detail,
        })
        log.info(f"[{step}] {description} → {changed:,} rows affected ({pct:.1f}%) {detail}")

    def save(self, path):
        class _NumpyEncoder(json.JSONEncoder):
            """Convert numpy int/float types to native Python before serialising."""
            def default(self, obj):
                if isinstance(obj, np.integer):
                    return int(obj)
                if isinstance(obj, np.floating):
                    return float(obj)
                return super().default(obj)

        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump({"total_rows": self.total_rows, "steps": self.steps}, f,
                      indent=2, cls=_NumpyEncoder)
        log.info(f"Audit trail saved → {path}")

    def summary(self):
        print("\n" + "=" * 65)
        print("CLEANING AUDIT SUMMARY")
        print("=" * 65)
        print(f"{'Step':<26} {'Affected':>10} {'%':>7}  Description")
        print("-" * 65)
        for s in self.steps:
            print(f"{s['step']:<26} {s['rows_affected']:>10,} {s['pct_affected']:>6.1f}%  {s['description']}")
        print("=" * 65)


# ── Step 1: Project ───────────────────────────────────────────────────────────

def project_columns(df: pd.DataFrame, columns: tuple = tuple(RAW_COLUMNS)) -> pd.DataFrame:
    """Keep exactly `columns`, in that order. Fails fast if any is absent."""
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise SchemaError(missing)

    projected = df.loc[:, list(columns)].copy()
    log.info(f"Projected {df.shape[1]} → {projected.shape[1]} columns")
    return projected


def rename_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.rename(columns=COLUMN_MAP)


# ── Step 2: Dates ─────────────────────────────────────────────────────────────

def parse_occur_date(df: pd.DataFrame, audit: AuditTrail) -> pd.DataFrame:
    before_nulls = df["occur_date"].isna().sum()
    occur_date = pd.to_datetime(df["occur_date"], format=OCCUR_DATE_FORMAT, errors="coerce")
    new_nulls = occur_date.isna().sum() - before_nulls
    audit.record("Date parse: occur_date", "Unparseable values → NaT", new_nulls)

    return df.assign(
        occur_date=occur_date,
        occur_year=occur_date.dt.year.astype("Int64"),
    )


# ── Step 3: Age Groups ────────────────────────────────────────────────────────

def recode_age_groups(df: pd.DataFrame, audit: AuditTrail) -> pd.DataFrame:
    """Anything outside the age-group whitelist, null included, becomes Unknown."""
    recoded = {}
    for field, allowed in AGE_WHITELIST_RULES.items():
        inside = df[field].isin(allowed)
        recoded[field] = df[field].where(inside, UNKNOWN)
        audit.record(f"Age group: {field}", "Values outside whitelist → Unknown", (~inside).sum())
    return df.assign(**recoded)


# ── Step 4: Sex & Race ────────────────────────────────────────────────────────

def collapse_unknown_tokens(df: pd.DataFrame, audit: AuditTrail) -> pd.DataFrame:
    """
    Null and placeholder tokens collapse to Unknown. Every other value,
    including ones never seen before, is kept verbatim.
    """
    recoded = {}
    for field, tokens in UNKNOWN_TOKEN_RULES.items():
        uninformative = df[field].isna() | df[field].isin(tokens)
        recoded[field] = df[field].where(~uninformative, UNKNOWN)
        audit.record(f"Unknown tokens: {field}", f"{sorted(tokens)} and null → Unknown",
                     uninformative.sum())
    return df.assign(**recoded)


# ── Step 5: Murder Flag ───────────────────────────────────────────────────────

def _coerce_flag(value) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if pd.isna(value):
        return False
    return str(value).strip().lower() in MURDER_FLAG_TRUE


def coerce_murder_flag(df: pd.DataFrame, audit: AuditTrail) -> pd.DataFrame:
    is_murder = df["is_murder"].map(_coerce_flag).astype(bool)
    audit.record("Murder flag", "Raw flag → True/False, rows flagged as murder",
                 is_murder.sum())
    return df.assign(is_murder=is_murder)


# ── Step 6: Categorical Types ─────────────────────────────────────────────────

def apply_categorical_types(df: pd.DataFrame) -> pd.DataFrame:
    """
    Recoded fields become unordered categoricals. Borough keeps the order
    values first appear in; the murder flag is always [False, True].
    """
    typed = {}
    for field in CATEGORICAL_FIELDS:
        series = df[field]
        if field == "borough":
            categories = list(pd.unique(series.dropna()))
        elif field == "is_murder":
            categories = [False, True]
        else:
            categories = None
        typed[field] = pd.Categorical(series, categories=categories, ordered=False)
    return df.assign(**typed)


# ── Normalizer ────────────────────────────────────────────────────────────────

def normalize(df: pd.DataFrame, audit: Optional[AuditTrail] = None) -> pd.DataFrame:
    """
    Turn a projected raw table into cleaned incident records.
    One output row per input row; never raises on bad field values.
    """
    if audit is None:
        audit = AuditTrail(total_rows=len(df))

    cleaned = rename_columns(df)
    cleaned = parse_occur_date(cleaned, audit)
    cleaned = recode_age_groups(cleaned, audit)
    cleaned = collapse_unknown_tokens(cleaned, audit)
    cleaned = coerce_murder_flag(cleaned, audit)
    cleaned = apply_categorical_types(cleaned)
    return cleaned


def clean_table(raw: pd.DataFrame, audit: Optional[AuditTrail] = None) -> pd.DataFrame:
    """Project then normalize an in-memory raw table."""
    return normalize(project_columns(raw), audit)


# ── Pipeline Orchestrator ─────────────────────────────────────────────────────

def run_pipeline(
    url: str = SHOOTING_DATA_URL,
    audit_path: Optional[str] = None,
) -> pd.DataFrame:
    """
    End-to-end cleaning pipeline. Call this to fully reproduce cleaned data.

    Parameters
    ----------
    url        : CSV location (NYC Open Data by default, any path pandas reads)
    audit_path : optional path for a JSON audit log of every decision

    Returns
    -------
    Cleaned DataFrame
    """
    log.info("=" * 60)
    log.info("NYPD SHOOTING DATA — CLEANING PIPELINE START")
    log.info("=" * 60)

    raw = load_shooting_data(url)
    audit = AuditTrail(total_rows=len(raw))

    df = clean_table(raw, audit)
    log.info(f"Final shape: {df.shape[0]:,} rows × {df.shape[1]} columns")

    if audit_path is not None:
        audit.save(audit_path)
    audit.summary()

    return df


# ── Entry Point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    run_pipeline(audit_path=AUDIT_PATH)
