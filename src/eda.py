"""
eda.py
Aggregation and charts for cleaned NYPD Shooting Incident data

Design principles:
- Aggregations return plain DataFrames so charts and the trend model share them
- Every chart answers one question and is saved with a descriptive name
- "Unknown" demographic values stay visible, never silently dropped
"""

import logging
import warnings
from pathlib import Path

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd
import seaborn as sns

from config import FIG_DIR, UNKNOWN, UNKNOWN_TOKEN_RULES, AGE_WHITELIST_RULES
from trend_model import TrendModel

warnings.filterwarnings("ignore", category=FutureWarning)

log = logging.getLogger(__name__)

# ── Style ─────────────────────────────────────────────────────────────────────
PALETTE  = "YlOrRd"
ACCENT   = "#D62728"   # red — murders and predictions
NEUTRAL  = "#4C72B0"   # blue — standard bars
BG_GRAY  = "#F7F7F7"

plt.rcParams.update({
    "figure.facecolor": BG_GRAY,
    "axes.facecolor":   BG_GRAY,
    "axes.spines.top":  False,
    "axes.spines.right": False,
    "axes.labelsize":   11,
    "axes.titlesize":   13,
    "axes.titleweight": "bold",
    "xtick.labelsize":  9,
    "ytick.labelsize":  9,
    "font.family":      "sans-serif",
})


# ── Helpers ───────────────────────────────────────────────────────────────────

def _save(fig: plt.Figure, name: str, fig_dir=FIG_DIR) -> Path:
    fig_dir = Path(fig_dir)
    fig_dir.mkdir(parents=True, exist_ok=True)
    path = fig_dir / f"{name}.png"
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"  ✓ Saved → {path}")
    return path


def _source_note(ax, note="Source: NYPD Shooting Incident Data / data.cityofnewyork.us"):
    ax.annotate(note, xy=(0, -0.12), xycoords="axes fraction",
                fontsize=7, color="gray")


def fmt_thousands(ax, axis="y"):
    fmt = mticker.FuncFormatter(lambda x, _: f"{x:,.0f}")
    if axis == "y":
        ax.yaxis.set_major_formatter(fmt)
    else:
        ax.xaxis.set_major_formatter(fmt)


# ── Aggregation ───────────────────────────────────────────────────────────────

def _borough_labels(df: pd.DataFrame) -> pd.Series:
    """Borough as a categorical with nulls labelled Unknown (last category)."""
    borough = df["borough"].astype("category")
    if borough.isna().any():
        if UNKNOWN not in borough.cat.categories:
            borough = borough.cat.add_categories([UNKNOWN])
        borough = borough.fillna(UNKNOWN)
    return borough


def _dated(yearly: pd.DataFrame) -> pd.DataFrame:
    """Drop the null-year row for charts that need a numeric x axis."""
    dated = yearly.dropna(subset=["occur_year"])
    return dated.astype({"occur_year": int})


def count_by_borough(df: pd.DataFrame) -> pd.DataFrame:
    """
    Incidents per borough, plus how many of them were murders.
    Rows follow the borough category order; rows without a borough are
    counted under "Unknown", placed last.
    """
    is_murder = df["is_murder"].astype(bool)
    counts = (
        df.assign(borough=_borough_labels(df), murder=is_murder)
        .groupby("borough", observed=True, sort=True)
        .agg(incidents=("incident_key", "size"), murders=("murder", "sum"))
        .reset_index()
    )
    counts["incidents"] = counts["incidents"].astype(int)
    counts["murders"] = counts["murders"].astype(int)
    return counts


def count_by_year(df: pd.DataFrame) -> pd.DataFrame:
    """
    Incidents per occurrence year, ascending. Rows without a parseable date
    form one last row whose occur_year is <NA>.
    """
    years = df["occur_year"].astype("Int64")
    dated = years.dropna()
    undated = int(years.isna().sum())

    per_year = dated.value_counts().sort_index()
    year_values = [int(y) for y in per_year.index]
    incidents = [int(n) for n in per_year.to_numpy()]
    if undated:
        log.warning(f"{undated:,} rows have no parseable occur_date — counted under a null year")
        year_values.append(pd.NA)
        incidents.append(undated)

    return pd.DataFrame({
        "occur_year": pd.array(year_values, dtype="Int64"),
        "incidents":  pd.Series(incidents, dtype="int64"),
    })


# ── Chart 1: Borough ──────────────────────────────────────────────────────────

def plot_incidents_by_borough(df: pd.DataFrame, fig_dir=FIG_DIR) -> Path:
    """
    Q: Which boroughs see the most shootings, and how many end in murder?
    """
    print("=" * 60)
    print("CHART 1 | INCIDENTS BY BOROUGH")
    print("=" * 60)

    counts = count_by_borough(df)
    split = pd.DataFrame({
        "Not murder": counts["incidents"] - counts["murders"],
        "Murder":     counts["murders"],
    })
    split.index = counts["borough"].astype(str)

    fig, ax = plt.subplots(figsize=(10, 6))
    split.plot(kind="bar", stacked=True, ax=ax, color=[NEUTRAL, ACCENT], edgecolor="white")
    ax.set_title("Shooting Incidents by Borough\n(Red = statistical murder)")
    ax.set_xlabel("")
    ax.set_ylabel("Number of Incidents")
    ax.tick_params(axis="x", rotation=0)
    fmt_thousands(ax)
    for i, total in enumerate(counts["incidents"]):
        ax.text(i, total, f"{total:,}", ha="center", va="bottom", fontsize=8)
    ax.legend(fontsize=9)
    _source_note(ax)

    plt.tight_layout()
    path = _save(fig, "01_incidents_by_borough", fig_dir)

    if len(counts):
        top = counts.loc[counts["incidents"].idxmax()]
        print(f"  Highest-incident borough: {top['borough']} ({top['incidents']:,} incidents)")
    return path


# ── Chart 2: Year ─────────────────────────────────────────────────────────────

def plot_incidents_by_year(df: pd.DataFrame, fig_dir=FIG_DIR) -> Path:
    """
    Q: Are shootings rising or falling year over year?
    """
    print("\n" + "=" * 60)
    print("CHART 2 | INCIDENTS BY YEAR")
    print("=" * 60)

    yearly = _dated(count_by_year(df))

    fig, ax = plt.subplots(figsize=(12, 6))
    sns.barplot(data=yearly, x="occur_year", y="incidents", color=NEUTRAL, ax=ax)
    ax.set_title("Shooting Incidents per Year")
    ax.set_xlabel("Year")
    ax.set_ylabel("Number of Incidents")
    ax.tick_params(axis="x", rotation=45)
    fmt_thousands(ax)
    _source_note(ax)

    plt.tight_layout()
    path = _save(fig, "02_incidents_by_year", fig_dir)

    if len(yearly):
        peak = yearly.loc[yearly["incidents"].idxmax()]
        print(f"  Peak year: {peak['occur_year']} ({peak['incidents']:,} incidents)")
    return path


# ── Chart 3: Victim Demographics ──────────────────────────────────────────────

def plot_victim_demographics(df: pd.DataFrame, fig_dir=FIG_DIR) -> Path:
    """
    Q: Does the victim race mix differ by borough?
    Shown as % within each borough so borough size does not dominate.
    """
    print("\n" + "=" * 60)
    print("CHART 3 | VICTIM RACE × BOROUGH")
    print("=" * 60)

    cross = pd.crosstab(
        df["vic_race"].astype(str),
        _borough_labels(df).astype(str),
        normalize="columns",
    ) * 100

    fig, ax = plt.subplots(figsize=(12, 6))
    sns.heatmap(cross, ax=ax, cmap=PALETTE, annot=True, fmt=".1f", linewidths=0.5,
                cbar_kws={"label": "% of Borough Incidents"})
    ax.set_title("Victim Race Distribution by Borough (%)")
    ax.set_xlabel("")
    ax.set_ylabel("Victim Race")
    _source_note(ax)

    plt.tight_layout()
    return _save(fig, "03_victim_race_by_borough", fig_dir)


# ── Chart 4: Trend ────────────────────────────────────────────────────────────

def plot_trend(yearly: pd.DataFrame, model: TrendModel, target_year: int,
               fig_dir=FIG_DIR) -> Path:
    """
    Q: Where does the recent trend point next year?
    """
    print("\n" + "=" * 60)
    print("CHART 4 | LINEAR TREND")
    print("=" * 60)

    yearly = _dated(yearly)
    fitted_years = list(model.years) + [target_year]
    predicted = model.predict(target_year)

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(yearly["occur_year"], yearly["incidents"], marker="o", color=NEUTRAL,
            linewidth=2, label="Observed")
    ax.plot(fitted_years, [model.predict(y) for y in fitted_years], "--",
            color=ACCENT, alpha=0.7, label=f"Trend ({model.years[0]}+)")
    ax.scatter([target_year], [predicted], color=ACCENT, s=80, zorder=3,
               label=f"{target_year} estimate: {predicted:,.0f}")
    ax.set_title("Shooting Incidents per Year with Linear Trend")
    ax.set_xlabel("Year")
    ax.set_ylabel("Number of Incidents")
    fmt_thousands(ax)
    ax.legend(fontsize=9)
    _source_note(ax)

    plt.tight_layout()
    return _save(fig, "04_linear_trend", fig_dir)


# ── Summary ───────────────────────────────────────────────────────────────────

def summarize_cleaned(df: pd.DataFrame) -> pd.Series:
    """
    Prints a short overview and returns the share of "Unknown" per recoded field.
    """
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)

    print(f"  Incidents: {len(df):,}")
    if df["occur_date"].notna().any():
        print(f"  Date range: {df['occur_date'].min():%Y-%m-%d} to {df['occur_date'].max():%Y-%m-%d}")
    if len(df):
        print(f"  Murders: {df['is_murder'].astype(bool).sum():,} "
              f"({df['is_murder'].astype(bool).mean() * 100:.1f}%)")

    fields = list(AGE_WHITELIST_RULES) + list(UNKNOWN_TOKEN_RULES)
    unknown_share = pd.Series(
        {f: (df[f].astype(str) == UNKNOWN).mean() * 100 if len(df) else 0.0 for f in fields},
        name="pct_unknown",
    )
    print("\n% Unknown by field:")
    print(unknown_share.round(1).to_string())
    return unknown_share
