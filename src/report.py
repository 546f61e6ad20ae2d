"""
report.py
NYPD Shooting Incident Report, start to finish.

Fetch → clean → chart → fit a linear trend → print the extrapolated count.
Recomputes everything from the live URL on every run.
"""

import logging
from typing import Optional

from config import FIG_DIR, SHOOTING_DATA_URL, TREND_START_YEAR, TREND_TARGET_YEAR
from data_cleaning import run_pipeline
from eda import (
    count_by_year,
    plot_incidents_by_borough,
    plot_incidents_by_year,
    plot_trend,
    plot_victim_demographics,
    summarize_cleaned,
)
from errors import InsufficientDataError
from trend_model import fit_trend

log = logging.getLogger(__name__)


def run_report(
    url: str = SHOOTING_DATA_URL,
    fig_dir=FIG_DIR,
    start_year: int = TREND_START_YEAR,
    target_year: int = TREND_TARGET_YEAR,
    audit_path: Optional[str] = None,
) -> Optional[float]:
    """
    Run the full report in one call.

    FetchError and SchemaError propagate and stop the run. A trend that
    cannot be fitted only skips the prediction; the charts are still made.

    Returns the predicted incident count for `target_year`, or None.
    """
    df = run_pipeline(url, audit_path=audit_path)

    summarize_cleaned(df)
    plot_incidents_by_borough(df, fig_dir)
    plot_incidents_by_year(df, fig_dir)
    plot_victim_demographics(df, fig_dir)

    yearly = count_by_year(df)
    try:
        model = fit_trend(yearly, start_year)
    except InsufficientDataError as exc:
        log.error(f"Trend step skipped: {exc}")
        return None

    plot_trend(yearly, model, target_year, fig_dir)
    predicted = model.predict(target_year)

    print("\n" + "=" * 60)
    print(f"Predicted shooting incidents in {target_year}: {predicted:,.0f}")
    print(f"  (linear fit on {model.years[0]}–{model.years[-1]}, "
          f"{model.slope:+,.1f} incidents/year)")
    print("=" * 60)
    return predicted


# ── Entry Point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    run_report()
