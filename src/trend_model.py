"""
trend_model.py
Linear trend of yearly incident counts, extrapolated one year out.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from config import TREND_START_YEAR, TREND_TARGET_YEAR
from errors import InsufficientDataError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrendModel:
    """Ordinary least squares line: incidents = intercept + slope * year."""

    intercept: float
    slope: float
    years: tuple

    def predict(self, year) -> float:
        return float(self.intercept + self.slope * year)


def _as_frame(yearly) -> pd.DataFrame:
    if isinstance(yearly, pd.DataFrame):
        return yearly.loc[:, ["occur_year", "incidents"]]
    return pd.DataFrame(list(yearly), columns=["occur_year", "incidents"])


def fit_trend(yearly, start_year: int = TREND_START_YEAR) -> TrendModel:
    """
    Fit a straight line through (year, count) points with year >= start_year.

    `yearly` is either the output of `eda.count_by_year` or any iterable
    of (year, count) pairs.
    """
    points = _as_frame(yearly).dropna()
    points = points[points["occur_year"] >= start_year]

    years = sorted(int(y) for y in points["occur_year"].unique())
    if len(years) < 2:
        raise InsufficientDataError(
            f"Need at least 2 distinct years >= {start_year} to fit a trend, got {years}"
        )

    x = points["occur_year"].to_numpy(dtype=float)
    y = points["incidents"].to_numpy(dtype=float)
    # Centre the years so the fit stays well-conditioned
    x_mean = x.mean()
    slope, centred_intercept = np.polyfit(x - x_mean, y, 1)
    model = TrendModel(
        intercept=float(centred_intercept - slope * x_mean),
        slope=float(slope),
        years=tuple(years),
    )
    log.info(f"Trend fit on {years[0]}–{years[-1]}: {model.slope:+,.1f} incidents/year")
    return model


def predict_incidents(
    yearly,
    start_year: int = TREND_START_YEAR,
    target_year: int = TREND_TARGET_YEAR,
) -> float:
    """Fit on years >= start_year and evaluate the line at target_year."""
    return fit_trend(yearly, start_year).predict(target_year)
