"""Unit tests for fetching the raw shooting CSV."""

from urllib.error import URLError

import pandas as pd
import pytest

import data_collection
from data_collection import load_shooting_data
from errors import FetchError


def test_load_shooting_data_keeps_header_columns(tmp_path, raw_incidents) -> None:
    """Loader should return the CSV header fields exactly, rows unchanged."""
    path = tmp_path / "shootings.csv"
    raw_incidents.to_csv(path, index=False)

    df = load_shooting_data(str(path))

    assert list(df.columns) == list(raw_incidents.columns)
    assert len(df) == 3
    assert df["OCCUR_DATE"].tolist() == ["01/15/2020", "07/04/2021", "not-a-date"]


def test_load_shooting_data_missing_source_raises_fetch_error(tmp_path) -> None:
    """An unreachable source is a FetchError, not a raw OSError."""
    with pytest.raises(FetchError):
        load_shooting_data(str(tmp_path / "does_not_exist.csv"))


def test_load_shooting_data_empty_content_raises_fetch_error(tmp_path) -> None:
    """Content with no tabular data cannot be parsed."""
    path = tmp_path / "empty.csv"
    path.write_text("")

    with pytest.raises(FetchError):
        load_shooting_data(str(path))


def test_load_shooting_data_network_failure_raises_fetch_error(monkeypatch) -> None:
    """Network errors from the HTTP layer are wrapped."""
    def _unreachable(*args, **kwargs):
        raise URLError("connection refused")

    monkeypatch.setattr(data_collection.pd, "read_csv", _unreachable)

    with pytest.raises(FetchError, match="connection refused"):
        load_shooting_data("https://example.invalid/rows.csv")


def test_load_shooting_data_parser_failure_raises_fetch_error(monkeypatch) -> None:
    """Malformed CSV content is wrapped."""
    def _malformed(*args, **kwargs):
        raise pd.errors.ParserError("Error tokenizing data")

    monkeypatch.setattr(data_collection.pd, "read_csv", _malformed)

    with pytest.raises(FetchError, match="Could not parse"):
        load_shooting_data("https://example.invalid/rows.csv")
