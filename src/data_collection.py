"""
Data Collection
Fetches the raw shooting incident CSV into a DataFrame.
"""

import logging

import pandas as pd

from config import SHOOTING_DATA_URL
from errors import FetchError

log = logging.getLogger(__name__)


def load_shooting_data(url: str = SHOOTING_DATA_URL) -> pd.DataFrame:
    """
    Read the CSV at `url` as-is: columns are the header fields, no renaming.
    One attempt only; any network or parse failure becomes a FetchError.
    """
    log.info(f"Fetching: {url}")
    try:
        df = pd.read_csv(url, low_memory=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise FetchError(f"Could not parse CSV from {url}: {exc}") from exc
    except OSError as exc:
        # URLError and HTTPError are OSError subclasses
        raise FetchError(f"Could not fetch {url}: {exc}") from exc

    if df.shape[1] == 0:
        raise FetchError(f"No columns found in data from {url}")

    log.info(f"Loaded {len(df):,} rows × {len(df.columns)} columns")
    return df


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    df = load_shooting_data()
    print(f"Columns: {list(df.columns)}")
    print(df.head())
