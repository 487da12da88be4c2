"""
Rental Data Loader
Reads the bike rental CSV into typed records and splits it into train/test sets

Features:
- Positional schema (11 columns) with strict type validation
- Boolean label parsing (0/1, true/false)
- Seeded, reproducible shuffled train/test split
- Detailed logging of load and split statistics

Output: DataFrame with float64 feature columns and a bool label column
"""

import pandas as pd
import numpy as np
from pathlib import Path
from typing import Tuple, Union
from sklearn.model_selection import train_test_split
import logging

# Import configuration
try:
    from config.data_config import (
        CSV_DELIMITER,
        CSV_HAS_HEADER,
        FEATURE_COLUMNS,
        LABEL_COLUMN,
        LABEL_TRUE_VALUES,
        LABEL_FALSE_VALUES,
        RECORD_COLUMNS,
        RANDOM_STATE,
        SHUFFLE,
        TEST_FRACTION,
    )
except ImportError:
    import sys

    sys.path.insert(0, str(Path(__file__).parent.parent.parent))
    from config.data_config import (
        CSV_DELIMITER,
        CSV_HAS_HEADER,
        FEATURE_COLUMNS,
        LABEL_COLUMN,
        LABEL_TRUE_VALUES,
        LABEL_FALSE_VALUES,
        RECORD_COLUMNS,
        RANDOM_STATE,
        SHUFFLE,
        TEST_FRACTION,
    )

from src.exceptions import FileFormatError

# Max offending rows quoted in a format error
_MAX_REPORTED_ROWS = 5


class RentalDataLoader:
    """
    Loads and partitions the bike rental dataset

    Schema (positional, 11 columns):
    - season, month, hour, holiday, weekday, working_day,
      weather_condition, temperature, humidity, windspeed (float64)
    - rental_type (bool) - TARGET (0 = short-term, 1 = long-term)

    Usage:
        loader = RentalDataLoader()
        df = loader.load("data/bike_sharing.csv")
        train_df, test_df = loader.split(df, test_fraction=0.2, seed=0)
    """

    def __init__(self, log_level: str = "INFO"):
        """
        Initialize data loader

        Args:
            log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        """
        # Setup logging
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

        # Track load statistics
        self.stats = {
            "records": 0,
            "positive_labels": 0,
            "train_records": 0,
            "test_records": 0,
        }

    def read_raw(
        self,
        path: Union[str, Path],
        delimiter: str = CSV_DELIMITER,
        has_header: bool = CSV_HAS_HEADER,
    ) -> pd.DataFrame:
        """
        Read the file as untyped text columns

        Args:
            path: Path to the delimited text file
            delimiter: Field separator
            has_header: Whether the first row holds column names

        Returns:
            DataFrame of strings (NaN for empty fields)

        Raises:
            FileNotFoundError: If the path does not exist
            FileFormatError: If the file is empty or cannot be tokenized
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        self.logger.info(f"Reading: {path}")

        try:
            df = pd.read_csv(
                path,
                sep=delimiter,
                header=0 if has_header else None,
                dtype=str,
                skipinitialspace=True,
            )
        except pd.errors.EmptyDataError as e:
            raise FileFormatError(f"Data file is empty: {path}") from e
        except pd.errors.ParserError as e:
            raise FileFormatError(f"Could not parse {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise FileFormatError(f"{path} is not valid UTF-8 text: {e}") from e

        if df.shape[1] != len(RECORD_COLUMNS):
            raise FileFormatError(
                f"Expected {len(RECORD_COLUMNS)} columns {RECORD_COLUMNS}, "
                f"found {df.shape[1]} in {path}"
            )

        if has_header:
            header = [str(c).strip() for c in df.columns]
            if header != RECORD_COLUMNS:
                self.logger.debug(
                    f"Header {header} renamed to canonical columns {RECORD_COLUMNS}"
                )

        # Columns are positional; header names are not trusted
        df.columns = RECORD_COLUMNS

        if len(df) == 0:
            raise FileFormatError(f"Data file has no records: {path}")

        return df

    def parse_features(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Convert feature columns to float64

        Raises:
            FileFormatError: On missing or non-numeric values
        """
        features = pd.DataFrame(index=df.index)

        for col in FEATURE_COLUMNS:
            raw = df[col]
            values = pd.to_numeric(raw.str.strip(), errors="coerce").astype("float64")

            invalid_mask = values.isna() | ~np.isfinite(values.fillna(0.0))
            if invalid_mask.any():
                bad_rows = df.index[invalid_mask.to_numpy()].tolist()[:_MAX_REPORTED_ROWS]
                bad_values = raw[invalid_mask].tolist()[:_MAX_REPORTED_ROWS]
                raise FileFormatError(
                    f"Column '{col}' has {int(invalid_mask.sum())} missing or "
                    f"non-numeric values (records {bad_rows}: {bad_values})"
                )

            features[col] = values

        return features

    def parse_labels(self, df: pd.DataFrame) -> pd.Series:
        """
        Convert the label column to bool

        Raises:
            FileFormatError: On values outside the accepted true/false spellings
        """
        raw = df[LABEL_COLUMN]
        normalized = raw.str.strip().str.lower()

        true_mask = normalized.isin(LABEL_TRUE_VALUES)
        false_mask = normalized.isin(LABEL_FALSE_VALUES)
        invalid_mask = ~(true_mask | false_mask)

        if invalid_mask.any():
            bad_rows = df.index[invalid_mask.to_numpy()].tolist()[:_MAX_REPORTED_ROWS]
            bad_values = raw[invalid_mask].tolist()[:_MAX_REPORTED_ROWS]
            raise FileFormatError(
                f"Column '{LABEL_COLUMN}' has {int(invalid_mask.sum())} values "
                f"that are not boolean (records {bad_rows}: {bad_values})"
            )

        return true_mask.astype(bool).rename(LABEL_COLUMN)

    def load(
        self,
        path: Union[str, Path],
        delimiter: str = CSV_DELIMITER,
        has_header: bool = CSV_HAS_HEADER,
    ) -> pd.DataFrame:
        """
        Load the rental dataset into typed records

        Args:
            path: Path to the delimited text file
            delimiter: Field separator
            has_header: Whether the first row holds column names

        Returns:
            DataFrame with RECORD_COLUMNS; index is the 0-based record position
        """
        self.logger.info("=" * 60)
        self.logger.info("LOADING DATA")
        self.logger.info("=" * 60)

        try:
            raw = self.read_raw(path, delimiter=delimiter, has_header=has_header)
            df = self.parse_features(raw)
            df[LABEL_COLUMN] = self.parse_labels(raw)
        except (FileNotFoundError, FileFormatError) as e:
            self.logger.error(f"❌ Failed to load {path}: {e}")
            raise

        df = df.reset_index(drop=True)

        self.stats["records"] = len(df)
        self.stats["positive_labels"] = int(df[LABEL_COLUMN].sum())

        self.logger.info(f"Loaded: {len(df):,} records x {len(FEATURE_COLUMNS)} features")
        self.logger.info(
            f"Long-term rentals: {self.stats['positive_labels']:,} "
            f"({df[LABEL_COLUMN].mean() * 100:.1f}%)"
        )

        return df

    def split(
        self,
        df: pd.DataFrame,
        test_fraction: float = TEST_FRACTION,
        seed: int = RANDOM_STATE,
    ) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """
        Shuffled train/test split, reproducible for a fixed seed

        Args:
            df: Full dataset
            test_fraction: Fraction of records held out for testing
            seed: Random seed for the shuffle

        Returns:
            (train_df, test_df) - disjoint, original index preserved
        """
        if not 0.0 < test_fraction < 1.0:
            raise ValueError(
                f"test_fraction must be between 0 and 1, got {test_fraction}"
            )
        if len(df) < 2:
            raise ValueError(
                f"Need at least 2 records to split, got {len(df)}"
            )

        self.logger.info("=" * 60)
        self.logger.info("TRAIN/TEST SPLIT")
        self.logger.info("=" * 60)

        train_df, test_df = train_test_split(
            df, test_size=test_fraction, random_state=seed, shuffle=SHUFFLE
        )

        self.stats["train_records"] = len(train_df)
        self.stats["test_records"] = len(test_df)

        self.logger.info(
            f"Split ratio: {1 - test_fraction:.0%} / {test_fraction:.0%} (seed={seed})"
        )
        self.logger.info(f"Train set: {len(train_df):,} rows")
        self.logger.info(f"Test set:  {len(test_df):,} rows")

        return train_df, test_df


# Convenience functions


def load_rental_data(
    path: Union[str, Path],
    delimiter: str = CSV_DELIMITER,
    has_header: bool = CSV_HAS_HEADER,
) -> pd.DataFrame:
    """Quick load with default logging"""
    return RentalDataLoader().load(path, delimiter=delimiter, has_header=has_header)


def split_rental_data(
    df: pd.DataFrame, test_fraction: float = TEST_FRACTION, seed: int = RANDOM_STATE
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Quick split with default logging"""
    return RentalDataLoader().split(df, test_fraction=test_fraction, seed=seed)
