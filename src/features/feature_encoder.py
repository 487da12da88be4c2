"""
Feature Encoding Module
Turns rental records into fixed-length numeric feature vectors

Pipeline:
1. One-hot encode season and weather condition (vocabulary from training data)
2. Pass month, hour, holiday, weekday, working day through unchanged
3. Min-max normalize temperature, humidity, windspeed (bounds from training data)
4. Concatenate in fixed order:
   [season..., weather..., month, hour, holiday, weekday, working_day,
    temperature, humidity, windspeed]

Encoder state is fitted on the training partition only and re-used unchanged
for the test partition.
"""

import pandas as pd
import numpy as np
from pathlib import Path
from typing import Dict, List, Optional
from sklearn.preprocessing import OneHotEncoder, MinMaxScaler
import logging
import warnings

# Import configuration
try:
    from config.data_config import (
        CATEGORICAL_COLUMNS,
        PASSTHROUGH_COLUMNS,
        NORMALIZED_COLUMNS,
        DEGENERATE_POLICY,
        DEGENERATE_POLICIES,
    )
except ImportError:
    import sys

    sys.path.insert(0, str(Path(__file__).parent.parent.parent))
    from config.data_config import (
        CATEGORICAL_COLUMNS,
        PASSTHROUGH_COLUMNS,
        NORMALIZED_COLUMNS,
        DEGENERATE_POLICY,
        DEGENERATE_POLICIES,
    )

from src.exceptions import DegenerateColumnError


class EncoderState:
    """
    Fitted encoder parameters learned from the training partition

    Attributes:
        one_hot: fitted OneHotEncoder for CATEGORICAL_COLUMNS
        scaler: fitted MinMaxScaler for NORMALIZED_COLUMNS
        categories: {column: sorted list of known categories}
        data_min / data_max: {column: training bound}
        degenerate_columns: normalized columns with zero training range
        feature_names: output column names, in vector order
    """

    def __init__(
        self,
        one_hot: OneHotEncoder,
        scaler: MinMaxScaler,
        degenerate_columns: List[str],
    ):
        self.one_hot = one_hot
        self.scaler = scaler
        self.degenerate_columns = list(degenerate_columns)

        self.categories: Dict[str, list] = {
            col: list(cats) for col, cats in zip(CATEGORICAL_COLUMNS, one_hot.categories_)
        }
        self.data_min = dict(zip(NORMALIZED_COLUMNS, scaler.data_min_.tolist()))
        self.data_max = dict(zip(NORMALIZED_COLUMNS, scaler.data_max_.tolist()))

        self.feature_names = (
            list(one_hot.get_feature_names_out(CATEGORICAL_COLUMNS))
            + list(PASSTHROUGH_COLUMNS)
            + list(NORMALIZED_COLUMNS)
        )

    @property
    def n_features(self) -> int:
        return len(self.feature_names)

    def category_slice(self, column: str) -> slice:
        """Position of a categorical column's indicator block in the vector"""
        if column not in self.categories:
            raise KeyError(f"'{column}' is not a one-hot encoded column")

        start = 0
        for col in CATEGORICAL_COLUMNS:
            width = len(self.categories[col])
            if col == column:
                return slice(start, start + width)
            start += width

    def __repr__(self) -> str:
        return (
            f"EncoderState(n_features={self.n_features}, "
            f"categories={self.categories}, degenerate={self.degenerate_columns})"
        )


class FeatureEncoder:
    """
    Fit/transform feature encoder for rental records

    Unseen categories (present at transform time but absent from the
    fitting set) map to an all-zero indicator block.

    Zero-range normalization columns follow degenerate_policy:
    - 'clamp': every value maps to 0
    - 'raise': fit() raises DegenerateColumnError

    Usage:
        encoder = FeatureEncoder()
        state = encoder.fit(train_df)
        X_train = encoder.transform(train_df, state)
        X_test = encoder.transform(test_df, state)
    """

    def __init__(self, degenerate_policy: str = DEGENERATE_POLICY, log_level: str = "INFO"):
        if degenerate_policy not in DEGENERATE_POLICIES:
            raise ValueError(
                f"degenerate_policy must be one of {DEGENERATE_POLICIES}, "
                f"got '{degenerate_policy}'"
            )

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

        self.degenerate_policy = degenerate_policy
        self.state: Optional[EncoderState] = None

    def fit(self, df: pd.DataFrame) -> EncoderState:
        """
        Learn category vocabularies and min/max bounds

        Args:
            df: Training partition

        Returns:
            EncoderState (also kept on the encoder)
        """
        self.logger.info(f"Fitting feature encoder on {len(df):,} records...")

        one_hot = OneHotEncoder(
            categories="auto", handle_unknown="ignore", sparse_output=False
        )
        one_hot.fit(df[CATEGORICAL_COLUMNS])

        scaler = MinMaxScaler(feature_range=(0, 1), clip=False)
        scaler.fit(df[NORMALIZED_COLUMNS])

        degenerate = [
            col
            for col, data_range in zip(NORMALIZED_COLUMNS, scaler.data_range_)
            if data_range == 0
        ]

        if degenerate:
            if self.degenerate_policy == "raise":
                col = degenerate[0]
                value = float(scaler.data_min_[NORMALIZED_COLUMNS.index(col)])
                self.logger.error(f"Zero-range column '{col}' (value={value})")
                raise DegenerateColumnError(col, value)

            self.logger.warning(
                f"Zero-range columns {degenerate} will be clamped to 0"
            )

        self.state = EncoderState(one_hot, scaler, degenerate)

        for col, cats in self.state.categories.items():
            self.logger.info(f"  {col}: {len(cats)} categories {cats}")
        for col in NORMALIZED_COLUMNS:
            self.logger.info(
                f"  {col}: min={self.state.data_min[col]:.4f} "
                f"max={self.state.data_max[col]:.4f}"
            )
        self.logger.info(f"Feature vector length: {self.state.n_features}")

        return self.state

    def transform(
        self, df: pd.DataFrame, state: Optional[EncoderState] = None
    ) -> pd.DataFrame:
        """
        Apply fitted encoder state to records

        Args:
            df: Records to encode (train or test)
            state: Fitted state; defaults to the state from the last fit()

        Returns:
            Feature matrix as DataFrame (index preserved, columns = feature_names)
        """
        state = state or self.state
        if state is None:
            raise RuntimeError("Encoder has not been fitted. Call fit() first.")

        unseen = self.count_unseen_categories(df, state)
        for col, count in unseen.items():
            if count > 0:
                self.logger.warning(
                    f"{count:,} records have a '{col}' category unseen during fit "
                    f"(encoded as all zeros)"
                )

        with warnings.catch_warnings():
            # Unknown categories are already reported above
            warnings.simplefilter("ignore", category=UserWarning)
            one_hot = state.one_hot.transform(df[CATEGORICAL_COLUMNS])

        passthrough = df[PASSTHROUGH_COLUMNS].to_numpy(dtype="float64")

        # Exact (v - min) / (max - min) so training values stay inside [0, 1]
        data_range = np.where(state.scaler.data_range_ == 0, 1.0, state.scaler.data_range_)
        normalized = (
            df[NORMALIZED_COLUMNS].to_numpy(dtype="float64") - state.scaler.data_min_
        ) / data_range
        for col in state.degenerate_columns:
            normalized[:, NORMALIZED_COLUMNS.index(col)] = 0.0

        features = np.hstack([one_hot, passthrough, normalized])

        return pd.DataFrame(features, index=df.index, columns=state.feature_names)

    def fit_transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Fit on df and encode it"""
        state = self.fit(df)
        return self.transform(df, state)

    def count_unseen_categories(
        self, df: pd.DataFrame, state: Optional[EncoderState] = None
    ) -> Dict[str, int]:
        """Number of records per categorical column with a category unseen at fit time"""
        state = state or self.state
        if state is None:
            raise RuntimeError("Encoder has not been fitted. Call fit() first.")

        return {
            col: int((~df[col].isin(state.categories[col])).sum())
            for col in CATEGORICAL_COLUMNS
        }

    def decode_categories(
        self,
        features: pd.DataFrame,
        column: str,
        state: Optional[EncoderState] = None,
    ) -> pd.Series:
        """
        Recover original category values from a one-hot block

        Args:
            features: Encoded feature matrix
            column: Categorical column to decode (e.g. 'season')
            state: Fitted state; defaults to the state from the last fit()

        Returns:
            Series of categories (NaN where the block is all zeros)
        """
        state = state or self.state
        if state is None:
            raise RuntimeError("Encoder has not been fitted. Call fit() first.")

        block = np.asarray(features)[:, state.category_slice(column)]
        categories = np.asarray(state.categories[column], dtype="float64")

        decoded = categories[block.argmax(axis=1)]
        decoded[block.sum(axis=1) == 0] = np.nan

        index = features.index if isinstance(features, pd.DataFrame) else None
        return pd.Series(decoded, index=index, name=column)
