"""
Shared pytest fixtures for Bike Rental Type Prediction tests.
Creates small synthetic rental DataFrames and CSV files.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import pandas as pd
import numpy as np

from config.data_config import RECORD_COLUMNS, LABEL_COLUMN


def make_rental_frame(n: int = 200, seed: int = 42) -> pd.DataFrame:
    """
    Synthetic rental records with a learnable long-term label.

    Weather conditions are drawn from {1, 2, 3} only, so tests can
    introduce 4 as an unseen category.
    """
    rng = np.random.RandomState(seed)

    season = rng.randint(1, 5, n)
    weekday = rng.randint(0, 7, n)
    holiday = rng.choice([0, 1], n, p=[0.95, 0.05])
    working_day = ((weekday >= 1) & (weekday <= 5) & (holiday == 0)).astype(int)
    weather = rng.choice([1, 2, 3], n, p=[0.6, 0.3, 0.1])
    temperature = rng.uniform(0.02, 1.0, n)
    humidity = rng.uniform(0.0, 1.0, n)
    windspeed = rng.uniform(0.0, 0.85, n)

    score = (
        1.5 * (working_day == 0)
        + 2.0 * (temperature - 0.5)
        + 0.8 * (season == 3)
        - 0.7 * (weather == 3)
        + rng.normal(0, 0.3, n)
    )

    df = pd.DataFrame(
        {
            "season": season,
            "month": rng.randint(1, 13, n),
            "hour": rng.randint(0, 24, n),
            "holiday": holiday,
            "weekday": weekday,
            "working_day": working_day,
            "weather_condition": weather,
            "temperature": temperature,
            "humidity": humidity,
            "windspeed": windspeed,
        }
    ).astype("float64")
    df[LABEL_COLUMN] = score > 0.5

    return df[RECORD_COLUMNS]


@pytest.fixture
def rental_data():
    """200 typed rental records (both label classes present)."""
    return make_rental_frame()


@pytest.fixture
def small_rental_data():
    """Very small DataFrame (20 rows) for quick unit tests."""
    return make_rental_frame(n=20, seed=0)


@pytest.fixture
def rental_csv(tmp_path, rental_data):
    """rental_data written as a comma-separated file with header, labels as 0/1."""
    path = tmp_path / "bike_sharing.csv"
    out = rental_data.copy()
    out[LABEL_COLUMN] = out[LABEL_COLUMN].astype(int)
    out.to_csv(path, index=False)
    return path


@pytest.fixture
def write_csv(tmp_path):
    """Write raw text lines to a file and return its path."""

    def _write(lines, name="data.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def split_data(rental_data):
    """Deterministic 80/20 split of rental_data."""
    from src.data.data_loader import RentalDataLoader

    return RentalDataLoader().split(rental_data, test_fraction=0.2, seed=0)


@pytest.fixture
def encoded_data(split_data):
    """(X_train, y_train, X_test, y_test, encoder) for model tests."""
    from src.features.feature_encoder import FeatureEncoder

    train_df, test_df = split_data
    encoder = FeatureEncoder()
    state = encoder.fit(train_df)

    return (
        encoder.transform(train_df, state),
        train_df[LABEL_COLUMN].to_numpy(),
        encoder.transform(test_df, state),
        test_df[LABEL_COLUMN].to_numpy(),
        encoder,
    )
