"""
Unit Tests for Feature Encoder Module

Tests:
1. Vector layout and one-hot round trip
2. Min-max normalization bounds (train-derived only)
3. Unseen category policy (all-zero block)
4. Zero-range column policies (clamp / raise)
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import pandas as pd
import numpy as np
import logging
from config.data_config import NORMALIZED_COLUMNS, PASSTHROUGH_COLUMNS
from src.features.feature_encoder import FeatureEncoder
from src.exceptions import DegenerateColumnError


@pytest.fixture
def encoder():
    return FeatureEncoder()


class TestLayout:
    def test_feature_order(self, encoder, split_data):
        """[season..., weather..., passthrough..., normalized...]"""
        train_df, _ = split_data
        state = encoder.fit(train_df)
        names = state.feature_names

        n_season = len(state.categories["season"])
        n_weather = len(state.categories["weather_condition"])

        assert all(n.startswith("season_") for n in names[:n_season])
        assert all(
            n.startswith("weather_condition_")
            for n in names[n_season : n_season + n_weather]
        )
        assert names[n_season + n_weather :] == PASSTHROUGH_COLUMNS + NORMALIZED_COLUMNS

    def test_vocabulary_from_training_data(self, encoder, split_data):
        train_df, _ = split_data
        state = encoder.fit(train_df)

        assert state.categories["season"] == sorted(train_df["season"].unique())
        assert state.categories["weather_condition"] == sorted(
            train_df["weather_condition"].unique()
        )

    def test_fixed_vector_length(self, encoder, split_data):
        train_df, test_df = split_data
        state = encoder.fit(train_df)

        X_train = encoder.transform(train_df, state)
        X_test = encoder.transform(test_df, state)

        assert X_train.shape == (len(train_df), state.n_features)
        assert X_test.shape == (len(test_df), state.n_features)
        assert list(X_test.index) == list(test_df.index)

    def test_passthrough_unchanged(self, encoder, split_data):
        train_df, test_df = split_data
        encoder.fit(train_df)
        X_test = encoder.transform(test_df)

        pd.testing.assert_frame_equal(X_test[PASSTHROUGH_COLUMNS], test_df[PASSTHROUGH_COLUMNS])

    def test_one_hot_rows_sum_to_one(self, encoder, split_data):
        train_df, _ = split_data
        state = encoder.fit(train_df)
        X = encoder.transform(train_df, state)

        block = X.iloc[:, state.category_slice("season")].to_numpy()
        assert (block.sum(axis=1) == 1).all()

    def test_season_round_trip(self, encoder, split_data):
        """Decoding the season block recovers each record's season."""
        train_df, test_df = split_data
        state = encoder.fit(train_df)

        for df in (train_df, test_df):
            decoded = encoder.decode_categories(encoder.transform(df, state), "season", state)
            np.testing.assert_array_equal(decoded.to_numpy(), df["season"].to_numpy())

    def test_decode_unknown_column(self, encoder, split_data):
        train_df, _ = split_data
        state = encoder.fit(train_df)

        with pytest.raises(KeyError):
            state.category_slice("hour")


class TestNormalization:
    def test_train_values_in_unit_range(self, encoder, split_data):
        train_df, _ = split_data
        X_train = encoder.fit_transform(train_df)

        for col in NORMALIZED_COLUMNS:
            assert X_train[col].min() >= 0.0
            assert X_train[col].max() <= 1.0
            assert X_train[col].min() == pytest.approx(0.0)
            assert X_train[col].max() == pytest.approx(1.0)

    def test_test_values_within_train_range(self, encoder, split_data):
        """Test records inside the train min/max map into [0, 1]."""
        train_df, test_df = split_data
        state = encoder.fit(train_df)
        X_test = encoder.transform(test_df, state)

        for col in NORMALIZED_COLUMNS:
            inside = (test_df[col] >= state.data_min[col]) & (test_df[col] <= state.data_max[col])
            values = X_test.loc[inside, col]
            assert ((values >= 0.0) & (values <= 1.0)).all()

    def test_formula(self, encoder, split_data):
        train_df, test_df = split_data
        state = encoder.fit(train_df)
        X_test = encoder.transform(test_df, state)

        col = "temperature"
        expected = (test_df[col] - state.data_min[col]) / (
            state.data_max[col] - state.data_min[col]
        )
        np.testing.assert_allclose(X_test[col].to_numpy(), expected.to_numpy(), atol=1e-12)

    def test_no_refit_on_test_data(self, encoder, split_data):
        """Out-of-range test values are scaled with train bounds, not clipped."""
        train_df, test_df = split_data
        state = encoder.fit(train_df)
        bounds = (dict(state.data_min), dict(state.data_max))

        shifted = test_df.copy()
        shifted["humidity"] = state.data_max["humidity"] + 1.0
        X = encoder.transform(shifted, state)

        assert (X["humidity"] > 1.0).all()
        assert (dict(state.data_min), dict(state.data_max)) == bounds
        assert encoder.state is state


class TestUnseenCategories:
    def test_unseen_weather_is_all_zero(self, encoder, split_data):
        """A weather code absent from training encodes as all zeros."""
        train_df, test_df = split_data
        state = encoder.fit(train_df)

        unseen = test_df.copy()
        unseen.iloc[0, unseen.columns.get_loc("weather_condition")] = 4.0
        X = encoder.transform(unseen, state)

        block = X.iloc[:, state.category_slice("weather_condition")].to_numpy()
        assert block[0].sum() == 0
        assert (block[1:].sum(axis=1) == 1).all()

    def test_unseen_decodes_to_nan(self, encoder, split_data):
        train_df, test_df = split_data
        state = encoder.fit(train_df)

        unseen = test_df.copy()
        unseen["weather_condition"] = 9.0
        decoded = encoder.decode_categories(encoder.transform(unseen, state), "weather_condition")

        assert decoded.isna().all()

    def test_count_unseen(self, encoder, split_data):
        train_df, test_df = split_data
        encoder.fit(train_df)

        unseen = test_df.copy()
        unseen.iloc[:3, unseen.columns.get_loc("season")] = 7.0

        counts = encoder.count_unseen_categories(unseen)
        assert counts == {"season": 3, "weather_condition": 0}


class TestDegenerateColumns:
    def test_clamp_policy(self, split_data):
        """Zero-range columns map to 0 under the default policy."""
        train_df, test_df = split_data
        train_df = train_df.copy()
        train_df["windspeed"] = 0.3

        encoder = FeatureEncoder(degenerate_policy="clamp")
        state = encoder.fit(train_df)

        assert state.degenerate_columns == ["windspeed"]
        assert (encoder.transform(train_df, state)["windspeed"] == 0.0).all()
        assert (encoder.transform(test_df, state)["windspeed"] == 0.0).all()

    def test_raise_policy(self, split_data):
        train_df, _ = split_data
        train_df = train_df.copy()
        train_df["humidity"] = 0.5

        encoder = FeatureEncoder(degenerate_policy="raise")
        with pytest.raises(DegenerateColumnError) as exc_info:
            encoder.fit(train_df)

        assert exc_info.value.column == "humidity"
        assert encoder.state is None

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            FeatureEncoder(degenerate_policy="ignore")


class TestUsageErrors:
    def test_transform_before_fit(self, encoder, small_rental_data):
        with pytest.raises(RuntimeError, match="fit"):
            encoder.transform(small_rental_data)


class TestLogging:
    def test_fit_summary_logged(self, split_data, caplog):
        train_df, _ = split_data
        caplog.set_level(logging.DEBUG)

        state = FeatureEncoder(log_level="DEBUG").fit(train_df)

        assert f"Feature vector length: {state.n_features}" in caplog.text
        assert "season:" in caplog.text

    def test_log_level_respected(self, split_data, caplog):
        train_df, _ = split_data
        caplog.set_level(logging.DEBUG)

        FeatureEncoder(log_level="WARNING").fit(train_df)

        assert "Feature vector length" not in caplog.text
