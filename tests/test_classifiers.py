"""
Unit Tests for Classifier Variants

Tests:
1. Each trainer yields the right variant (calibrated / non-calibrated)
2. Non-calibrated models expose no probability output
3. Scored frame columns and value ranges
4. Determinism for a fixed seed
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
import numpy as np
import logging
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.linear_model import LogisticRegression, SGDClassifier
from src.models.classifiers import (
    CalibratedModel,
    NonCalibratedModel,
    GradientBoostingTrainer,
    LogisticRegressionTrainer,
    AveragedPerceptronTrainer,
    create_trainer,
)


class TestVariants:
    @pytest.mark.parametrize(
        "trainer_cls, estimator_cls",
        [
            (GradientBoostingTrainer, GradientBoostingClassifier),
            (LogisticRegressionTrainer, LogisticRegression),
        ],
    )
    def test_calibrated_trainers(self, encoded_data, trainer_cls, estimator_cls):
        X_train, y_train, _, _, _ = encoded_data
        trainer = trainer_cls()
        model = trainer.fit(X_train, y_train)

        assert trainer.calibrated
        assert isinstance(model, CalibratedModel)
        assert isinstance(model.estimator, estimator_cls)

    def test_perceptron_is_not_calibrated(self, encoded_data):
        X_train, y_train, _, _, _ = encoded_data
        trainer = AveragedPerceptronTrainer()
        model = trainer.fit(X_train, y_train)

        assert not trainer.calibrated
        assert isinstance(model, NonCalibratedModel)
        assert isinstance(model.estimator, SGDClassifier)
        assert not hasattr(model, "predict_proba")

    def test_perceptron_configuration(self):
        """SGD with perceptron loss, unit constant step and averaging."""
        params = AveragedPerceptronTrainer().params

        assert params["loss"] == "perceptron"
        assert params["average"] is True
        assert params["learning_rate"] == "constant"
        assert params["eta0"] == 1.0

    def test_logistic_regression_uses_lbfgs(self):
        assert LogisticRegressionTrainer().params["solver"] == "lbfgs"


class TestScoring:
    def test_calibrated_scored_frame(self, encoded_data):
        X_train, y_train, X_test, _, _ = encoded_data
        model = LogisticRegressionTrainer().fit(X_train, y_train)

        scored = model.transform(X_test)

        assert list(scored.columns) == ["predicted_label", "score", "probability"]
        assert scored["predicted_label"].dtype == bool
        assert scored["probability"].between(0.0, 1.0).all()
        assert list(scored.index) == list(X_test.index)

    def test_non_calibrated_scored_frame(self, encoded_data):
        X_train, y_train, X_test, _, _ = encoded_data
        model = AveragedPerceptronTrainer().fit(X_train, y_train)

        scored = model.transform(X_test)

        assert list(scored.columns) == ["predicted_label", "score"]

    def test_label_follows_score_sign(self, encoded_data):
        """Linear models predict the positive class exactly when score > 0."""
        X_train, y_train, X_test, _, _ = encoded_data

        for trainer in (LogisticRegressionTrainer(), AveragedPerceptronTrainer()):
            model = trainer.fit(X_train, y_train)
            np.testing.assert_array_equal(
                model.predict(X_test), model.decision_scores(X_test) > 0
            )

    def test_learns_signal(self, encoded_data):
        """Boosted trees beat chance on the synthetic label."""
        X_train, y_train, X_test, y_test, _ = encoded_data
        model = GradientBoostingTrainer().fit(X_train, y_train)

        assert (model.predict(X_test) == y_test).mean() > 0.6

    def test_feature_count_checked(self, encoded_data):
        X_train, y_train, X_test, _, _ = encoded_data
        model = LogisticRegressionTrainer().fit(X_train, y_train)

        with pytest.raises(ValueError, match="expects"):
            model.predict(X_test.iloc[:, :-1])


class TestTraining:
    @pytest.mark.parametrize(
        "model_type", ["gradient_boosting", "logistic_regression", "averaged_perceptron"]
    )
    def test_deterministic_for_seed(self, encoded_data, model_type):
        X_train, y_train, X_test, _, _ = encoded_data

        scores_a = create_trainer(model_type, {"random_state": 3}).fit(X_train, y_train)
        scores_b = create_trainer(model_type, {"random_state": 3}).fit(X_train, y_train)

        np.testing.assert_array_equal(
            scores_a.decision_scores(X_test), scores_b.decision_scores(X_test)
        )

    def test_param_override(self):
        trainer = create_trainer("gradient_boosting", {"n_estimators": 5})

        assert trainer.params["n_estimators"] == 5
        assert trainer.create_estimator().n_estimators == 5

    def test_single_class_rejected(self, encoded_data):
        X_train, _, _, _, _ = encoded_data
        y_all_true = np.ones(len(X_train), dtype=bool)

        with pytest.raises(ValueError, match="both classes"):
            LogisticRegressionTrainer().fit(X_train, y_all_true)

    def test_unknown_model_type(self):
        with pytest.raises(ValueError):
            create_trainer("lightgbm")

    def test_training_time_recorded(self, encoded_data):
        X_train, y_train, _, _, _ = encoded_data
        model = AveragedPerceptronTrainer().fit(X_train, y_train)

        assert model.training_time >= 0
        assert model.feature_names == list(X_train.columns)


class TestLogging:
    def test_training_logged(self, encoded_data, caplog):
        X_train, y_train, _, _, _ = encoded_data
        caplog.set_level(logging.DEBUG)

        LogisticRegressionTrainer(log_level="DEBUG").fit(X_train, y_train)

        assert "Training Logistic Regression" in caplog.text
        assert "Logistic Regression trained in" in caplog.text

    def test_create_trainer_passes_log_level(self):
        trainer = create_trainer("averaged_perceptron", log_level="WARNING")
        assert trainer.logger.level == logging.WARNING
