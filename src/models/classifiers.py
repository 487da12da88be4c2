"""
Binary Classifiers - Calibrated and Non-Calibrated Variants

Two model families share one interface (predict, decision_scores, transform):
- CalibratedModel: also exposes predict_proba (gradient boosting, logistic regression)
- NonCalibratedModel: scores and labels only (averaged perceptron)

Probability output simply does not exist on a NonCalibratedModel, so
probability-based evaluation of one cannot be expressed.
"""

import pandas as pd
import numpy as np
from pathlib import Path
from typing import Dict, Optional
import logging
import time

# Sklearn models
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.linear_model import LogisticRegression, SGDClassifier

# Local imports
try:
    from config.model_config import AVAILABLE_MODELS, get_model_config
except ImportError:
    import sys

    sys.path.insert(0, str(Path(__file__).parent.parent.parent))
    from config.model_config import AVAILABLE_MODELS, get_model_config


# ============================================================================
# FITTED MODELS
# ============================================================================


class BinaryModel:
    """Fitted binary classifier wrapping a scikit-learn estimator"""

    calibrated = False

    def __init__(self, name: str, estimator, feature_names: list, training_time: float):
        self.name = name
        self.estimator = estimator
        self.feature_names = list(feature_names)
        self.training_time = training_time

    def _check_features(self, X: pd.DataFrame):
        n_features = X.shape[1]
        if n_features != len(self.feature_names):
            raise ValueError(
                f"{self.name} expects {len(self.feature_names)} features, got {n_features}"
            )

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Predicted labels (bool) at the model's default threshold"""
        self._check_features(X)
        return np.asarray(self.estimator.predict(X)).astype(bool)

    def decision_scores(self, X: pd.DataFrame) -> np.ndarray:
        """Raw scores; larger means more likely long-term rental"""
        self._check_features(X)
        return np.asarray(self.estimator.decision_function(X), dtype="float64")

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Scored frame with predicted_label and score columns"""
        index = X.index if isinstance(X, pd.DataFrame) else None
        return pd.DataFrame(
            {
                "predicted_label": self.predict(X),
                "score": self.decision_scores(X),
            },
            index=index,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', estimator={self.estimator!r})"


class CalibratedModel(BinaryModel):
    """Fitted classifier whose output is a class probability"""

    calibrated = True

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """Probability of the positive class (long-term rental)"""
        self._check_features(X)
        proba = self.estimator.predict_proba(X)
        positive = list(self.estimator.classes_).index(True)
        return np.asarray(proba[:, positive], dtype="float64")

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Scored frame with predicted_label, score and probability columns"""
        scored = super().transform(X)
        scored["probability"] = self.predict_proba(X)
        return scored


class NonCalibratedModel(BinaryModel):
    """Fitted classifier producing raw scores only (no probability output)"""

    calibrated = False


# ============================================================================
# TRAINERS
# ============================================================================


class BinaryClassifierTrainer:
    """
    Base trainer: builds an estimator from model_config and fits it

    Subclasses set model_type and implement create_estimator().
    """

    model_type: Optional[str] = None
    model_class = BinaryModel

    def __init__(self, params: Optional[Dict] = None, log_level: str = "INFO"):
        """
        Args:
            params: Overrides merged over the configured hyperparameters
            log_level: Logging level
        """
        if self.model_type not in AVAILABLE_MODELS:
            raise ValueError(
                f"model_type must be one of {AVAILABLE_MODELS}, got '{self.model_type}'"
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

        config = get_model_config(self.model_type)
        self.name = config["display_name"]
        self.params = {**config["params"], **(params or {})}

    @property
    def calibrated(self) -> bool:
        return self.model_class.calibrated

    def create_estimator(self):
        raise NotImplementedError

    def fit(self, X_train: pd.DataFrame, y_train) -> BinaryModel:
        """
        Train a fresh estimator

        Args:
            X_train: Encoded training features
            y_train: Training labels (bool)

        Returns:
            Fitted model of this trainer's variant
        """
        y_train = np.asarray(y_train).astype(bool)
        if len(np.unique(y_train)) < 2:
            raise ValueError(
                f"{self.name} needs both classes in the training labels"
            )

        estimator = self.create_estimator()
        self.logger.info(f"Training {self.name} on {len(X_train):,} samples...")

        start_time = time.time()
        try:
            estimator.fit(X_train, y_train)
        except Exception as e:
            self.logger.error(f"❌ {self.name} training failed: {e}")
            raise
        training_time = time.time() - start_time

        self.logger.info(f"✓ {self.name} trained in {training_time:.2f} seconds")

        feature_names = (
            list(X_train.columns)
            if isinstance(X_train, pd.DataFrame)
            else [f"f{i}" for i in range(np.asarray(X_train).shape[1])]
        )
        return self.model_class(self.name, estimator, feature_names, training_time)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(params={self.params})"


class CalibratedTrainer(BinaryClassifierTrainer):
    """Trainer producing a CalibratedModel"""

    model_class = CalibratedModel


class NonCalibratedTrainer(BinaryClassifierTrainer):
    """Trainer producing a NonCalibratedModel"""

    model_class = NonCalibratedModel


class GradientBoostingTrainer(CalibratedTrainer):
    """Gradient-boosted decision tree ensemble"""

    model_type = "gradient_boosting"

    def create_estimator(self) -> GradientBoostingClassifier:
        self.logger.info(f"Created GradientBoostingClassifier with params: {self.params}")
        return GradientBoostingClassifier(**self.params)


class LogisticRegressionTrainer(CalibratedTrainer):
    """Logistic regression fit with L-BFGS"""

    model_type = "logistic_regression"

    def create_estimator(self) -> LogisticRegression:
        self.logger.info(f"Created LogisticRegression with params: {self.params}")
        return LogisticRegression(**self.params)


class AveragedPerceptronTrainer(NonCalibratedTrainer):
    """Averaged perceptron (SGD with perceptron loss and weight averaging)"""

    model_type = "averaged_perceptron"

    def create_estimator(self) -> SGDClassifier:
        self.logger.info(f"Created SGDClassifier (averaged perceptron) with params: {self.params}")
        return SGDClassifier(**self.params)


TRAINERS = {
    "gradient_boosting": GradientBoostingTrainer,
    "logistic_regression": LogisticRegressionTrainer,
    "averaged_perceptron": AveragedPerceptronTrainer,
}


def create_trainer(
    model_type: str, params: Optional[Dict] = None, log_level: str = "INFO"
) -> BinaryClassifierTrainer:
    """
    Build a trainer by model type

    Args:
        model_type: one of AVAILABLE_MODELS
        params: Hyperparameter overrides
        log_level: Logging level

    Returns:
        Configured trainer
    """
    if model_type not in TRAINERS:
        raise ValueError(f"Unknown model type: {model_type}. Available: {AVAILABLE_MODELS}")
    return TRAINERS[model_type](params=params, log_level=log_level)
