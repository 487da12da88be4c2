"""
Model Trainer - Unified Training Pipeline
Fits every configured classifier on the same encoded training set and
evaluates each one on the held-out test set
"""

import pandas as pd
import numpy as np
from pathlib import Path
from typing import Dict, List, Optional, Tuple
import logging

from joblib import Parallel, delayed

# Local imports
try:
    from config.model_config import (
        AVAILABLE_MODELS,
        DEFAULT_METRICS,
        SCORE_METRICS,
        PROBABILITY_METRICS,
        N_JOBS,
    )
except ImportError:
    import sys

    sys.path.insert(0, str(Path(__file__).parent.parent.parent))
    from config.model_config import (
        AVAILABLE_MODELS,
        DEFAULT_METRICS,
        SCORE_METRICS,
        PROBABILITY_METRICS,
        N_JOBS,
    )

from src.exceptions import InvalidMetricRequestError
from src.models.classifiers import BinaryClassifierTrainer, BinaryModel, create_trainer
from src.models.evaluator import ModelEvaluator


class ModelRun:
    """
    A trainer paired with the metrics to report for it

    Metric requests are checked here, before any training happens:
    probability-based metrics on a non-calibrated trainer raise
    InvalidMetricRequestError.
    """

    def __init__(self, trainer: BinaryClassifierTrainer, metrics: Optional[List[str]] = None):
        if metrics is None:
            metrics = DEFAULT_METRICS["calibrated" if trainer.calibrated else "non_calibrated"]

        unknown = [m for m in metrics if m not in SCORE_METRICS + PROBABILITY_METRICS]
        if unknown:
            raise ValueError(
                f"Unknown metrics {unknown}. Available: {SCORE_METRICS + PROBABILITY_METRICS}"
            )

        probability_metrics = [m for m in metrics if m in PROBABILITY_METRICS]
        if probability_metrics and not trainer.calibrated:
            raise InvalidMetricRequestError(trainer.name, probability_metrics)

        self.trainer = trainer
        self.metrics = list(metrics)

    @property
    def name(self) -> str:
        return self.trainer.name

    @property
    def model_type(self) -> str:
        return self.trainer.model_type

    def __repr__(self) -> str:
        return f"ModelRun(name='{self.name}', metrics={self.metrics})"


def build_runs(
    model_types: Optional[List[str]] = None,
    seed: Optional[int] = None,
    metrics: Optional[Dict[str, List[str]]] = None,
    log_level: str = "INFO",
) -> List[ModelRun]:
    """
    Build validated runs for the requested models

    Args:
        model_types: Subset of AVAILABLE_MODELS (default: all, in config order)
        seed: random_state override for every trainer
        metrics: Optional {model_type: [metric, ...]} overrides
        log_level: Logging level for every trainer

    Returns:
        List of ModelRun in model_types order
    """
    model_types = list(model_types or AVAILABLE_MODELS)
    metrics = metrics or {}

    unknown = [m for m in metrics if m not in model_types]
    if unknown:
        raise ValueError(f"Metric overrides for models not being run: {unknown}")

    params = {"random_state": seed} if seed is not None else None
    return [
        ModelRun(
            create_trainer(model_type, params=params, log_level=log_level),
            metrics.get(model_type),
        )
        for model_type in model_types
    ]


class ModelTrainer:
    """
    Trains and evaluates a set of model runs

    Features:
    - Same encoded train/test data for every model
    - Training time tracking
    - Optional concurrent execution (joblib threads); results keep run order

    Usage:
        trainer = ModelTrainer(build_runs(seed=0))
        results = trainer.train_and_evaluate_all(X_train, y_train, X_test, y_test)
    """

    def __init__(
        self,
        runs: List[ModelRun],
        n_jobs: int = N_JOBS,
        log_level: str = "INFO",
    ):
        """
        Initialize trainer

        Args:
            runs: Validated model runs
            n_jobs: 1 = sequential, -1 = one worker per run
            log_level: Logging level
        """
        if not runs:
            raise ValueError("At least one model run is required")

        self.runs = list(runs)
        self.n_jobs = n_jobs

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

        self.evaluator = ModelEvaluator(log_level=log_level)

        self.logger.info(
            f"ModelTrainer initialized: {[run.name for run in self.runs]}, n_jobs={n_jobs}"
        )

    def train(
        self, run: ModelRun, X_train: pd.DataFrame, y_train: np.ndarray
    ) -> Tuple[BinaryModel, float]:
        """
        Train one model

        Args:
            run: Model run
            X_train: Training features
            y_train: Training labels

        Returns:
            (trained_model, training_time_sec)
        """
        model = run.trainer.fit(X_train, y_train)
        return model, model.training_time

    def train_and_evaluate(
        self,
        run: ModelRun,
        X_train: pd.DataFrame,
        y_train: np.ndarray,
        X_test: pd.DataFrame,
        y_test: np.ndarray,
    ) -> Dict:
        """
        Train one model and score it on the test set

        Returns:
            {"name", "model_type", "calibrated", "model", "metrics", "training_time"}
        """
        self.logger.info("\n" + "=" * 60)
        self.logger.info(f"TRAINING {run.name.upper()}")
        self.logger.info("=" * 60)

        model, training_time = self.train(run, X_train, y_train)

        metrics = self.evaluator.evaluate_model(model, X_test, y_test, metrics=run.metrics)
        self.evaluator.log_metrics(metrics, split="test")

        return {
            "name": run.name,
            "model_type": run.model_type,
            "calibrated": model.calibrated,
            "model": model,
            "metrics": metrics,
            "training_time": training_time,
        }

    def train_and_evaluate_all(
        self,
        X_train: pd.DataFrame,
        y_train: np.ndarray,
        X_test: pd.DataFrame,
        y_test: np.ndarray,
    ) -> List[Dict]:
        """
        Train and evaluate every run

        Returns:
            One result dict per run, in run order
        """
        self.logger.info("\n" + "=" * 70)
        self.logger.info(f"MODEL TRAINING PIPELINE: {len(self.runs)} models")
        self.logger.info("=" * 70)

        if self.n_jobs == 1:
            results = [
                self.train_and_evaluate(run, X_train, y_train, X_test, y_test)
                for run in self.runs
            ]
        else:
            # Runs only read the shared train/test data
            results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
                delayed(self.train_and_evaluate)(run, X_train, y_train, X_test, y_test)
                for run in self.runs
            )

        self.logger.info("\n" + "=" * 70)
        self.logger.info("PIPELINE COMPLETE")
        self.logger.info("=" * 70)
        for result in results:
            self.logger.info(
                f"{result['name']}: F1={result['metrics'].get('f1', 0):.4f} "
                f"time={result['training_time']:.2f}s"
            )

        return list(results)


# Convenience functions


def train_all_models(
    X_train: pd.DataFrame,
    y_train: np.ndarray,
    X_test: pd.DataFrame,
    y_test: np.ndarray,
    seed: Optional[int] = None,
) -> List[Dict]:
    """Quick training of every available model"""
    trainer = ModelTrainer(build_runs(seed=seed))
    return trainer.train_and_evaluate_all(X_train, y_train, X_test, y_test)
