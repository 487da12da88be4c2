"""
Model Evaluator - Metric Computation Utilities
Computes binary classification metrics for calibrated and non-calibrated models
"""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, List, Optional
from sklearn.metrics import (
    accuracy_score,
    precision_score,
    recall_score,
    f1_score,
    roc_auc_score,
    log_loss,
    confusion_matrix,
)
import logging

try:
    from config.model_config import SCORE_METRICS, PROBABILITY_METRICS, DEFAULT_METRICS
except ImportError:
    import sys

    sys.path.insert(0, str(Path(__file__).parent.parent.parent))
    from config.model_config import SCORE_METRICS, PROBABILITY_METRICS, DEFAULT_METRICS

from src.exceptions import InvalidMetricRequestError
from src.models.classifiers import BinaryModel, CalibratedModel


class ModelEvaluator:
    """
    Evaluates model performance with standard metrics

    Supports:
    - Calibrated models: accuracy, precision, recall, F1, ROC-AUC, log-loss
    - Non-calibrated models: accuracy, precision, recall, F1, ROC-AUC

    ROC-AUC is always computed by ranking raw decision scores, so it is
    defined for both variants.
    """

    def __init__(self, log_level: str = "INFO"):
        """
        Initialize evaluator

        Args:
            log_level: Logging level
        """
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(getattr(logging, log_level))

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def evaluate_classification(
        self,
        y_true: np.ndarray,
        y_pred: np.ndarray,
        y_score: Optional[np.ndarray] = None,
        y_prob: Optional[np.ndarray] = None,
        metrics: Optional[List[str]] = None,
    ) -> Dict:
        """
        Compute classification metrics

        Args:
            y_true: Ground truth labels
            y_pred: Predicted labels
            y_score: Raw decision scores (for ROC-AUC)
            y_prob: Positive-class probabilities (for log-loss)
            metrics: Metric names to compute (default: all computable)

        Returns:
            Metrics dict, e.g.
            {
                "accuracy": float,
                "precision": float,
                "recall": float,
                "f1": float,
                "roc_auc": float or None,
                "log_loss": float (calibrated only)
            }
        """
        if metrics is None:
            metrics = [m for m in SCORE_METRICS if m != "roc_auc" or y_score is not None]
            if y_prob is not None:
                metrics += PROBABILITY_METRICS

        unknown = [m for m in metrics if m not in SCORE_METRICS + PROBABILITY_METRICS]
        if unknown:
            raise ValueError(
                f"Unknown metrics {unknown}. Available: {SCORE_METRICS + PROBABILITY_METRICS}"
            )

        y_true = np.asarray(y_true).astype(bool)
        y_pred = np.asarray(y_pred).astype(bool)

        results = {}

        try:
            if "accuracy" in metrics:
                results["accuracy"] = float(accuracy_score(y_true, y_pred))
            if "precision" in metrics:
                results["precision"] = float(
                    precision_score(y_true, y_pred, average="binary", zero_division=0)
                )
            if "recall" in metrics:
                results["recall"] = float(
                    recall_score(y_true, y_pred, average="binary", zero_division=0)
                )
            if "f1" in metrics:
                results["f1"] = float(
                    f1_score(y_true, y_pred, average="binary", zero_division=0)
                )

            # ROC-AUC from score ranking
            if "roc_auc" in metrics:
                if y_score is None:
                    raise ValueError("roc_auc requires decision scores (y_score)")
                results["roc_auc"] = self.compute_auc(y_true, y_score)

            # Log-loss needs calibrated probabilities
            if "log_loss" in metrics:
                if y_prob is None:
                    raise ValueError("log_loss requires probabilities (y_prob)")
                results["log_loss"] = float(
                    log_loss(y_true, np.asarray(y_prob, dtype="float64"), labels=[False, True])
                )

            self.logger.info(f"Classification metrics computed: {len(results)} metrics")

        except Exception as e:
            self.logger.error(f"Error computing classification metrics: {e}")
            raise

        return results

    def compute_auc(self, y_true: np.ndarray, y_score: np.ndarray) -> Optional[float]:
        """
        Area under the ROC curve from ranked scores

        Ties share rank, so constant scores give 0.5.
        Returns None when y_true holds a single class.
        """
        y_true = np.asarray(y_true).astype(bool)
        if len(np.unique(y_true)) < 2:
            self.logger.warning("Could not compute ROC-AUC: only one class present in y_true")
            return None

        try:
            return float(roc_auc_score(y_true, np.asarray(y_score)))
        except ValueError as e:
            self.logger.warning(f"Could not compute ROC-AUC: {e}")
            return None

    def compute_confusion_matrix(self, y_true: np.ndarray, y_pred: np.ndarray) -> Dict:
        """
        Compute confusion matrix in dict format

        Args:
            y_true: Ground truth labels
            y_pred: Predicted labels

        Returns:
            Dict with {TP, FP, FN, TN} and matrix format [[TN, FP], [FN, TP]]
        """
        try:
            cm = confusion_matrix(
                np.asarray(y_true).astype(bool),
                np.asarray(y_pred).astype(bool),
                labels=[False, True],
            )

            tn, fp, fn, tp = cm.ravel()

            return {
                "dict": {"TN": int(tn), "FP": int(fp), "FN": int(fn), "TP": int(tp)},
                "matrix": cm.tolist(),  # [[TN, FP], [FN, TP]]
            }

        except Exception as e:
            self.logger.error(f"Error computing confusion matrix: {e}")
            raise

    def evaluate_model(
        self,
        model: BinaryModel,
        X_test: pd.DataFrame,
        y_test: np.ndarray,
        metrics: Optional[List[str]] = None,
    ) -> Dict:
        """
        Complete model evaluation

        Args:
            model: Fitted CalibratedModel or NonCalibratedModel
            X_test: Encoded test features
            y_test: Test labels
            metrics: Metric names (default: DEFAULT_METRICS for the model's variant)

        Returns:
            Complete metrics dict (incl. confusion matrix)
        """
        calibrated = isinstance(model, CalibratedModel)

        if metrics is None:
            metrics = DEFAULT_METRICS["calibrated" if calibrated else "non_calibrated"]

        probability_metrics = [m for m in metrics if m in PROBABILITY_METRICS]
        if probability_metrics and not calibrated:
            raise InvalidMetricRequestError(model.name, probability_metrics)

        self.logger.info(f"Evaluating {model.name}...")

        y_pred = model.predict(X_test)
        y_score = model.decision_scores(X_test)
        y_prob = model.predict_proba(X_test) if calibrated else None

        results = self.evaluate_classification(
            y_test, y_pred, y_score=y_score, y_prob=y_prob, metrics=metrics
        )

        cm_result = self.compute_confusion_matrix(y_test, y_pred)
        results["confusion_matrix"] = cm_result["matrix"]
        results["confusion_matrix_dict"] = cm_result["dict"]

        self.logger.info("Evaluation complete")
        return results

    def rank_models(self, results: List[Dict], metric: str = "roc_auc") -> List[Dict]:
        """
        Order model results best-first by a metric

        Args:
            results: [{"name": str, "metrics": dict}, ...]
            metric: Metric to rank by (higher is better; None ranks last)

        Returns:
            New list, best model first
        """
        return sorted(
            results,
            key=lambda r: (
                r["metrics"].get(metric) is not None,
                r["metrics"].get(metric) or 0.0,
            ),
            reverse=True,
        )

    def log_metrics(self, metrics: Dict, split: str = "test"):
        """
        Log metrics in readable format

        Args:
            metrics: Metrics dictionary
            split: 'train' or 'test'
        """
        self.logger.info(f"\n{split.upper()} SET METRICS:")
        self.logger.info(f"  Accuracy:  {metrics.get('accuracy', 0):.4f}")
        self.logger.info(f"  Precision: {metrics.get('precision', 0):.4f}")
        self.logger.info(f"  Recall:    {metrics.get('recall', 0):.4f}")
        self.logger.info(f"  F1-Score:  {metrics.get('f1', 0):.4f}")

        if metrics.get("roc_auc") is not None:
            self.logger.info(f"  ROC-AUC:   {metrics['roc_auc']:.4f}")

        if "log_loss" in metrics:
            self.logger.info(f"  Log-loss:  {metrics['log_loss']:.4f}")

        if "confusion_matrix_dict" in metrics:
            cm = metrics["confusion_matrix_dict"]
            self.logger.info(f"\n  Confusion Matrix:")
            self.logger.info(f"    TN: {cm['TN']:,}  FP: {cm['FP']:,}")
            self.logger.info(f"    FN: {cm['FN']:,}  TP: {cm['TP']:,}")


# Convenience functions


def evaluate_binary_classifier(model: BinaryModel, X_test: pd.DataFrame, y_test: np.ndarray) -> Dict:
    """
    Quick evaluation with the default metrics for the model's variant

    Args:
        model: Fitted model
        X_test: Test features
        y_test: Test labels

    Returns:
        Metrics dict
    """
    evaluator = ModelEvaluator()
    return evaluator.evaluate_model(model, X_test, y_test)


def compute_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_score: Optional[np.ndarray] = None,
    y_prob: Optional[np.ndarray] = None,
) -> Dict:
    """
    Quick metrics computation

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        y_score: Decision scores (optional, enables ROC-AUC)
        y_prob: Probabilities (optional, enables log-loss)

    Returns:
        Metrics dict
    """
    metrics = ["accuracy", "precision", "recall", "f1"]
    if y_score is not None:
        metrics.append("roc_auc")
    if y_prob is not None:
        metrics += PROBABILITY_METRICS

    evaluator = ModelEvaluator()
    return evaluator.evaluate_classification(
        y_true, y_pred, y_score=y_score, y_prob=y_prob, metrics=metrics
    )
