"""
Models Package
Provides classifier variants, model training and evaluation
"""

from .classifiers import (
    BinaryModel,
    CalibratedModel,
    NonCalibratedModel,
    BinaryClassifierTrainer,
    CalibratedTrainer,
    NonCalibratedTrainer,
    GradientBoostingTrainer,
    LogisticRegressionTrainer,
    AveragedPerceptronTrainer,
    create_trainer,
)
from .evaluator import ModelEvaluator, evaluate_binary_classifier, compute_metrics
from .trainer import ModelRun, ModelTrainer, build_runs, train_all_models

__all__ = [
    # Classifiers
    "BinaryModel",
    "CalibratedModel",
    "NonCalibratedModel",
    "BinaryClassifierTrainer",
    "CalibratedTrainer",
    "NonCalibratedTrainer",
    "GradientBoostingTrainer",
    "LogisticRegressionTrainer",
    "AveragedPerceptronTrainer",
    "create_trainer",
    # Training
    "ModelRun",
    "ModelTrainer",
    "build_runs",
    "train_all_models",
    # Evaluation
    "ModelEvaluator",
    "evaluate_binary_classifier",
    "compute_metrics",
]
