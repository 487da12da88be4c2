"""
Model Configuration Module
Centralizes all model-related hyperparameters and evaluation settings
"""

from typing import Dict, Any

try:
    from .data_config import RANDOM_STATE
except ImportError:
    # Fallback for when running as standalone script
    import sys
    from pathlib import Path

    sys.path.insert(0, str(Path(__file__).parent))
    from data_config import RANDOM_STATE

# ============================================================================
# MODEL TYPES
# ============================================================================

# Order here is the order models are trained and reported
AVAILABLE_MODELS = ["gradient_boosting", "logistic_regression", "averaged_perceptron"]

# Models whose outputs are interpretable as class probabilities
CALIBRATED_MODELS = ["gradient_boosting", "logistic_regression"]

MODEL_DISPLAY_NAMES = {
    "gradient_boosting": "Gradient Boosting",
    "logistic_regression": "Logistic Regression",
    "averaged_perceptron": "Averaged Perceptron",
}

# ============================================================================
# GRADIENT BOOSTING CONFIGURATION
# ============================================================================

GRADIENT_BOOSTING_PARAMS = {
    # Boosting
    "n_estimators": 100,  # Number of boosting stages (trees)
    "learning_rate": 0.2,
    # Tree structure
    "max_leaf_nodes": 20,
    "max_depth": None,  # Bounded by max_leaf_nodes instead
    "min_samples_leaf": 10,
    # Loss
    "loss": "log_loss",
    # Reproducibility
    "random_state": RANDOM_STATE,
    "verbose": 0,
}

# ============================================================================
# LOGISTIC REGRESSION CONFIGURATION
# ============================================================================

LOGISTIC_REGRESSION_PARAMS = {
    # Regularization (L2 by default)
    "C": 1.0,  # Inverse of regularization strength
    # Optimization (quasi-Newton)
    "solver": "lbfgs",
    "max_iter": 1000,
    "tol": 1e-7,
    # Reproducibility
    "random_state": RANDOM_STATE,
    "verbose": 0,
}

# ============================================================================
# AVERAGED PERCEPTRON CONFIGURATION
# ============================================================================

# SGD with perceptron loss, constant unit step and weight averaging
AVERAGED_PERCEPTRON_PARAMS = {
    "loss": "perceptron",
    "penalty": None,
    "learning_rate": "constant",
    "eta0": 1.0,
    "average": True,
    "max_iter": 10,  # Training passes over the data
    "tol": None,  # Always run all passes
    "shuffle": True,
    "random_state": RANDOM_STATE,
    "verbose": 0,
}

# ============================================================================
# EVALUATION METRICS CONFIGURATION
# ============================================================================

# Metrics computable from predicted labels and raw scores
SCORE_METRICS = ["accuracy", "precision", "recall", "f1", "roc_auc"]

# Metrics that need a probability column (calibrated models only)
PROBABILITY_METRICS = ["log_loss"]

DEFAULT_METRICS = {
    "calibrated": SCORE_METRICS + PROBABILITY_METRICS,
    "non_calibrated": SCORE_METRICS,
}


# ============================================================================
# EXECUTION CONFIGURATION
# ============================================================================

# 1 = sequential; -1 = one thread per model
N_JOBS = 1

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def get_model_config(model_type: str) -> Dict[str, Any]:
    """
    Get model configuration based on model type

    Args:
        model_type: one of AVAILABLE_MODELS

    Returns:
        Dictionary with model parameters, display name and calibration flag
    """
    if model_type not in AVAILABLE_MODELS:
        raise ValueError(
            f"Unknown model type: {model_type}. Available: {AVAILABLE_MODELS}"
        )

    params = {
        "gradient_boosting": GRADIENT_BOOSTING_PARAMS,
        "logistic_regression": LOGISTIC_REGRESSION_PARAMS,
        "averaged_perceptron": AVERAGED_PERCEPTRON_PARAMS,
    }[model_type]

    return {
        "params": dict(params),
        "display_name": MODEL_DISPLAY_NAMES[model_type],
        "calibrated": model_type in CALIBRATED_MODELS,
    }
