"""
Pipeline Runner
Load -> split -> encode -> train/evaluate -> report, for a single run
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

try:
    from config.data_config import (
        DEFAULT_DATA_PATH,
        CSV_DELIMITER,
        CSV_HAS_HEADER,
        TEST_FRACTION,
        RANDOM_STATE,
        DEGENERATE_POLICY,
        LABEL_COLUMN,
        LOG_LEVEL,
    )
    from config.model_config import AVAILABLE_MODELS, N_JOBS
except ImportError:
    import sys

    sys.path.insert(0, str(Path(__file__).parent.parent.parent))
    from config.data_config import (
        DEFAULT_DATA_PATH,
        CSV_DELIMITER,
        CSV_HAS_HEADER,
        TEST_FRACTION,
        RANDOM_STATE,
        DEGENERATE_POLICY,
        LABEL_COLUMN,
        LOG_LEVEL,
    )
    from config.model_config import AVAILABLE_MODELS, N_JOBS

from src.data.data_loader import RentalDataLoader
from src.features.feature_encoder import FeatureEncoder
from src.models.trainer import ModelTrainer, build_runs
from src.models.evaluator import ModelEvaluator
from src.pipeline.reporter import MetricsReporter


@dataclass
class PipelineConfig:
    """Everything one pipeline run needs; nothing is read from module state"""

    data_path: Union[str, Path] = DEFAULT_DATA_PATH
    delimiter: str = CSV_DELIMITER
    has_header: bool = CSV_HAS_HEADER
    test_fraction: float = TEST_FRACTION
    seed: int = RANDOM_STATE
    models: List[str] = field(default_factory=lambda: list(AVAILABLE_MODELS))
    metrics: Dict[str, List[str]] = field(default_factory=dict)
    degenerate_policy: str = DEGENERATE_POLICY
    n_jobs: int = N_JOBS
    rank_metric: str = "roc_auc"
    log_level: str = LOG_LEVEL


def run_pipeline(
    config: PipelineConfig, reporter: Optional[MetricsReporter] = None
) -> Dict:
    """
    Execute the full pipeline once

    Args:
        config: Run configuration
        reporter: Output sink (default: stdout)

    Returns:
        {"n_train", "n_test", "encoder_state", "results", "best"}
    """
    reporter = reporter or MetricsReporter()

    reporter.stage("Bike rental type prediction.")

    # Metric requests are validated before any data is touched
    runs = build_runs(
        config.models, seed=config.seed, metrics=config.metrics, log_level=config.log_level
    )

    loader = RentalDataLoader(log_level=config.log_level)
    df = loader.load(config.data_path, delimiter=config.delimiter, has_header=config.has_header)
    train_df, test_df = loader.split(df, test_fraction=config.test_fraction, seed=config.seed)

    reporter.stage(
        f"Data loaded and split: {len(train_df):,} train / {len(test_df):,} test records."
    )

    encoder = FeatureEncoder(
        degenerate_policy=config.degenerate_policy, log_level=config.log_level
    )
    state = encoder.fit(train_df)
    X_train = encoder.transform(train_df, state)
    X_test = encoder.transform(test_df, state)
    y_train = train_df[LABEL_COLUMN].to_numpy()
    y_test = test_df[LABEL_COLUMN].to_numpy()

    reporter.stage(f"Feature pipeline ready: {state.n_features} features.")

    trainer = ModelTrainer(runs, n_jobs=config.n_jobs, log_level=config.log_level)
    results = trainer.train_and_evaluate_all(X_train, y_train, X_test, y_test)

    reporter.report_all(results)

    best = ModelEvaluator(log_level=config.log_level).rank_models(
        results, metric=config.rank_metric
    )[0]
    reporter.report_best(best, metric=config.rank_metric)

    return {
        "n_train": len(train_df),
        "n_test": len(test_df),
        "encoder_state": state,
        "results": results,
        "best": best,
    }
