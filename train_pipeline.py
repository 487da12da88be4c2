"""
Bike Rental Type Prediction - Training Pipeline
================================================
Loads the rental CSV, splits 80/20, encodes features, trains gradient
boosting, logistic regression and averaged perceptron classifiers, and
prints accuracy / AUC / F1 for each.

Usage:
  python train_pipeline.py --data data/bike_sharing.csv
  python train_pipeline.py --data rentals.tsv --delimiter "\t" --no-header --n-jobs -1
"""

import sys
import argparse

from config.data_config import (
    DEFAULT_DATA_PATH,
    CSV_DELIMITER,
    TEST_FRACTION,
    RANDOM_STATE,
    DEGENERATE_POLICY,
    DEGENERATE_POLICIES,
    LOG_LEVEL,
)
from config.model_config import AVAILABLE_MODELS, N_JOBS
from src.exceptions import PipelineError
from src.pipeline import PipelineConfig, run_pipeline


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Bike rental type prediction pipeline")
    p.add_argument("--data", default=str(DEFAULT_DATA_PATH), help="Path to the rental CSV")
    p.add_argument("--delimiter", default=CSV_DELIMITER, help="Field separator")
    p.add_argument(
        "--no-header",
        dest="has_header",
        action="store_false",
        help="The file has no header row",
    )
    p.add_argument(
        "--test-fraction", type=float, default=TEST_FRACTION, help="Held-out test fraction"
    )
    p.add_argument("--seed", type=int, default=RANDOM_STATE, help="Random seed")
    p.add_argument(
        "--models",
        nargs="+",
        choices=AVAILABLE_MODELS,
        default=AVAILABLE_MODELS,
        help="Models to train (in report order)",
    )
    p.add_argument(
        "--n-jobs", type=int, default=N_JOBS, help="Parallel model runs (1 = sequential)"
    )
    p.add_argument(
        "--degenerate-policy",
        choices=DEGENERATE_POLICIES,
        default=DEGENERATE_POLICY,
        help="Zero-range normalization columns: clamp to 0 or raise",
    )
    p.add_argument(
        "--rank-metric",
        choices=["roc_auc", "f1", "accuracy"],
        default="roc_auc",
        help="Metric used to name the best model",
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=LOG_LEVEL,
        help="Logging level",
    )
    return p


def main(argv=None) -> int:
    args = build_argparser().parse_args(argv)

    # Tab and other escapes typed on the command line
    delimiter = args.delimiter.encode().decode("unicode_escape")

    config = PipelineConfig(
        data_path=args.data,
        delimiter=delimiter,
        has_header=args.has_header,
        test_fraction=args.test_fraction,
        seed=args.seed,
        models=args.models,
        n_jobs=args.n_jobs,
        degenerate_policy=args.degenerate_policy,
        rank_metric=args.rank_metric,
        log_level=args.log_level,
    )

    try:
        run_pipeline(config)
    except (PipelineError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
