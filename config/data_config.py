"""
Data Configuration Module
Centralizes all data-related parameters for the Bike Rental Type Prediction System
"""

from pathlib import Path

# ============================================================================
# PROJECT ROOT & PATHS
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# Default input file (override with --data)
DEFAULT_DATA_PATH = DATA_DIR / "bike_sharing.csv"

# ============================================================================
# CSV INPUT CONFIGURATION
# ============================================================================

CSV_DELIMITER = ","
CSV_HAS_HEADER = True

# ============================================================================
# RECORD SCHEMA
# ============================================================================

# Positional column order of the input file (11 columns)
FEATURE_COLUMNS = [
    "season",
    "month",
    "hour",
    "holiday",
    "weekday",
    "working_day",
    "weather_condition",
    "temperature",
    "humidity",
    "windspeed",
]

# 0 = short-term rental, 1 = long-term rental
LABEL_COLUMN = "rental_type"

RECORD_COLUMNS = FEATURE_COLUMNS + [LABEL_COLUMN]

# Accepted textual spellings of the boolean label
LABEL_TRUE_VALUES = {"1", "1.0", "true", "yes"}
LABEL_FALSE_VALUES = {"0", "0.0", "false", "no"}

# ============================================================================
# FEATURE ENCODING
# ============================================================================

# One-hot encoded (vocabulary learned from the training partition)
CATEGORICAL_COLUMNS = ["season", "weather_condition"]

# Raw numeric columns passed through unchanged
PASSTHROUGH_COLUMNS = ["month", "hour", "holiday", "weekday", "working_day"]

# Min-max normalized with training-partition bounds
NORMALIZED_COLUMNS = ["temperature", "humidity", "windspeed"]

# Zero-range normalization column handling: 'clamp' (map to 0) or 'raise'
DEGENERATE_POLICY = "clamp"
DEGENERATE_POLICIES = ["clamp", "raise"]

# ============================================================================
# TRAIN/TEST SPLIT CONFIGURATION
# ============================================================================

TEST_FRACTION = 0.2  # 80% train, 20% test
RANDOM_STATE = 0  # Seed shared by splitter and trainers
SHUFFLE = True

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
