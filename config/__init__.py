"""
Bike Rental Type Prediction Configuration Package

This package contains all configuration modules for the system:
- data_config.py: Input schema, paths, encoding and split parameters
- model_config.py: Model hyperparameters and evaluation settings
"""

__version__ = "1.0.0"
