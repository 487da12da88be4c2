"""
Source Code Root Package

Contains all source modules for the Bike Rental Type Prediction System:
- data/: CSV loading and train/test splitting
- features/: One-hot encoding, min-max normalization, feature vectors
- models/: Calibrated / non-calibrated classifiers, training and evaluation
- pipeline/: Single-run orchestration and metrics reporting
- exceptions.py: Pipeline error taxonomy
"""

__version__ = "1.0.0"
