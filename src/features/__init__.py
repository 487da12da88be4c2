"""
Features Package
Fits encoder state on training data and builds feature vectors
"""

from .feature_encoder import EncoderState, FeatureEncoder

__all__ = [
    "EncoderState",
    "FeatureEncoder",
]
