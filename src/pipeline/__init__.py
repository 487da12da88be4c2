"""
Pipeline Package
Single-run orchestration and metrics reporting
"""

from .reporter import MetricsReporter, format_percent
from .runner import PipelineConfig, run_pipeline

__all__ = [
    "MetricsReporter",
    "format_percent",
    "PipelineConfig",
    "run_pipeline",
]
