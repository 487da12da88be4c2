"""
Metrics Reporter
Human-readable, line-oriented pipeline output on standard output
"""

import sys
from typing import Dict, List, Optional, TextIO


def format_percent(value: Optional[float]) -> str:
    """0.875 -> '87.50%'; None -> 'n/a'"""
    if value is None:
        return "n/a"
    return f"{value * 100:.2f}%"


class MetricsReporter:
    """
    Writes one line per pipeline stage and one metrics line per model

    Usage:
        reporter = MetricsReporter()
        reporter.stage("Data loaded and split")
        reporter.report_model("Logistic Regression", metrics)
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def _write(self, line: str):
        # Resolved per call so pytest's capsys sees the output
        stream = self.stream or sys.stdout
        print(line, file=stream, flush=True)

    def banner(self, text: str):
        self._write(f"\n{'=' * 60}\n{text}\n{'=' * 60}")

    def stage(self, message: str):
        """Informational line for a completed pipeline stage"""
        self._write(message)

    def format_metrics_line(self, name: str, metrics: Dict) -> str:
        return (
            f"{name}: accuracy {format_percent(metrics.get('accuracy'))}, "
            f"AUC {format_percent(metrics.get('roc_auc'))}, "
            f"F1 {format_percent(metrics.get('f1'))}"
        )

    def report_model(self, name: str, metrics: Dict):
        self._write(self.format_metrics_line(name, metrics))

    def report_all(self, results: List[Dict]):
        """One metrics line per model result, in the given order"""
        for result in results:
            self.report_model(result["name"], result["metrics"])

    def report_best(self, result: Dict, metric: str = "roc_auc"):
        label = {"roc_auc": "AUC", "f1": "F1", "accuracy": "accuracy"}.get(metric, metric)
        self._write(
            f"Best model by {label}: {result['name']} "
            f"({format_percent(result['metrics'].get(metric))})"
        )
