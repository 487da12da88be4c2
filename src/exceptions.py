"""
Pipeline Exceptions
Error taxonomy shared by the loader, encoder, evaluator and runner
"""


class PipelineError(Exception):
    """Base class for all errors raised by the rental prediction pipeline"""


class FileFormatError(PipelineError, ValueError):
    """Input file is empty, has the wrong column count, or holds unparseable values"""


class DegenerateColumnError(PipelineError, ValueError):
    """A min-max normalized column has zero range in the fitting set"""

    def __init__(self, column: str, value: float):
        self.column = column
        self.value = value
        super().__init__(
            f"Column '{column}' has zero range (min == max == {value}); "
            f"cannot min-max normalize"
        )


class InvalidMetricRequestError(PipelineError, ValueError):
    """A probability-based metric was requested for a non-calibrated model"""

    def __init__(self, model_name: str, metrics: list):
        self.model_name = model_name
        self.metrics = list(metrics)
        super().__init__(
            f"Model '{model_name}' is not calibrated and has no probability "
            f"output; cannot compute {self.metrics}"
        )
