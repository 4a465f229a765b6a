"""
Error types raised around the diff engine.

The tree comparator itself never raises for structural differences; these
cover fetching sources, talking to the summarizer and orchestrating a run.
"""

from typing import Optional


class DomDiffError(Exception):
    """Base class for all DOM diff errors."""


class SourceFetchError(DomDiffError):
    """A source could not be fetched or read."""


class EvaluationError(DomDiffError):
    """The AI evaluation of a diff failed."""


class ConfigurationError(EvaluationError):
    """Required evaluator settings are missing."""


class UpstreamError(EvaluationError):
    """The evaluation service failed or returned an unusable answer."""


class ComparisonError(DomDiffError):
    """A comparison run failed at a given stage, optionally for one side."""

    STAGES = ('fetch', 'parse', 'evaluate')

    def __init__(self, stage: str, message: str, side: Optional[int] = None):
        self.stage = stage
        self.side = side
        self.detail = message
        prefix = f"source {side} {stage}" if side is not None else stage
        super().__init__(f"{prefix} failed: {message}")
