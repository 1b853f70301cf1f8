"""Application services."""

from cv_roast.application.services.critique_pipeline import CritiquePipeline
from cv_roast.application.services.session_correlator import SessionCorrelator

__all__ = ["CritiquePipeline", "SessionCorrelator"]
