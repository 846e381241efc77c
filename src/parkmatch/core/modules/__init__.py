"""Module implementations for pairwise location comparison."""

from parkmatch.core.modules.location_scorer import LocationScorerModule

__all__ = ["LocationScorerModule"]
