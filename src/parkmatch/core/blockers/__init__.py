"""Blocker implementations for candidate-pair generation."""

from parkmatch.core.blockers.cross_provider import CrossProviderBlocker

__all__ = ["CrossProviderBlocker"]
