"""
parkmatch.core: The cross-provider location-matching engine.

Pure, synchronous computation over an in-memory list of records: no I/O and
no state shared between calls.
"""

from parkmatch.core.blocker import Blocker
from parkmatch.core.blockers import CrossProviderBlocker
from parkmatch.core.clusterer import GreedyClusterer
from parkmatch.core.criteria import MatchCriteria
from parkmatch.core.matcher import LocationMatcher, find_matches, generate_matching_report
from parkmatch.core.models import (
    Address,
    CandidatePair,
    Coordinates,
    LocationRecord,
    MatchedLocation,
    PairwiseJudgement,
    Pricing,
    ProviderType,
    SearchParams,
)
from parkmatch.core.module import Module
from parkmatch.core.modules import LocationScorerModule
from parkmatch.core.reports import MatchingReport, ScoreInspectionReport, build_matching_report

__all__ = [
    "Address",
    "Blocker",
    "build_matching_report",
    "CandidatePair",
    "Coordinates",
    "CrossProviderBlocker",
    "find_matches",
    "generate_matching_report",
    "GreedyClusterer",
    "LocationMatcher",
    "LocationRecord",
    "LocationScorerModule",
    "MatchCriteria",
    "MatchedLocation",
    "MatchingReport",
    "Module",
    "PairwiseJudgement",
    "Pricing",
    "ProviderType",
    "ScoreInspectionReport",
    "SearchParams",
]
