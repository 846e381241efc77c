"""Matching thresholds and confidence-rubric weights."""

from pydantic import BaseModel, ConfigDict, Field


class MatchCriteria(BaseModel):
    """
    Configuration for the pairwise scorer and the cluster confidence rubric.

    Similarities and ratios live in [0.0, 1.0]; distances are metres and must
    be positive. Invalid values raise ``pydantic.ValidationError``.

    Example:
        # Providers quoting surge prices: ignore price entirely
        criteria = MatchCriteria(consider_price_in_matching=False)
        matcher = LocationMatcher(criteria)
    """

    model_config = ConfigDict(frozen=True)

    # Name similarity: 0.0 = completely different, 1.0 = identical
    minimum_name_similarity: float = Field(default=0.4, ge=0.0, le=1.0)
    strong_name_similarity: float = Field(default=0.8, ge=0.0, le=1.0)

    # Address similarity is the primary signal
    minimum_address_similarity: float = Field(default=0.75, ge=0.0, le=1.0)
    strong_address_similarity: float = Field(default=0.95, ge=0.0, le=1.0)

    # Geographic proximity limits
    maximum_distance_meters: float = Field(default=150.0, gt=0.0)
    same_location_distance_meters: float = Field(default=30.0, gt=0.0)

    # Price correlation (when enabled)
    maximum_price_difference_ratio: float = Field(default=0.4, ge=0.0, le=1.0)
    consider_price_in_matching: bool = True

    # Cluster confidence rubric
    base_confidence_score: float = Field(default=0.3, ge=0.0, le=1.0)
    provider_count_bonus: float = Field(default=0.2, ge=0.0, le=1.0)
    coordinate_data_bonus: float = Field(default=0.1, ge=0.0, le=1.0)
    complete_address_bonus: float = Field(default=0.05, ge=0.0, le=1.0)
    same_address_bonus: float = Field(default=0.25, ge=0.0, le=1.0)

    # Quality thresholds
    minimum_match_confidence: float = Field(default=0.7, ge=0.0, le=1.0)
    excellent_match_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
