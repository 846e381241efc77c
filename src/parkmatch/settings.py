"""Central configuration for the aggregation service."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from parkmatch.core.criteria import MatchCriteria


class Settings(BaseSettings):
    """Environment-driven configuration for provider fan-out and matching.

    Matching overrides are optional: unset fields keep the MatchCriteria
    defaults.

    Environment variables:
        PARKMATCH_PROVIDER_TIMEOUT_SECONDS: Per-provider deadline (default: 30)
        PARKMATCH_PROVIDER_MAX_RETRIES: Retries on rate limiting (default: 4)
        PARKMATCH_RETRY_INITIAL_DELAY_SECONDS: First backoff delay (default: 1.0)
        PARKMATCH_RETRY_EXPONENTIAL_BASE: Backoff growth factor (default: 3.0)
        PARKMATCH_CONSIDER_PRICE_IN_MATCHING: Enable the price gate (optional)
        PARKMATCH_MINIMUM_MATCH_CONFIDENCE: Pair acceptance bar (optional)
        PARKMATCH_MAXIMUM_PRICE_DIFFERENCE_RATIO: Price gate ratio (optional)

    Example (.env file):
        PARKMATCH_PROVIDER_TIMEOUT_SECONDS=10
        PARKMATCH_CONSIDER_PRICE_IN_MATCHING=false

        settings = Settings()
        matcher = LocationMatcher(settings.to_match_criteria())
    """

    provider_timeout_seconds: float = Field(default=30.0, gt=0.0)
    provider_max_retries: int = Field(default=4, ge=0)
    retry_initial_delay_seconds: float = Field(default=1.0, ge=0.0)
    retry_exponential_base: float = Field(default=3.0, ge=1.0)

    consider_price_in_matching: bool | None = None
    minimum_match_confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    maximum_price_difference_ratio: float | None = Field(default=None, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(
        env_prefix="PARKMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    def to_match_criteria(self) -> MatchCriteria:
        """Build MatchCriteria from the defaults plus any configured overrides."""
        overrides = {
            name: value
            for name, value in (
                ("consider_price_in_matching", self.consider_price_in_matching),
                ("minimum_match_confidence", self.minimum_match_confidence),
                ("maximum_price_difference_ratio", self.maximum_price_difference_ratio),
            )
            if value is not None
        }
        return MatchCriteria(**overrides)
