"""
Data contracts for the parkmatch location-matching engine.

This module defines the core Pydantic models shared by every component:

- LocationRecord: One normalized parking listing from one provider
- MatchedLocation: A cluster of records believed to be the same facility
- CandidatePair: Two records a Blocker considers eligible for comparison
- PairwiseJudgement: The scorer's decision for one candidate pair
- SearchParams: The airport-scoped search handed to provider connectors
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ProviderType(str, Enum):
    """Source tag for a parking listing."""

    PARKWHIZ = "parkwhiz"
    SPOTHERO = "spothero"
    CHEAP_AIRPORT_PARKING = "cheap_airport_parking"


# (provider, provider_id): unique per record, never compared with itself
RecordKey = tuple[ProviderType, str]


class Coordinates(BaseModel):
    """WGS84 point. NaN and infinite values are rejected."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)


class Address(BaseModel):
    """Structured postal address as reported by a provider."""

    model_config = ConfigDict(frozen=True)

    street: str
    city: str
    state: str
    zip: str | None = None
    full_address: str


class Pricing(BaseModel):
    """Quoted price for the searched window.

    A daily rate of zero is accepted; the scorer treats two zero rates as
    identical prices.
    """

    model_config = ConfigDict(frozen=True)

    daily_rate: float = Field(ge=0.0, allow_inf_nan=False)
    hourly_rate: float | None = Field(default=None, ge=0.0, allow_inf_nan=False)
    currency: str = "USD"


class LocationRecord(BaseModel):
    """
    One parking-facility listing from one provider.

    Records are built by provider connectors and are immutable inputs to the
    matching engine. The boolean service flags are carried as the provider
    reports them and are not reconciled with ``amenities``.

    Attributes:
        provider_id: Opaque identifier, unique within a provider
        provider: Source tag
        name: Free-text facility name
        address: Structured address
        coordinates: Optional point; absence is valid
        distance_to_airport: Optional distance in miles
        pricing: Quoted pricing
        amenities: Unordered tags such as "shuttle" or "covered"
        provider_data: Provider-specific extras, carried through untouched
    """

    model_config = ConfigDict(frozen=True)

    provider_id: str
    provider: ProviderType
    name: str
    address: Address
    coordinates: Coordinates | None = None
    airport_code: str | None = None
    distance_to_airport: float | None = Field(default=None, ge=0.0)
    pricing: Pricing
    amenities: list[str] = Field(default_factory=list)
    availability: bool = True
    available_from: datetime | None = None
    available_until: datetime | None = None
    shuttle_service: bool = False
    valet_service: bool = False
    covered_parking: bool = False
    provider_data: dict[str, Any] = Field(default_factory=dict)

    @property
    def key(self) -> RecordKey:
        """Identity of this record across the whole input."""
        return (self.provider, self.provider_id)

    @property
    def key_label(self) -> str:
        """Identity as ``provider:provider_id`` for logs and judgements."""
        return f"{self.provider.value}:{self.provider_id}"


class MatchedLocation(BaseModel):
    """
    A cluster of records from different providers describing one facility.

    Attributes:
        id: Generated unique token
        canonical_name: Name of the most complete member
        canonical_address: Address of the most complete member
        coordinates: Mean of member coordinates (None if no member has any)
        locations: Members in cluster order, at least two
        confidence_score: Rubric score in [0.0, 0.95]
        match_reasons: Human-readable audit lines
    """

    id: str
    canonical_name: str
    canonical_address: Address
    coordinates: Coordinates | None = None
    locations: list[LocationRecord] = Field(min_length=2)
    confidence_score: float = Field(ge=0.0, le=1.0)
    match_reasons: list[str]

    @property
    def providers(self) -> list[ProviderType]:
        return [location.provider for location in self.locations]


class CandidatePair(BaseModel):
    """
    Two records eligible for comparison, as produced by a Blocker.

    Attributes:
        left: The seed-side record
        right: The partner record (different provider and provider_id)
        blocker_name: Name of the blocker that generated this pair
    """

    left: LocationRecord
    right: LocationRecord
    blocker_name: str


class PairwiseJudgement(BaseModel):
    """
    Scorer output for one candidate pair.

    A rejected pair has ``score == 0.0`` and exactly one reason explaining the
    rejection. ``decision_step`` names the branch that decided.

    Attributes:
        left_key: ``provider:provider_id`` of the left record
        right_key: ``provider:provider_id`` of the right record
        score: Pair compatibility in range [0.0, 1.0]
        decision_step: Which rule produced the score
        reasons: Audit lines, in the order the signals were evaluated
        provenance: Intermediate signal values (similarities, distance, price ratio)
    """

    left_key: str
    right_key: str
    score: float = Field(..., ge=0.0, le=1.0)
    decision_step: str
    reasons: list[str]
    provenance: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_match(self) -> bool:
        return self.decision_step == "matched"


class SearchParams(BaseModel):
    """Airport-scoped search handed to every provider connector."""

    airport_code: str = Field(min_length=3)
    start_time: datetime
    end_time: datetime

    @field_validator("airport_code")
    @classmethod
    def _normalize_airport_code(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _check_window(self) -> "SearchParams":
        if self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self
