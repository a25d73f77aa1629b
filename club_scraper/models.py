"""Data models used throughout the crawler pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SUCCESS = "success"
PARTIAL = "partial"

EXTRACTION_MISS = "extraction_miss"
FETCH_ERROR = "fetch_error"
NAVIGATION_FAILURE = "navigation_failure"
UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class EntityStub:
    """Club record as listed on a letter page, before enrichment."""

    logo_url: str
    logo_label: str
    name: str
    detail_url: str


@dataclass
class EnrichedEntity:
    """Club record augmented with fields from its detail page."""

    logo_url: str
    logo_label: str
    name: str
    detail_url: str
    primary_image_url: Optional[str] = None
    secondary_image_url: Optional[str] = None
    local_image_path: Optional[str] = None

    @classmethod
    def from_stub(cls, stub: EntityStub) -> "EnrichedEntity":
        return cls(
            logo_url=stub.logo_url,
            logo_label=stub.logo_label,
            name=stub.name,
            detail_url=stub.detail_url,
        )

    def to_record(self) -> Dict[str, Optional[str]]:
        """Return the JSON record written to disk."""
        return {
            "logoUrl": self.logo_url,
            "logoLabel": self.logo_label,
            "name": self.name,
            "detailUrl": self.detail_url,
            "primaryImageUrl": self.primary_image_url,
            "secondaryImageUrl": self.secondary_image_url,
            "localImagePath": self.local_image_path,
        }


@dataclass
class DetailFields:
    """Values pulled from a club detail page."""

    primary_image_url: Optional[str]
    secondary_image_url: Optional[str]
    misses: List[str] = field(default_factory=list)


@dataclass
class EnrichmentOutcome:
    """Result of enriching one stub; partial outcomes still carry an entity."""

    entity: EnrichedEntity
    status: str = SUCCESS
    failure_kind: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, entity: EnrichedEntity) -> "EnrichmentOutcome":
        return cls(entity=entity)

    @classmethod
    def partial(
        cls,
        entity: EnrichedEntity,
        kind: str,
        error: Optional[str] = None,
    ) -> "EnrichmentOutcome":
        return cls(entity=entity, status=PARTIAL, failure_kind=kind, error=error)

    @property
    def is_partial(self) -> bool:
        return self.status == PARTIAL


@dataclass
class PartitionMetrics:
    """Timing details for one processed letter."""

    letter: str
    url: str
    stub_count: int
    partial_count: int
    seconds: float


@dataclass
class RunResult:
    """Ordered crawl output: letter ascending, then page order."""

    entities: List[EnrichedEntity] = field(default_factory=list)
    partitions: List[PartitionMetrics] = field(default_factory=list)
    total_seconds: float = 0.0

    @property
    def partial_count(self) -> int:
        return sum(p.partial_count for p in self.partitions)

    def to_records(self) -> List[Dict[str, Any]]:
        return [entity.to_record() for entity in self.entities]
