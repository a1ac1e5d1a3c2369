"""Domain-Driven-Design role models."""

from dataclasses import dataclass, field
from enum import Enum


class DddRole(Enum):
    ENTITY = "entity"
    VALUE_OBJECT = "value_object"
    SERVICE = "service"
    REPOSITORY = "repository"
    DOMAIN_EVENT = "domain_event"


@dataclass
class DddEntity:
    class_name: str
    qualified_name: str
    file_name: str
    has_unique_id: bool = False
    is_mutable: bool = False
    id_fields: list[str] = field(default_factory=list)
    confidence: float = 0.0


@dataclass
class DddValueObject:
    class_name: str
    qualified_name: str
    file_name: str
    is_immutable: bool = False
    has_value_equality: bool = False
    properties: list[str] = field(default_factory=list)
    confidence: float = 0.0


@dataclass
class DddService:
    class_name: str
    qualified_name: str
    file_name: str
    is_stateless: bool = False
    has_domain_logic: bool = False
    methods: list[str] = field(default_factory=list)
    confidence: float = 0.0


@dataclass
class DddRepository:
    class_name: str
    qualified_name: str
    file_name: str
    is_interface: bool = False
    has_data_access: bool = False
    crud_methods: list[str] = field(default_factory=list)
    confidence: float = 0.0


@dataclass
class DddDomainEvent:
    class_name: str
    qualified_name: str
    file_name: str
    is_immutable: bool = False
    has_event_naming: bool = False
    has_timestamp: bool = False
    confidence: float = 0.0


@dataclass
class DddAggregate:
    """An entity that holds references to other detected entities.

    ``root_entity`` and ``related_entities`` are qualified names.
    """

    root_entity: str
    related_entities: list[str] = field(default_factory=list)
    confidence: float = 0.0


@dataclass
class DddPatternAnalysis:
    entities: list[DddEntity] = field(default_factory=list)
    value_objects: list[DddValueObject] = field(default_factory=list)
    services: list[DddService] = field(default_factory=list)
    repositories: list[DddRepository] = field(default_factory=list)
    aggregates: list[DddAggregate] = field(default_factory=list)
    domain_events: list[DddDomainEvent] = field(default_factory=list)


@dataclass
class RoleScores:
    """Raw confidence of every role for one declaration, before thresholding."""

    qualified_name: str
    scores: dict[str, float] = field(default_factory=dict)  # DddRole value -> confidence

    def best(self) -> tuple[str, float]:
        """The highest scoring role; ties go to the first role in DddRole order."""
        best_role, best_score = "", 0.0
        for role in DddRole:
            score = self.scores.get(role.value, 0.0)
            if score > best_score:
                best_role, best_score = role.value, score
        return best_role, best_score
