"""DddRoleDetector: confidence-scored DDD role recognition."""

from typing import Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..declarations.index import DeclarationIndex
from ..declarations.models import DeclarationRef, DiagnosticKind
from ..declarations.types import clean_type_name, type_arguments
from ..logging_config import get_logger
from . import rules
from .models import (
    DddAggregate,
    DddDomainEvent,
    DddEntity,
    DddPatternAnalysis,
    DddRepository,
    DddRole,
    DddService,
    DddValueObject,
    RoleScores,
)
from .scoring import score_declarations

logger = get_logger(__name__)


_SEQUENCE_TYPES = (tuple, list)


def _all_strings(values) -> bool:
    return isinstance(values, _SEQUENCE_TYPES) and all(isinstance(v, str) for v in values)


def _is_scorable(decl: DeclarationRef) -> bool:
    """True if every member the rules read is well formed."""
    try:
        if not isinstance(decl.fields, _SEQUENCE_TYPES) or not isinstance(
            decl.methods, _SEQUENCE_TYPES
        ):
            return False
        for f in decl.fields:
            if not (
                isinstance(f.name, str) and isinstance(f.type_text, str) and _all_strings(f.markers)
            ):
                return False
        for m in decl.methods:
            if not (
                isinstance(m.name, str)
                and isinstance(m.is_abstract, bool)
                and _all_strings(m.param_types)
                and (m.return_type is None or isinstance(m.return_type, str))
            ):
                return False
        return (
            _all_strings(decl.supertypes)
            and _all_strings(decl.markers)
            and _all_strings(decl.constructor_params)
            and _all_strings(decl.imports)
            and isinstance(decl.origin_file, str)
        )
    except AttributeError:
        return False


class DddRoleDetector:
    """Scores every declaration of an index against the DDD role tables.

    Args:
        index: Declarations to score
        thresholds: Inclusion and aggregate thresholds
    """

    def __init__(
        self, index: DeclarationIndex, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
    ) -> None:
        self.index = index
        self.thresholds = thresholds
        self._scores: Optional[dict[DddRole, dict[str, float]]] = None

    def _role_scores(self) -> dict[DddRole, dict[str, float]]:
        if self._scores is None:
            declarations = [d for d in self.index if _is_scorable(d)]
            skipped = len(self.index) - len(declarations)
            if skipped:
                logger.warning(f"Skipping {skipped} malformed declarations in role scoring")

            ids = [d.qualified_name for d in declarations]
            self._scores = {}
            for role, ruleset in rules.ROLE_RULES.items():
                values = score_declarations(ruleset, declarations)
                self._scores[role] = {qid: float(v) for qid, v in zip(ids, values)}
        return self._scores

    def score_all(self) -> list[RoleScores]:
        """Raw confidences of every role for every declaration.

        Malformed declarations score zero on every role.
        """
        scores = self._role_scores()
        return [
            RoleScores(
                qualified_name=decl.qualified_name,
                scores={
                    role.value: scores[role].get(decl.qualified_name, 0.0) for role in DddRole
                },
            )
            for decl in self.index
        ]

    def detect(self) -> DddPatternAnalysis:
        """Report every role whose confidence exceeds the inclusion threshold.

        Returns:
            DddPatternAnalysis with role lists in qualified-name order
        """
        scores = self._role_scores()
        threshold = self.thresholds.role_threshold

        def above(role: DddRole) -> list[tuple[DeclarationRef, float]]:
            found = []
            for decl in self.index:
                confidence = scores[role].get(decl.qualified_name, 0.0)
                if confidence > threshold:
                    found.append((decl, confidence))
            return found

        analysis = DddPatternAnalysis(
            entities=[self._entity(d, c) for d, c in above(DddRole.ENTITY)],
            value_objects=[self._value_object(d, c) for d, c in above(DddRole.VALUE_OBJECT)],
            services=[self._service(d, c) for d, c in above(DddRole.SERVICE)],
            repositories=[self._repository(d, c) for d, c in above(DddRole.REPOSITORY)],
            domain_events=[self._domain_event(d, c) for d, c in above(DddRole.DOMAIN_EVENT)],
        )
        analysis.aggregates = self.find_aggregates(analysis.entities)

        logger.debug(
            f"DDD roles: {len(analysis.entities)} entities, "
            f"{len(analysis.value_objects)} value objects, {len(analysis.services)} services, "
            f"{len(analysis.repositories)} repositories, {len(analysis.domain_events)} events, "
            f"{len(analysis.aggregates)} aggregates"
        )
        return analysis

    def find_aggregates(self, entities: list[DddEntity]) -> list[DddAggregate]:
        """Entities above the aggregate threshold that hold other entities.

        A field counts when its type, or any of its generic arguments,
        resolves to another detected entity.
        """
        entity_ids = {e.qualified_name for e in entities}
        aggregates = []

        for entity in entities:
            if entity.confidence <= self.thresholds.aggregate_root_threshold:
                continue
            decl = self.index.get(entity.qualified_name)
            if decl is None:
                continue

            related: list[str] = []
            for f in decl.fields:
                for type_name in [clean_type_name(f.type_text), *type_arguments(f.type_text)]:
                    try:
                        target = self.index.resolve(type_name, decl)
                    except (AttributeError, TypeError) as e:
                        logger.warning(
                            f"Cannot resolve field type of {decl.qualified_name}: {e}"
                        )
                        self.index.diagnostics.add(
                            DiagnosticKind.EXTRACTION_SKIP, decl.qualified_name, f"fields: {e}"
                        )
                        continue
                    if (
                        target is not None
                        and target in entity_ids
                        and target != entity.qualified_name
                        and target not in related
                    ):
                        related.append(target)

            if related:
                aggregates.append(
                    DddAggregate(
                        root_entity=entity.qualified_name,
                        related_entities=related,
                        confidence=round(
                            entity.confidence * self.thresholds.aggregate_confidence_factor, 6
                        ),
                    )
                )
        return aggregates

    # ── Role fact builders ─────────────────────────────────────────

    def _entity(self, decl: DeclarationRef, confidence: float) -> DddEntity:
        ids = rules.id_fields(decl)
        return DddEntity(
            class_name=decl.simple_name,
            qualified_name=decl.qualified_name,
            file_name=decl.origin_file,
            has_unique_id=rules.has_id(decl),
            is_mutable=rules.has_mutable_field(decl),
            id_fields=ids,
            confidence=confidence,
        )

    def _value_object(self, decl: DeclarationRef, confidence: float) -> DddValueObject:
        return DddValueObject(
            class_name=decl.simple_name,
            qualified_name=decl.qualified_name,
            file_name=decl.origin_file,
            is_immutable=rules.all_fields_immutable(decl),
            has_value_equality=rules.has_equals_and_hash(decl) or rules.is_value_construct(decl),
            properties=[f.name for f in decl.fields],
            confidence=confidence,
        )

    def _service(self, decl: DeclarationRef, confidence: float) -> DddService:
        return DddService(
            class_name=decl.simple_name,
            qualified_name=decl.qualified_name,
            file_name=decl.origin_file,
            is_stateless=rules.is_stateless(decl),
            has_domain_logic=bool(rules.service_verbs(decl)),
            methods=rules.method_names(decl),
            confidence=confidence,
        )

    def _repository(self, decl: DeclarationRef, confidence: float) -> DddRepository:
        crud = rules.crud_methods(decl)
        return DddRepository(
            class_name=decl.simple_name,
            qualified_name=decl.qualified_name,
            file_name=decl.origin_file,
            is_interface=decl.is_interface,
            has_data_access=bool(crud),
            crud_methods=crud,
            confidence=confidence,
        )

    def _domain_event(self, decl: DeclarationRef, confidence: float) -> DddDomainEvent:
        return DddDomainEvent(
            class_name=decl.simple_name,
            qualified_name=decl.qualified_name,
            file_name=decl.origin_file,
            is_immutable=rules.all_fields_immutable(decl),
            has_event_naming=rules.has_event_naming(decl),
            has_timestamp=rules.has_timestamp_field(decl),
            confidence=confidence,
        )
