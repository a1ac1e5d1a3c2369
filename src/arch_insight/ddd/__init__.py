"""DDD role recognition: rule tables, vectorised scoring, aggregates."""

from .detector import DddRoleDetector
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
from .rules import ROLE_RULES, Rule, RoleRuleSet
from .scoring import fired_rules, score_declarations

__all__ = [
    "DddAggregate",
    "DddDomainEvent",
    "DddEntity",
    "DddPatternAnalysis",
    "DddRepository",
    "DddRole",
    "DddRoleDetector",
    "DddService",
    "DddValueObject",
    "ROLE_RULES",
    "RoleRuleSet",
    "RoleScores",
    "Rule",
    "fired_rules",
    "score_declarations",
]
