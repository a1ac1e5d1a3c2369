"""Vectorised evaluation of role rule tables.

For n declarations and a rule set with k rules, the predicates form an
n x k boolean hit matrix; the summed scores are ``hits @ weights``.
"""

import numpy as np

from ..declarations.models import DeclarationRef
from .rules import RoleRuleSet


def hit_matrix(ruleset: RoleRuleSet, declarations: list[DeclarationRef]) -> np.ndarray:
    """Boolean matrix: row per declaration, column per rule."""
    if not declarations:
        return np.zeros((0, len(ruleset.rules)), dtype=bool)
    return np.array(
        [[bool(rule.predicate(decl)) for rule in ruleset.rules] for decl in declarations],
        dtype=bool,
    )


def score_declarations(ruleset: RoleRuleSet, declarations: list[DeclarationRef]) -> np.ndarray:
    """Score every declaration against one role.

    Args:
        ruleset: Role rule table
        declarations: Declarations to score

    Returns:
        Array of confidences in [0, 1], aligned with ``declarations``
    """
    if not declarations:
        return np.zeros(0, dtype=float)

    weights = np.array([rule.weight for rule in ruleset.rules], dtype=float)
    scores = hit_matrix(ruleset, declarations).astype(float) @ weights

    if ruleset.adjust is not None:
        scores = np.array(
            [ruleset.adjust(decl, float(score)) for decl, score in zip(declarations, scores)],
            dtype=float,
        )

    excluded = np.array(
        [any(exclude(decl) for exclude in ruleset.exclusions) for decl in declarations],
        dtype=bool,
    )
    scores[excluded] = 0.0

    # Six decimal places before any threshold comparison
    return np.round(np.clip(scores, 0.0, 1.0), 6)


def fired_rules(ruleset: RoleRuleSet, decl: DeclarationRef) -> list[str]:
    """Names of the rules that hold for ``decl``."""
    return [rule.name for rule in ruleset.rules if rule.predicate(decl)]
