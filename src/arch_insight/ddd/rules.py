"""Rule tables for DDD role scoring.

Each role is a RoleRuleSet: weighted predicates whose weights are summed for
every predicate that holds, exclusion predicates that force the score to
zero, and an optional adjustment applied to the summed score. Predicates look
at one declaration only.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from ..declarations.models import DeclarationRef, FieldDecl, MethodDecl
from ..declarations.types import clean_type_name
from .models import DddRole

Predicate = Callable[[DeclarationRef], bool]


@dataclass(frozen=True)
class Rule:
    name: str
    predicate: Predicate
    weight: float


@dataclass(frozen=True)
class RoleRuleSet:
    role: DddRole
    rules: tuple[Rule, ...]
    exclusions: tuple[Predicate, ...] = ()
    adjust: Optional[Callable[[DeclarationRef, float], float]] = None


# ── Declaration facts ──────────────────────────────────────────────

_ACCESSOR = re.compile(r"^(get|set|is)([A-Z_]|$)")
_NON_BUSINESS = ("equals", "hashcode", "tostring", "copy", "component")

LIFECYCLE_VERBS = ("create", "update", "delete", "save", "activate", "deactivate")
SERVICE_VERBS = (
    "calculate",
    "validate",
    "process",
    "handle",
    "execute",
    "apply",
    "transform",
    "convert",
)
CRUD_CATEGORIES: dict[str, tuple[str, ...]] = {
    "read": ("find", "get", "select", "load", "fetch"),
    "write": ("save", "create", "insert", "persist", "store"),
    "update": ("update", "modify"),
    "delete": ("delete", "remove"),
}
COLLECTION_METHODS = ("findall", "getall", "list", "count", "exists")
FRAMEWORK_REPOSITORIES = frozenset(
    {"JpaRepository", "CrudRepository", "PagingAndSortingRepository", "Repository", "MongoRepository"}
)
INJECTION_MARKERS = ("Autowired", "Inject", "Resource")
VALUE_CONSTRUCTS = ("data", "record", "value", "Embeddable")


def is_business_method(method: MethodDecl) -> bool:
    """A concrete method that is not an accessor or generated member."""
    if method.is_abstract:
        return False
    lower = method.name.lower()
    if any(token in lower for token in _NON_BUSINESS):
        return False
    return not _ACCESSOR.match(method.name)


def has_business_logic(decl: DeclarationRef) -> bool:
    return any(is_business_method(m) for m in decl.methods)


def method_names(decl: DeclarationRef) -> list[str]:
    return [m.name for m in decl.methods]


def _any_method_contains(decl: DeclarationRef, tokens: tuple[str, ...]) -> bool:
    return any(token in m.name.lower() for m in decl.methods for token in tokens)


def is_id_field_name(name: str) -> bool:
    lower = name.lower()
    return lower in ("id", "uuid") or name.endswith("Id") or lower.endswith("_id")


def id_fields(decl: DeclarationRef) -> list[str]:
    return [
        f.name
        for f in decl.fields
        if is_id_field_name(f.name) or "Id" in f.markers or "EmbeddedId" in f.markers
    ]


def has_id(decl: DeclarationRef) -> bool:
    return bool(id_fields(decl)) or decl.has_marker("Id", "EmbeddedId")


def has_mutable_field(decl: DeclarationRef) -> bool:
    return any(f.mutable for f in decl.fields)


def all_fields_immutable(decl: DeclarationRef) -> bool:
    return bool(decl.fields) and not has_mutable_field(decl)


def has_equals_and_hash(decl: DeclarationRef) -> bool:
    names = set(method_names(decl))
    return "equals" in names and "hashCode" in names


def is_value_construct(decl: DeclarationRef) -> bool:
    return decl.has_marker(*VALUE_CONSTRUCTS)


def has_lifecycle_method(decl: DeclarationRef) -> bool:
    return _any_method_contains(decl, LIFECYCLE_VERBS)


def has_mutator_method(decl: DeclarationRef) -> bool:
    return any(m.name.startswith("set") and _ACCESSOR.match(m.name) for m in decl.methods)


def is_injected_field(decl_field: FieldDecl) -> bool:
    if any(marker in decl_field.markers for marker in INJECTION_MARKERS):
        return True
    return clean_type_name(decl_field.type_text).endswith(("Repository", "Service", "Gateway"))


def is_stateless(decl: DeclarationRef) -> bool:
    if not decl.fields:
        return True
    return all_fields_immutable(decl) or all(is_injected_field(f) for f in decl.fields)


def service_verbs(decl: DeclarationRef) -> list[str]:
    return [verb for verb in SERVICE_VERBS if _any_method_contains(decl, (verb,))]


def crud_methods(decl: DeclarationRef) -> list[str]:
    tokens = tuple(t for verbs in CRUD_CATEGORIES.values() for t in verbs)
    return [m.name for m in decl.methods if any(t in m.name.lower() for t in tokens)]


def method_contains(*tokens: str) -> Predicate:
    return lambda decl: _any_method_contains(decl, tokens)


def has_framework_repository_supertype(decl: DeclarationRef) -> bool:
    return any(
        clean_type_name(s).rpartition(".")[2] in FRAMEWORK_REPOSITORIES for s in decl.supertypes
    )


def has_timestamp_field(decl: DeclarationRef) -> bool:
    for f in decl.fields:
        lower = f.name.lower()
        if lower == "when" or lower.endswith("date"):
            return True
        if any(t in lower for t in ("timestamp", "occurredat", "occurredon", "createdat", "time")):
            return True
    return False


def has_event_naming(decl: DeclarationRef) -> bool:
    name = decl.simple_name
    return "Event" in name or name.endswith(("Occurred", "Happened"))


def source_path(decl: DeclarationRef) -> str:
    """Slash-separated path used for directory checks, wrapped in slashes.

    Falls back to the package when the origin file is unknown.
    """
    if decl.origin_file:
        path = decl.origin_file.replace("\\", "/")
    else:
        path = decl.package_name.replace(".", "/")
    return f"/{path.strip('/')}/"


def in_path(*directories: str) -> Predicate:
    return lambda decl: any(f"/{d}/" in source_path(decl) for d in directories)


def name_ends(*suffixes: str) -> Predicate:
    return lambda decl: decl.simple_name.endswith(suffixes)


def marked(*markers: str) -> Predicate:
    return lambda decl: decl.has_marker(*markers)


# ── Exclusions ─────────────────────────────────────────────────────


def is_test_class(decl: DeclarationRef) -> bool:
    name = decl.simple_name
    return "Test" in name or "Mock" in name or name.endswith("Spec")


def is_utility_class(decl: DeclarationRef) -> bool:
    return decl.simple_name.endswith(
        ("Util", "Utils", "Helper", "Constants", "Config", "Configuration")
    )


def is_dto_class(decl: DeclarationRef) -> bool:
    return decl.simple_name.endswith(("Dto", "DTO", "Request", "Response", "Payload", "Data"))


def is_controller_class(decl: DeclarationRef) -> bool:
    if decl.has_marker("Controller", "RestController", "RequestMapping"):
        return True
    name = decl.simple_name
    return "Controller" in name or name.endswith(("Endpoint", "Resource"))


def is_service_class(decl: DeclarationRef) -> bool:
    return decl.has_marker("Service") or decl.simple_name.endswith(("Service", "Manager"))


def is_repository_class(decl: DeclarationRef) -> bool:
    return decl.has_marker("Repository") or decl.simple_name.endswith(
        ("Repository", "DAO", "DataAccess")
    )


def is_orm_entity(decl: DeclarationRef) -> bool:
    return decl.has_marker("Entity")


def is_event_class(decl: DeclarationRef) -> bool:
    return decl.simple_name.endswith("Event")


# ── Adjustments ────────────────────────────────────────────────────


def _entity_gate(decl: DeclarationRef, score: float) -> float:
    if has_id(decl) or has_lifecycle_method(decl) or has_business_logic(decl):
        return score
    return 0.0


def _service_adjust(decl: DeclarationRef, score: float) -> float:
    if not decl.methods or not is_stateless(decl):
        return score * 0.5
    return score


def _repository_adjust(decl: DeclarationRef, score: float) -> float:
    if not crud_methods(decl):
        return score * 0.3
    return score


# ── Rule tables ────────────────────────────────────────────────────

ENTITY_RULES = RoleRuleSet(
    role=DddRole.ENTITY,
    rules=(
        Rule("id_field", has_id, 0.3),
        Rule("mutable_field", has_mutable_field, 0.2),
        Rule("equals_hash_code", has_equals_and_hash, 0.3),
        Rule("entity_name", name_ends("Entity", "Aggregate"), 0.2),
        Rule("entity_marker", marked("Entity"), 0.5),
        Rule("table_marker", marked("Table"), 0.3),
        Rule("mapped_superclass_marker", marked("MappedSuperclass"), 0.3),
        Rule("domain_path", in_path("domain"), 0.2),
        Rule("model_path", in_path("model", "entity"), 0.1),
        Rule("lifecycle_method", has_lifecycle_method, 0.2),
        Rule("business_method", has_business_logic, 0.3),
    ),
    exclusions=(
        is_test_class,
        is_utility_class,
        is_dto_class,
        is_controller_class,
        is_service_class,
        is_repository_class,
        is_event_class,
    ),
    adjust=_entity_gate,
)

VALUE_OBJECT_RULES = RoleRuleSet(
    role=DddRole.VALUE_OBJECT,
    rules=(
        Rule("immutable_fields", all_fields_immutable, 0.4),
        Rule("equals_hash_code", has_equals_and_hash, 0.2),
        Rule("value_construct", is_value_construct, 0.3),
        Rule("value_name", name_ends("Value", "VO", "ValueObject"), 0.2),
        Rule("no_mutators", lambda d: bool(d.fields) and not has_mutator_method(d), 0.1),
        Rule("no_business_logic", lambda d: bool(d.fields) and not has_business_logic(d), 0.2),
    ),
    exclusions=(
        is_test_class,
        is_controller_class,
        is_service_class,
        is_repository_class,
        is_orm_entity,
        is_event_class,
    ),
)

SERVICE_RULES = RoleRuleSet(
    role=DddRole.SERVICE,
    rules=(
        Rule("stateless", is_stateless, 0.3),
        *(Rule(f"verb_{verb}", method_contains(verb), 0.1) for verb in SERVICE_VERBS),
        Rule("service_name", name_ends("Service"), 0.4),
        Rule("manager_name", name_ends("Manager", "Handler"), 0.2),
        Rule("service_marker", marked("Service"), 0.6),
        Rule("component_marker", marked("Component"), 0.4),
        Rule("transactional_marker", marked("Transactional"), 0.3),
        Rule("abstract", lambda d: d.is_abstract, 0.2),
        Rule("constructor_injection", lambda d: bool(d.constructor_params), 0.2),
        Rule("service_path", in_path("service", "services", "domain"), 0.2),
    ),
    exclusions=(
        is_test_class,
        is_dto_class,
        is_controller_class,
        is_repository_class,
        is_orm_entity,
        is_event_class,
    ),
    adjust=_service_adjust,
)

REPOSITORY_RULES = RoleRuleSet(
    role=DddRole.REPOSITORY,
    rules=(
        Rule("abstract", lambda d: d.is_abstract, 0.3),
        Rule("repository_name", name_ends("Repository"), 0.4),
        Rule("dao_name", name_ends("DAO", "Dao", "DataAccess"), 0.3),
        Rule("repository_marker", marked("Repository"), 0.6),
        Rule("framework_supertype", has_framework_repository_supertype, 0.3),
        *(
            Rule(f"crud_{category}", method_contains(*verbs), 0.1)
            for category, verbs in CRUD_CATEGORIES.items()
        ),
        Rule("collection_methods", method_contains(*COLLECTION_METHODS), 0.2),
        Rule(
            "repository_path",
            in_path("repository", "repositories", "dao", "data", "persistence"),
            0.2,
        ),
    ),
    exclusions=(
        is_test_class,
        is_dto_class,
        is_controller_class,
        is_service_class,
    ),
    adjust=_repository_adjust,
)

DOMAIN_EVENT_RULES = RoleRuleSet(
    role=DddRole.DOMAIN_EVENT,
    rules=(
        Rule("event_name", has_event_naming, 0.4),
        Rule("immutable_fields", all_fields_immutable, 0.2),
        Rule("timestamp_field", has_timestamp_field, 0.3),
        Rule("value_construct", is_value_construct, 0.1),
    ),
    exclusions=(
        is_test_class,
        is_controller_class,
        is_service_class,
        is_repository_class,
        is_orm_entity,
    ),
)

ROLE_RULES: dict[DddRole, RoleRuleSet] = {
    ruleset.role: ruleset
    for ruleset in (
        ENTITY_RULES,
        VALUE_OBJECT_RULES,
        SERVICE_RULES,
        REPOSITORY_RULES,
        DOMAIN_EVENT_RULES,
    )
}
