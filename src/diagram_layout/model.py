"""Input data model: the validated diagram handed to the layout engine.

Entities and relationships are built upstream by the parsers and the
validator. The layout engine only reads them: member collections matter
solely for size estimation (row count and widest rendered text).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EntityKind(str, Enum):
    """Kind of a diagram entity (box)."""

    Class = "class"
    Interface = "interface"
    Module = "module"
    TypeAlias = "type"
    AbstractClass = "abstract-class"
    Enumeration = "enum"


class RelationshipKind(str, Enum):
    """Kind of a directed relationship between two entities."""

    Inheritance = "inheritance"
    Implementation = "implementation"
    Composition = "composition"
    Aggregation = "aggregation"
    Dependency = "dependency"
    Association = "association"


# Kinds that take part in hierarchical leveling. Target is the parent.
HIERARCHY_KINDS: frozenset[RelationshipKind] = frozenset(
    {RelationshipKind.Inheritance, RelationshipKind.Implementation}
)


class Visibility(str, Enum):
    Public = "public"
    Private = "private"
    Protected = "protected"

    @property
    def symbol(self) -> str:
        return _VISIBILITY_SYMBOLS[self]


_VISIBILITY_SYMBOLS: dict[Visibility, str] = {
    Visibility.Public: "+",
    Visibility.Private: "-",
    Visibility.Protected: "#",
}


# ─── Members ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TypeRef:
    """A (possibly generic) type reference. Only ``name`` is rendered."""

    name: str
    generics: tuple[TypeRef, ...] = ()


@dataclass(frozen=True)
class Attribute:
    name: str
    type: TypeRef
    visibility: Visibility | None = None


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class Method:
    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeRef = TypeRef("void")
    visibility: Visibility | None = None
    is_static: bool = False
    is_abstract: bool = False


@dataclass(frozen=True)
class Function:
    """A free function exported (or not) by a module entity."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeRef = TypeRef("void")
    is_exported: bool = False


@dataclass(frozen=True)
class TypeDefinition:
    name: str
    definition: str
    is_exported: bool = False


# ─── Entities / Relationships ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Entity:
    """A box in the diagram.

    Absent member collections are empty tuples; absent ``generics`` means the
    name is rendered without a ``<...>`` suffix.
    """

    id: str
    name: str
    kind: EntityKind = EntityKind.Class
    description: str | None = None
    generics: tuple[str, ...] = ()
    attributes: tuple[Attribute, ...] = ()
    methods: tuple[Method, ...] = ()
    functions: tuple[Function, ...] = ()
    types: tuple[TypeDefinition, ...] = ()
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Relationship:
    """A directed relationship ``source_id -> target_id``.

    ``label`` of ``None`` (or ``""``) means the relationship is excluded from
    label placement. Cardinalities, when present, get an anchor at their end.
    """

    id: str
    kind: RelationshipKind
    source_id: str
    target_id: str
    label: str | None = None
    source_cardinality: str | None = None
    target_cardinality: str | None = None

    @property
    def is_hierarchical(self) -> bool:
        return self.kind in HIERARCHY_KINDS


@dataclass(frozen=True)
class Diagram:
    """A validated diagram: the sole input of the layout engine."""

    title: str = ""
    entities: tuple[Entity, ...] = field(default_factory=tuple)
    relationships: tuple[Relationship, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Diagram:
        """Build a Diagram from the JSON-shaped dict the upstream parsers emit.

        Keys follow the interchange format (``sourceId``, ``returnType``, ...).
        Raises ``KeyError`` / ``ValueError`` on structurally invalid input.
        """
        return cls(
            title=data.get("title", ""),
            entities=tuple(_entity_from_dict(e) for e in data.get("entities", [])),
            relationships=tuple(_relationship_from_dict(r) for r in data.get("relationships", [])),
        )


# ─── Dict adapters ────────────────────────────────────────────────────────────


def _type_ref(data: dict[str, Any]) -> TypeRef:
    return TypeRef(
        name=data["name"],
        generics=tuple(_type_ref(g) for g in data.get("generics", [])),
    )


def _visibility(value: str | None) -> Visibility | None:
    return Visibility(value) if value else None


def _parameters(items: list[dict[str, Any]]) -> tuple[Parameter, ...]:
    return tuple(Parameter(name=p["name"], type=_type_ref(p["type"])) for p in items)


def _entity_from_dict(data: dict[str, Any]) -> Entity:
    return Entity(
        id=data["id"],
        name=data["name"],
        kind=EntityKind(data.get("type", "class")),
        description=data.get("description"),
        generics=tuple(data.get("generics", [])),
        attributes=tuple(
            Attribute(
                name=a["name"],
                type=_type_ref(a["type"]),
                visibility=_visibility(a.get("visibility")),
            )
            for a in data.get("attributes", [])
        ),
        methods=tuple(
            Method(
                name=m["name"],
                parameters=_parameters(m.get("parameters", [])),
                return_type=_type_ref(m["returnType"]),
                visibility=_visibility(m.get("visibility")),
                is_static=bool(m.get("isStatic", False)),
                is_abstract=bool(m.get("isAbstract", False)),
            )
            for m in data.get("methods", [])
        ),
        functions=tuple(
            Function(
                name=f["name"],
                parameters=_parameters(f.get("parameters", [])),
                return_type=_type_ref(f["returnType"]),
                is_exported=bool(f.get("isExported", False)),
            )
            for f in data.get("functions", [])
        ),
        types=tuple(
            TypeDefinition(
                name=t["name"],
                definition=t["definition"],
                is_exported=bool(t.get("isExported", False)),
            )
            for t in data.get("types", [])
        ),
        values=tuple(data.get("values", [])),
    )


def _relationship_from_dict(data: dict[str, Any]) -> Relationship:
    return Relationship(
        id=data["id"],
        kind=RelationshipKind(data["type"]),
        source_id=data["sourceId"],
        target_id=data["targetId"],
        label=data.get("label") or None,
        source_cardinality=data.get("sourceCardinality") or None,
        target_cardinality=data.get("targetCardinality") or None,
    )
