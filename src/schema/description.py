"""
Schema Description nodes - the output of the schema builders.

Each node describes "accept value iff ..." and renders itself as a
JSON Schema (draft 2020-12) fragment for the validation engine.

Supports:
- Primitive strings (with format refinements), integers (with bounds),
  numbers and booleans
- Literal and enum values
- Objects that always tolerate unknown keys
- Arrays, nullable and optional wrappers
- Lazy references to resources resolved through a ResolutionContext
- Preprocessing wrappers (e.g. namespace prefix stripping)
"""

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Callable, Dict, Iterator, List, Optional
from urllib.parse import quote, unquote

from .context import ResolutionContext

RESOURCE_URN_PREFIX = "urn:hydra-schema:resource:"
COLLECTION_URN_PREFIX = "urn:hydra-schema:collection:"


class _Absent:
    """Marker for "no value at all" (distinct from None/null)"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def resource_urn(title: str) -> str:
    """URN a lazy reference to the given resource title points at"""
    return RESOURCE_URN_PREFIX + quote(title, safe="")


def title_from_urn(urn: str) -> Optional[str]:
    """Inverse of resource_urn; None for foreign URIs"""
    if not urn.startswith(RESOURCE_URN_PREFIX):
        return None
    return unquote(urn[len(RESOURCE_URN_PREFIX):])


def collection_urn(key: str) -> str:
    return COLLECTION_URN_PREFIX + quote(key, safe="")


class SchemaNode:
    """Base class for all schema description nodes"""

    def to_json_schema(self) -> Dict[str, Any]:
        raise NotImplementedError

    def children(self) -> List["SchemaNode"]:
        return []


@dataclass
class StringSchema(SchemaNode):
    format: Optional[str] = None  # "email", "uri", "uuid", "date", "date-time", "time"

    def to_json_schema(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "string"}
        if self.format:
            result["format"] = self.format
        return result


@dataclass
class IntegerSchema(SchemaNode):
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    def to_json_schema(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "integer"}
        if self.minimum is not None:
            result["minimum"] = self.minimum
        if self.maximum is not None:
            result["maximum"] = self.maximum
        return result


@dataclass
class NumberSchema(SchemaNode):
    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "number"}


@dataclass
class BooleanSchema(SchemaNode):
    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "boolean"}


@dataclass
class LiteralSchema(SchemaNode):
    value: Any

    def to_json_schema(self) -> Dict[str, Any]:
        return {"const": self.value}


@dataclass
class EnumSchema(SchemaNode):
    values: List[Any] = dataclass_field(default_factory=list)

    def to_json_schema(self) -> Dict[str, Any]:
        return {"enum": list(self.values)}


@dataclass
class ArraySchema(SchemaNode):
    items: SchemaNode

    def to_json_schema(self) -> Dict[str, Any]:
        return {"type": "array", "items": self.items.to_json_schema()}

    def children(self) -> List[SchemaNode]:
        return [self.items]


@dataclass
class NullableSchema(SchemaNode):
    """Accepts the wrapped schema or an explicit null"""

    inner: SchemaNode

    def to_json_schema(self) -> Dict[str, Any]:
        return {"anyOf": [self.inner.to_json_schema(), {"type": "null"}]}

    def children(self) -> List[SchemaNode]:
        return [self.inner]


@dataclass
class OptionalSchema(SchemaNode):
    """
    Accepts the wrapped schema or absence of the value

    Absence is expressed by the enclosing object (key left out of
    "required"), so the rendered fragment is the wrapped one.
    """

    inner: SchemaNode

    def to_json_schema(self) -> Dict[str, Any]:
        return self.inner.to_json_schema()

    def children(self) -> List[SchemaNode]:
        return [self.inner]


@dataclass
class ObjectSchema(SchemaNode):
    """
    Fixed set of named sub-schemas; unknown keys are always accepted

    Properties wrapped in OptionalSchema may be left out, every other
    property is required. Insertion order is kept for output.
    """

    properties: Dict[str, SchemaNode] = dataclass_field(default_factory=dict)

    @property
    def required(self) -> List[str]:
        return [
            name for name, node in self.properties.items()
            if not isinstance(node, OptionalSchema)
        ]

    def to_json_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                name: node.to_json_schema() for name, node in self.properties.items()
            },
            "required": self.required,
            "additionalProperties": True,
        }

    def children(self) -> List[SchemaNode]:
        return list(self.properties.values())


@dataclass
class LazyReference(SchemaNode):
    """
    Deferred reference to a resource schema held by a ResolutionContext

    Rendering never dereferences; the validation engine looks the target
    up through the context only when a value reaches this node.
    """

    target: str
    context: ResolutionContext = dataclass_field(repr=False, compare=False)

    def resolve(self) -> ObjectSchema:
        return self.context.resolve(self.target)

    def to_json_schema(self) -> Dict[str, Any]:
        return {"$ref": resource_urn(self.target)}


@dataclass
class PreprocessedSchema(SchemaNode):
    """Runs a preprocessing step on the raw value before the wrapped check"""

    inner: SchemaNode
    preprocess: Callable[[Any], Any] = dataclass_field(repr=False, compare=False)

    def to_json_schema(self) -> Dict[str, Any]:
        return self.inner.to_json_schema()

    def children(self) -> List[SchemaNode]:
        return [self.inner]


def iter_nodes(node: SchemaNode) -> Iterator[SchemaNode]:
    """Depth-first walk of a description; lazy references are not followed"""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def find_context(node: SchemaNode) -> Optional[ResolutionContext]:
    """Context of the first lazy reference reachable from node, if any"""
    for current in iter_nodes(node):
        if isinstance(current, LazyReference):
            return current.context
    return None
