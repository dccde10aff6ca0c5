"""Models for API resource metadata (api-doc-parser style records)."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class ResourceLink:
    """Points a field at another resource (reference or embedded)."""

    name: str
    title: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Title when known, machine name otherwise."""
        return self.title or self.name

    @classmethod
    def from_value(cls, value: Any) -> Optional["ResourceLink"]:
        """Build a link from a string IRI/name or a resource-like mapping."""
        if value is None or value is False or value == "":
            return None
        if isinstance(value, ResourceLink):
            return value
        if isinstance(value, dict):
            name = value.get("name") or value.get("title") or value.get("id") or ""
            return cls(name=str(name), title=value.get("title"))
        return cls(name=str(value))


@dataclass
class Field:
    """Represents one property of a resource."""

    name: str
    type: Optional[str] = None
    range: Optional[str] = None
    required: Optional[bool] = True
    nullable: bool = False
    enum: Optional[List[Any]] = None
    reference: Optional[ResourceLink] = None
    embedded: Optional[ResourceLink] = None
    # 1 means single; None (unbounded) or anything else means many
    max_cardinality: Any = 1
    array_type: Optional[str] = None
    id: Optional[str] = None
    description: str = ""
    deprecated: bool = False

    @property
    def is_many(self) -> bool:
        """True when the field holds a list of values."""
        value = self.max_cardinality
        return not (type(value) in (int, float) and value == 1)

    @property
    def base_type(self) -> str:
        """Declared base type tag, falling back to string."""
        return self.type or self.range or "string"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Field":
        """Create a Field from an api-doc-parser field record."""
        enum = data.get("enum")
        if isinstance(enum, dict):
            enum = list(enum.values())
        elif enum is not None:
            enum = list(enum)

        return cls(
            name=str(data.get("name", "")),
            type=data.get("type"),
            range=data.get("range"),
            required=data.get("required", True),
            nullable=bool(data.get("nullable", False)),
            enum=enum,
            reference=ResourceLink.from_value(data.get("reference")),
            embedded=ResourceLink.from_value(data.get("embedded")),
            max_cardinality=data.get("maxCardinality", 1),
            array_type=data.get("arrayType"),
            id=data.get("id"),
            description=data.get("description") or "",
            deprecated=bool(data.get("deprecated", False)),
        )


@dataclass
class Resource:
    """Represents a named API resource and its fields."""

    name: str
    title: Optional[str] = None
    fields: Optional[List[Field]] = None
    readable_fields: Optional[List[Field]] = None
    id: Optional[str] = None
    url: Optional[str] = None
    deprecated: bool = False

    @property
    def type_name(self) -> str:
        """Value expected in the @type key (title, else name)."""
        return self.title or self.name

    @property
    def key(self) -> str:
        """Key used to index generated schemas (name, else title)."""
        return self.name or self.type_name

    @property
    def schema_fields(self) -> List[Field]:
        """Fields exposed on read: readable fields win over all fields."""
        if self.readable_fields is not None:
            return self.readable_fields
        if self.fields is not None:
            return self.fields
        return []

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Resource":
        """Create a Resource from an api-doc-parser resource record."""

        def _fields(key: str) -> Optional[List[Field]]:
            raw = data.get(key)
            if raw is None:
                return None
            return [Field.from_dict(item) for item in raw if isinstance(item, dict)]

        return cls(
            name=str(data.get("name") or ""),
            title=data.get("title"),
            fields=_fields("fields"),
            readable_fields=_fields("readableFields"),
            id=data.get("id"),
            url=data.get("url"),
            deprecated=bool(data.get("deprecated", False)),
        )
