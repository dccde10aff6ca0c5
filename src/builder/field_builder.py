"""
Field Builder - Maps a single resource field to a schema description

Resolution order (first match wins):
- enum       -> EnumSchema over the listed values
- reference  -> plain string (opaque IRI, never dereferenced)
- embedded   -> LazyReference to the embedded resource title
- otherwise  -> base type table (unknown/missing tags fall back to string)

Post-processing, always in this order:
- maxCardinality other than 1 -> ArraySchema
- nullable                    -> NullableSchema
- required is False           -> OptionalSchema
"""

from typing import Dict, Optional
import logging

from src.schema.context import ResolutionContext
from src.schema.description import (
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    IntegerSchema,
    LazyReference,
    NullableSchema,
    NumberSchema,
    OptionalSchema,
    SchemaNode,
    StringSchema,
)
from src.schema.models import Field

logger = logging.getLogger(__name__)


STRING_TYPES = frozenset([
    "string",
    "password",
    "byte",
    "binary",
    "hexBinary",
    "base64Binary",
    "duration",
])

NUMBER_TYPES = frozenset(["number", "decimal", "double", "float"])

# tag -> (minimum, maximum)
INTEGER_BOUNDS: Dict[str, tuple] = {
    "integer": (None, None),
    "positiveInteger": (1, None),
    "negativeInteger": (None, -1),
    "nonNegativeInteger": (0, None),
    "nonPositiveInteger": (None, 0),
}

# tag -> JSON Schema format
STRING_FORMATS: Dict[str, str] = {
    "email": "email",
    "url": "uri",
    "uuid": "uuid",
    "date": "date",
    "dateTime": "date-time",
    "time": "time",
}


def base_type_to_schema(field_type: Optional[str]) -> SchemaNode:
    """
    Map a base type tag to a schema description

    Tags are case-sensitive. Anything unrecognized (or missing) becomes a
    plain string so that undocumented types never break the build.
    """
    if not isinstance(field_type, str):
        return StringSchema()

    if field_type in STRING_TYPES:
        return StringSchema()

    if field_type in INTEGER_BOUNDS:
        minimum, maximum = INTEGER_BOUNDS[field_type]
        return IntegerSchema(minimum=minimum, maximum=maximum)

    if field_type in NUMBER_TYPES:
        return NumberSchema()

    if field_type == "boolean":
        return BooleanSchema()

    if field_type in STRING_FORMATS:
        return StringSchema(format=STRING_FORMATS[field_type])

    logger.debug(f"Unknown field type {field_type!r}, using string")
    return StringSchema()


def field_to_schema(field: Field, context: Optional[ResolutionContext] = None) -> SchemaNode:
    """
    Convert a Field to a schema description

    Args:
        field: Field metadata
        context: Resolution context embedded references are looked up in

    Returns:
        Schema description for the field value (never raises)
    """
    if context is None:
        context = ResolutionContext()

    schema: SchemaNode
    if field.enum is not None:
        schema = EnumSchema(values=list(field.enum))
    elif field.reference is not None:
        schema = StringSchema()
    elif field.embedded is not None:
        schema = LazyReference(target=field.embedded.display_name, context=context)
    else:
        schema = base_type_to_schema(field.base_type)

    if field.is_many:
        element = base_type_to_schema(field.array_type) if field.array_type else schema
        schema = ArraySchema(items=element)

    if field.nullable:
        schema = NullableSchema(inner=schema)

    if field.required is False:
        schema = OptionalSchema(inner=schema)

    return schema


def describe_field(field: Field) -> str:
    """Short human readable type label, e.g. "string[]?" or "Author" """
    if field.enum is not None:
        label = "enum(" + ", ".join(repr(v) for v in field.enum) + ")"
    elif field.reference is not None:
        label = f"@{field.reference.display_name}"
    elif field.embedded is not None:
        label = field.embedded.display_name
    else:
        label = field.base_type

    if field.is_many:
        label = f"{field.array_type or label}[]"
    if field.nullable:
        label += "|null"
    if field.required is False:
        label += "?"
    return label
