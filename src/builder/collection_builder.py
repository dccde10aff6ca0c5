"""Collection Builder - Wraps an item schema in a Hydra collection envelope."""

from src.schema.description import (
    ArraySchema,
    BooleanSchema,
    IntegerSchema,
    NullableSchema,
    ObjectSchema,
    OptionalSchema,
    SchemaNode,
    StringSchema,
)


def _optional_string() -> OptionalSchema:
    return OptionalSchema(StringSchema())


def collection_schema(item_schema: SchemaNode) -> ObjectSchema:
    """
    Create a Hydra collection schema around item_schema

    Keys are unprefixed (API Platform compacts its responses); prefixed
    responses are normalized before checking, see graph_resolver.
    """
    view = ObjectSchema({
        "@id": StringSchema(),
        "@type": StringSchema(),
        "first": _optional_string(),
        "last": _optional_string(),
        "previous": _optional_string(),
        "next": _optional_string(),
    })

    mapping = ObjectSchema({
        "@type": StringSchema(),
        "variable": StringSchema(),
        "property": OptionalSchema(NullableSchema(StringSchema())),
        "required": OptionalSchema(BooleanSchema()),
    })

    search = ObjectSchema({
        "@type": StringSchema(),
        "template": _optional_string(),
        "variableRepresentation": _optional_string(),
        "mapping": OptionalSchema(ArraySchema(mapping)),
    })

    return ObjectSchema({
        "@id": StringSchema(),
        "@type": StringSchema(),
        "totalItems": IntegerSchema(),
        "member": ArraySchema(item_schema),
        "view": OptionalSchema(view),
        "search": OptionalSchema(search),
    })
