"""
Schema Builder Module

Builds schema descriptions from API resource metadata:
- Field mapping (types, enums, references, embedded resources)
- Resource object schemas tolerant of unknown keys
- Hydra collection envelopes
- Two-pass resolution of circular resource graphs
"""

from .field_builder import base_type_to_schema, field_to_schema, describe_field
from .resource_builder import resource_to_schema
from .collection_builder import collection_schema
from .graph_resolver import SchemaSet, schemas_from_resources

__all__ = [
    "base_type_to_schema",
    "field_to_schema",
    "describe_field",
    "resource_to_schema",
    "collection_schema",
    "SchemaSet",
    "schemas_from_resources",
]
