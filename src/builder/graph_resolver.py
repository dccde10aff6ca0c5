"""
Graph Resolver - Builds schemas for a whole resource set

Resources may embed each other (Book -> Author -> Book[]), so schemas are
built in passes over the supplied order:
- Pass 1: register a placeholder for every resource title
- Pass 2: build each resource schema against the shared context and
  replace its placeholder with the finished schema
- Pass 3: wrap every finished schema in a collection envelope that strips
  the namespace prefix from keys before checking

Embedded fields become lazy references, so nothing is dereferenced until a
value is checked, by which time pass 2 has completed for every resource.
"""

from dataclasses import dataclass, field as dataclass_field
from functools import partial
from typing import Dict, Iterable
import logging

from src.schema.context import ResolutionContext
from src.schema.description import ObjectSchema, PreprocessedSchema
from src.schema.models import Resource
from src.transformer.normalizer import HYDRA_PREFIX, strip_prefix

from .collection_builder import collection_schema
from .resource_builder import resource_to_schema

logger = logging.getLogger(__name__)


@dataclass
class SchemaSet:
    """Result of one resolver run, keyed by resource name"""
    schemas: Dict[str, ObjectSchema] = dataclass_field(default_factory=dict)
    collections: Dict[str, PreprocessedSchema] = dataclass_field(default_factory=dict)
    context: ResolutionContext = dataclass_field(default_factory=ResolutionContext)

    def __contains__(self, name: object) -> bool:
        return name in self.schemas

    def names(self):
        return list(self.schemas)


def schemas_from_resources(
    resources: Iterable[Resource],
    prefix: str = HYDRA_PREFIX,
) -> SchemaSet:
    """
    Build object and collection schemas for every resource

    Args:
        resources: Resources in a stable order (last duplicate wins)
        prefix: Namespace prefix stripped from collection keys

    Returns:
        SchemaSet with schemas and collections keyed by resource name
    """
    resources = list(resources)
    result = SchemaSet()
    context = result.context

    # Pass 1: placeholders, keyed by title for lazy lookups
    for resource in resources:
        title = resource.type_name
        if context.is_registered(title):
            logger.warning(f"Duplicate resource title {title!r}, the last definition wins")
        context.register(title)
    logger.debug(f"Registered {len(context)} resource titles")

    # Pass 2: real schemas
    for resource in resources:
        schema = resource_to_schema(resource, context)
        context.define(resource.type_name, schema)
        if resource.key in result.schemas:
            logger.warning(f"Duplicate resource name {resource.key!r}, the last definition wins")
        result.schemas[resource.key] = schema
        logger.debug(f"Built schema for {resource.key} ({len(schema.properties) - 2} fields)")

    # Pass 3: collections
    normalize = partial(strip_prefix, prefix=prefix)
    for resource in resources:
        item_schema = result.schemas[resource.key]
        result.collections[resource.key] = PreprocessedSchema(
            inner=collection_schema(item_schema),
            preprocess=normalize,
        )

    logger.info(f"Built schemas for {len(result.schemas)} resources")
    return result
