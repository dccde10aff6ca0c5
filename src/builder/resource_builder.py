"""Resource Builder - Maps a resource to a tolerant object schema."""

from typing import Optional
import logging

from src.schema.context import ResolutionContext
from src.schema.description import LiteralSchema, ObjectSchema, StringSchema
from src.schema.models import Resource

from .field_builder import field_to_schema

logger = logging.getLogger(__name__)


def resource_to_schema(
    resource: Resource,
    context: Optional[ResolutionContext] = None,
) -> ObjectSchema:
    """
    Convert a Resource to an object schema

    The schema always has "@id" (string) and "@type" (literal type name),
    followed by one property per readable field. A later field with the
    same name replaces an earlier one. Unknown keys are accepted.

    Args:
        resource: Resource metadata
        context: Resolution context shared with embedded references

    Returns:
        ObjectSchema for one resource value
    """
    if context is None:
        context = ResolutionContext()

    properties = {
        "@id": StringSchema(),
        "@type": LiteralSchema(resource.type_name),
    }

    for field in resource.schema_fields:
        if field.name in properties:
            logger.debug(f"{resource.type_name}: field {field.name!r} overrides an earlier definition")
        properties[field.name] = field_to_schema(field, context)

    return ObjectSchema(properties=properties)
