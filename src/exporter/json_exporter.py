"""JSON Schema exporter."""
import json
from pathlib import Path
from datetime import datetime
from typing import Any, Dict

from src.builder.collection_builder import collection_schema
from src.builder.graph_resolver import SchemaSet
from src.schema.description import LazyReference, collection_urn, resource_urn

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"


class JsonSchemaExporter:
    """Export generated schemas as one self-contained JSON Schema document."""

    def build_bundle(self, schema_set: SchemaSet) -> Dict[str, Any]:
        """
        Render every resource and collection schema under $defs

        Each definition carries its URN as $id, so lazy references
        ("$ref": "urn:hydra-schema:resource:...") resolve inside the bundle.
        Collection members point at their resource definition by $ref.
        """
        defs: Dict[str, Any] = {}

        for title in schema_set.context.titles():
            if not schema_set.context.is_defined(title):
                continue
            schema = schema_set.context.resolve(title)
            defs[title] = {"$id": resource_urn(title), **schema.to_json_schema()}

        for key in schema_set.collections:
            member = LazyReference(_type_name(schema_set, key), schema_set.context)
            defs[f"collection:{key}"] = {
                "$id": collection_urn(key),
                **collection_schema(member).to_json_schema(),
            }

        return {
            "$schema": JSON_SCHEMA_DIALECT,
            "$defs": defs,
        }

    def export(self, output_file: Path, schema_set: SchemaSet) -> None:
        """Export to JSON file."""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "metadata": {
                "created_at": datetime.now().isoformat(),
                "resources": len(schema_set.schemas),
                "collections": len(schema_set.collections),
            },
            **self.build_bundle(schema_set),
        }

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)


def _type_name(schema_set: SchemaSet, key: str) -> str:
    """@type literal of the resource schema stored under key."""
    return schema_set.schemas[key].properties["@type"].value
