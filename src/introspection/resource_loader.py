"""
Resource Loader - Reads already-parsed API documentation into Resource records.

Accepts the JSON shape produced by api-doc-parser:
- A list of resource objects
- An object with a "resources" list (e.g. a serialized Api object)

Records without a usable name are skipped with a warning so that partial
documentation still yields schemas for everything else.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from src.schema.models import Resource

logger = logging.getLogger(__name__)


class ResourceLoader:
    """
    Builds Resource records from api-doc-parser output

    Usage:
    ```python
    loader = ResourceLoader()
    resources = loader.load_file(Path("api-doc.json"))
    print(f"Loaded {len(resources)} resources")
    ```
    """

    def __init__(self):
        self.skipped: List[Any] = []

    def load_file(self, path: Union[str, Path]) -> List[Resource]:
        """
        Load resources from a JSON file

        Raises:
            ValueError: file is not valid JSON or has an unknown shape
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

        logger.debug(f"Loaded documentation from {path}")
        return self.load_dict(data)

    def load_dict(self, data: Union[Dict[str, Any], List[Any]]) -> List[Resource]:
        """
        Load resources from parsed documentation data

        Raises:
            ValueError: data is neither a list nor an object with "resources"
        """
        if isinstance(data, dict):
            if not isinstance(data.get("resources"), list):
                raise ValueError("Documentation object has no 'resources' list")
            records = data["resources"]
        elif isinstance(data, list):
            records = data
        else:
            raise ValueError(f"Unsupported documentation type: {type(data).__name__}")

        self.skipped = []
        resources = []
        for index, record in enumerate(records):
            if not isinstance(record, dict) or not (record.get("name") or record.get("title")):
                logger.warning(f"Skipping resource #{index}: missing name")
                self.skipped.append(record)
                continue

            resource = Resource.from_dict(record)
            if not resource.name:
                resource.name = resource.type_name
            resources.append(resource)

        logger.info(f"Loaded {len(resources)} resources ({len(self.skipped)} skipped)")
        return resources
