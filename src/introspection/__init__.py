"""
Introspection Module

Turns already-parsed API documentation (api-doc-parser output) into
Resource records for the schema builders. Fetching documentation over the
network is left to the caller.
"""

from .resource_loader import ResourceLoader

__all__ = [
    "ResourceLoader",
]
