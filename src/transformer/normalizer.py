"""Key normalizers applied to raw response data before checking."""
from typing import Any

HYDRA_PREFIX = "hydra:"


def strip_prefix(data: Any, prefix: str = HYDRA_PREFIX) -> Any:
    """
    Recursively strip a namespace prefix from mapping keys

    Lists and mappings are copied; scalars are returned unchanged.
    Only keys are touched, never values.
    """
    if isinstance(data, list):
        return [strip_prefix(item, prefix) for item in data]

    if isinstance(data, dict):
        result = {}
        for key, value in data.items():
            if prefix and isinstance(key, str) and key.startswith(prefix):
                key = key[len(prefix):]
            result[key] = strip_prefix(value, prefix)
        return result

    return data


def strip_hydra_prefix(data: Any) -> Any:
    """Strip the "hydra:" prefix from every key."""
    return strip_prefix(data, HYDRA_PREFIX)
