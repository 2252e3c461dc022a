"""
sync-status tracks the actuation and reconciliation status of every object
in a declarative sync pass and reports how many objects ended up in each
outcome.

- `status_map` holds the status of each object and filters by status.
- `report` summarizes a status map into log lines.
- `decode` turns generic resources into the objects of a sync pass.
- `crd` extracts the CustomResourceDefinitions among those objects.
"""

__all__ = [
    "config",
    "crd",
    "decode",
    "exceptions",
    "report",
    "resource",
    "status",
    "status_map",
]
