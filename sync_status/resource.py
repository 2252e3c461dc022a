"""Identifiers for kubernetes objects participating in a sync pass."""

from dataclasses import dataclass
from typing import Any

from .exceptions import InputException

__all__ = [
    "ObjectID",
    "GroupVersionKind",
    "split_api_version",
]


def split_api_version(api_version: str) -> tuple[str, str]:
    """Split an apiVersion into its group and version.

    The core group has no prefix e.g. `v1` is group "" and version "v1".
    """
    group, _, version = api_version.rpartition("/")
    return group, version


@dataclass(frozen=True, order=True)
class GroupVersionKind:
    """A kubernetes group, version and kind."""

    group: str
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


@dataclass(frozen=True, order=True)
class ObjectID:
    """Identifier for a kubernetes object."""

    group: str
    kind: str
    namespace: str | None
    name: str

    @property
    def group_kind(self) -> str:
        """Return the kind qualified by its group, e.g. `Deployment.apps`."""
        if self.group:
            return f"{self.kind}.{self.group}"
        return self.kind

    @property
    def namespaced_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    def __str__(self) -> str:
        """Return the group kind and namespaced name concatenated as an id."""
        return f"{self.group_kind}/{self.namespaced_name}"

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "ObjectID":
        """Parse an ObjectID from a raw kubernetes object."""
        if not (api_version := doc.get("apiVersion")):
            raise InputException(f"Invalid object missing apiVersion: {doc}")
        if not (kind := doc.get("kind")):
            raise InputException(f"Invalid object missing kind: {doc}")
        if not (metadata := doc.get("metadata")):
            raise InputException(f"Invalid object missing metadata: {doc}")
        if not isinstance(metadata, dict):
            raise InputException(f"Invalid object metadata is not a mapping: {doc}")
        if not (name := metadata.get("name")):
            raise InputException(f"Invalid object missing metadata.name: {doc}")
        group, _ = split_api_version(api_version)
        return cls(
            group=group,
            kind=kind,
            namespace=metadata.get("namespace"),
            name=name,
        )
