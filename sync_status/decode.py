"""Decoding of generic resources into kubernetes objects.

A ClusterConfig holds the declared objects of a sync pass as a list of
generic resources grouped by group and kind, then by version. Each object is
either already structured or serialized as YAML or JSON text. The decoder
flattens these into plain object dicts grouped by GroupVersionKind, which are
the objects a sync pass actuates.
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any

import aiofiles
import yaml
from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig
from mashumaro.exceptions import InvalidFieldValue, MissingField

from .exceptions import DecodeException, InputException
from .resource import GroupVersionKind, ObjectID

__all__ = [
    "GenericVersion",
    "GenericResources",
    "GenericResourceDecoder",
    "parse_cluster_config",
    "read_cluster_config",
]

_LOGGER = logging.getLogger(__name__)

CLUSTER_CONFIG_KIND = "ClusterConfig"


@dataclass
class GenericVersion(DataClassDictMixin):
    """Objects of a single version of a generic resource."""

    version: str
    """The version of the objects e.g. `v1`."""

    objects: list[Any] = field(default_factory=list)
    """Objects as structured dicts or serialized YAML/JSON strings."""


@dataclass
class GenericResources(DataClassDictMixin):
    """Objects of a single group and kind, grouped by version."""

    kind: str
    """The kind of the objects."""

    group: str = ""
    """The group of the objects, empty for the core group."""

    versions: list[GenericVersion] = field(default_factory=list)
    """The objects for each version."""

    class Config(BaseConfig):
        omit_none = True


class GenericResourceDecoder:
    """Decodes GenericResources into kubernetes object dicts."""

    def decode_resources(
        self, resources: list[GenericResources]
    ) -> dict[GroupVersionKind, list[dict[str, Any]]]:
        """Return all objects in the resources grouped by GroupVersionKind."""
        result: dict[GroupVersionKind, list[dict[str, Any]]] = {}
        for resource in resources:
            for version in resource.versions:
                gvk = GroupVersionKind(resource.group, version.version, resource.kind)
                objects = result.setdefault(gvk, [])
                for obj in version.objects:
                    objects.append(self._decode_object(gvk, obj))
        _LOGGER.debug(
            "Decoded %d objects in %d kinds",
            sum(len(objects) for objects in result.values()),
            len(result),
        )
        return result

    def object_ids(self, resources: list[GenericResources]) -> list[ObjectID]:
        """Return the ids of all objects in the resources."""
        return [
            ObjectID.parse_doc(obj)
            for objects in self.decode_resources(resources).values()
            for obj in objects
        ]

    def _decode_object(self, gvk: GroupVersionKind, obj: Any) -> dict[str, Any]:
        if isinstance(obj, str):
            try:
                obj = yaml.safe_load(obj)
            except yaml.YAMLError as err:
                raise DecodeException(str(gvk), str(err)) from err
        if not isinstance(obj, dict):
            raise DecodeException(
                str(gvk), f"expected a mapping but got {type(obj).__name__}"
            )
        obj = dict(obj)
        obj.setdefault("apiVersion", gvk.api_version)
        obj.setdefault("kind", gvk.kind)
        return obj


def parse_cluster_config(doc: dict[str, Any]) -> list[GenericResources]:
    """Parse the generic resources from a ClusterConfig object."""
    if (kind := doc.get("kind")) != CLUSTER_CONFIG_KIND:
        raise InputException(
            f"Invalid object expected {CLUSTER_CONFIG_KIND}, got {kind}"
        )
    spec = doc.get("spec") or {}
    if not isinstance(spec, dict):
        raise InputException(
            f"Invalid {CLUSTER_CONFIG_KIND} spec is not a mapping: {doc}"
        )
    resources = spec.get("resources") or []
    if not isinstance(resources, list):
        raise InputException(
            f"Invalid {CLUSTER_CONFIG_KIND} spec.resources is not a list: {doc}"
        )
    for subdoc in resources:
        if not isinstance(subdoc, dict):
            raise InputException(
                f"Invalid {CLUSTER_CONFIG_KIND} resource is not a mapping: {subdoc}"
            )
    try:
        return [GenericResources.from_dict(subdoc) for subdoc in resources]
    except (MissingField, InvalidFieldValue, ValueError) as err:
        raise InputException(
            f"Invalid {CLUSTER_CONFIG_KIND} resources: {err}"
        ) from err


async def read_cluster_config(path: Path) -> list[GenericResources]:
    """Return the generic resources in a serialized ClusterConfig file."""
    async with aiofiles.open(str(path)) as config_file:
        content = await config_file.read()
    doc = yaml.safe_load(content)
    if not isinstance(doc, dict):
        raise InputException(f"ClusterConfig file {path} does not contain an object")
    return parse_cluster_config(doc)
