"""CustomResourceDefinitions declared in a ClusterConfig.

CRDs may be declared with either the `apiextensions.k8s.io/v1beta1` or `v1`
api. Both are normalized to the `v1` shape, where each served version carries
its own schema.
"""

from dataclasses import dataclass, field
import logging
from typing import Any

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig

from .decode import GenericResourceDecoder, GenericResources
from .exceptions import DecodeException
from .resource import GroupVersionKind

__all__ = [
    "CustomResourceDefinition",
    "CustomResourceDefinitionVersion",
    "get_crds",
    "to_crd",
]

_LOGGER = logging.getLogger(__name__)

CRD_GROUP = "apiextensions.k8s.io"
CRD_KIND = "CustomResourceDefinition"
CRD_VERSION_V1 = "v1"
CRD_VERSION_V1BETA1 = "v1beta1"
DEFAULT_SCOPE = "Namespaced"


@dataclass
class CustomResourceDefinitionVersion(DataClassDictMixin):
    """A version served by a CustomResourceDefinition."""

    name: str
    """The version name e.g. `v1`."""

    served: bool = True
    storage: bool = False

    schema: dict[str, Any] | None = None
    """The openAPIV3Schema of the version."""

    class Config(BaseConfig):
        omit_none = True


@dataclass
class CustomResourceDefinition(DataClassDictMixin):
    """A CustomResourceDefinition normalized to the v1 api."""

    name: str
    """The name of the CRD e.g. `anvils.acme.com`."""

    group: str
    """The group of the custom resource."""

    kind: str
    """The kind of the custom resource."""

    plural: str
    """The plural resource name of the custom resource."""

    scope: str = DEFAULT_SCOPE
    """Either Namespaced or Cluster."""

    versions: list[CustomResourceDefinitionVersion] = field(default_factory=list)

    preserve_unknown_fields: bool = field(
        default=False, metadata=field_options(alias="preserveUnknownFields")
    )

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True

    @property
    def group_versions(self) -> list[GroupVersionKind]:
        """Return the GroupVersionKind of each served version."""
        return [
            GroupVersionKind(self.group, version.name, self.kind)
            for version in self.versions
            if version.served
        ]


def _require(
    gvk: GroupVersionKind, name: str, value: Any, path: str, expected: type
) -> Any:
    if not isinstance(value, expected):
        raise DecodeException(
            str(gvk),
            f"malformed {CRD_KIND} {name}: {path} must be a {expected.__name__}, "
            f"got {type(value).__name__}",
        )
    return value


def _parse_version(
    gvk: GroupVersionKind, name: str, doc: Any, index: int
) -> CustomResourceDefinitionVersion:
    path = f"spec.versions[{index}]"
    doc = _require(gvk, name, doc, path, dict)
    schema = doc.get("schema") or {}
    _require(gvk, name, schema, f"{path}.schema", dict)
    openapi = schema.get("openAPIV3Schema")
    if openapi is not None:
        _require(gvk, name, openapi, f"{path}.schema.openAPIV3Schema", dict)
    return CustomResourceDefinitionVersion(
        name=_require(gvk, name, doc.get("name"), f"{path}.name", str),
        served=_require(gvk, name, doc.get("served", True), f"{path}.served", bool),
        storage=_require(
            gvk, name, doc.get("storage", False), f"{path}.storage", bool
        ),
        schema=openapi,
    )


def _v1beta1_versions(
    gvk: GroupVersionKind, name: str, spec: dict[str, Any]
) -> list[Any]:
    """Return the v1beta1 versions in the v1 shape.

    A v1beta1 CRD may declare a single `spec.version` and a top level
    `spec.validation` schema shared by every version.
    """
    validation = spec.get("validation") or {}
    _require(gvk, name, validation, "spec.validation", dict)
    if not (versions := spec.get("versions")):
        version = _require(gvk, name, spec.get("version"), "spec.version", str)
        versions = [{"name": version, "served": True, "storage": True}]
    _require(gvk, name, versions, "spec.versions", list)
    result = []
    for version in versions:
        if isinstance(version, dict) and "schema" not in version and validation:
            version = {**version, "schema": validation}
        result.append(version)
    return result


def to_crd(gvk: GroupVersionKind, obj: dict[str, Any]) -> CustomResourceDefinition:
    """Convert a decoded CRD object to a CustomResourceDefinition."""
    metadata = obj.get("metadata")
    name = metadata.get("name") if isinstance(metadata, dict) else None
    if not isinstance(name, str):
        raise DecodeException(
            str(gvk), f"malformed {CRD_KIND} missing metadata.name"
        )
    spec = _require(gvk, name, obj.get("spec"), "spec", dict)
    names = _require(gvk, name, spec.get("names"), "spec.names", dict)

    if gvk.version == CRD_VERSION_V1BETA1:
        versions = _v1beta1_versions(gvk, name, spec)
    elif gvk.version == CRD_VERSION_V1:
        versions = _require(gvk, name, spec.get("versions"), "spec.versions", list)
    else:
        raise DecodeException(str(gvk), f"unsupported {CRD_KIND} version")

    return CustomResourceDefinition(
        name=name,
        group=_require(gvk, name, spec.get("group"), "spec.group", str),
        kind=_require(gvk, name, names.get("kind"), "spec.names.kind", str),
        plural=_require(gvk, name, names.get("plural"), "spec.names.plural", str),
        scope=_require(
            gvk, name, spec.get("scope", DEFAULT_SCOPE), "spec.scope", str
        ),
        versions=[
            _parse_version(gvk, name, version, i)
            for i, version in enumerate(versions)
        ],
        preserve_unknown_fields=_require(
            gvk,
            name,
            spec.get("preserveUnknownFields", False),
            "spec.preserveUnknownFields",
            bool,
        ),
    )


def get_crds(
    resources: list[GenericResources],
    decoder: GenericResourceDecoder | None = None,
) -> list[CustomResourceDefinition]:
    """Return the CustomResourceDefinitions declared in the resources."""
    if decoder is None:
        decoder = GenericResourceDecoder()
    crds: list[CustomResourceDefinition] = []
    for gvk, objects in decoder.decode_resources(resources).items():
        if gvk.group != CRD_GROUP or gvk.kind != CRD_KIND:
            continue
        for obj in objects:
            crds.append(to_crd(gvk, obj))
    _LOGGER.debug("Found %d CustomResourceDefinitions", len(crds))
    return crds
