"""Tests for the crd module."""

from typing import Any

import pytest

from sync_status.crd import (
    CustomResourceDefinition,
    CustomResourceDefinitionVersion,
    get_crds,
)
from sync_status.decode import GenericResources, GenericVersion
from sync_status.exceptions import DecodeException
from sync_status.resource import GroupVersionKind

ANVIL_SCHEMA = {
    "type": "object",
    "properties": {"spec": {"type": "object"}},
}

ANVIL_CRD = CustomResourceDefinition(
    name="anvils.acme.com",
    group="acme.com",
    kind="Anvil",
    plural="anvils",
    scope="Namespaced",
    versions=[
        CustomResourceDefinitionVersion(
            name="v1", served=True, storage=True, schema=ANVIL_SCHEMA
        )
    ],
)


def v1beta1_crd() -> dict[str, Any]:
    return {
        "metadata": {"name": "anvils.acme.com"},
        "spec": {
            "group": "acme.com",
            "names": {"kind": "Anvil", "plural": "anvils"},
            "scope": "Namespaced",
            "version": "v1",
            "validation": {"openAPIV3Schema": ANVIL_SCHEMA},
        },
    }


def v1_crd() -> dict[str, Any]:
    return {
        "metadata": {"name": "anvils.acme.com"},
        "spec": {
            "group": "acme.com",
            "names": {"kind": "Anvil", "plural": "anvils"},
            "scope": "Namespaced",
            "versions": [
                {
                    "name": "v1",
                    "served": True,
                    "storage": True,
                    "schema": {"openAPIV3Schema": ANVIL_SCHEMA},
                }
            ],
            "preserveUnknownFields": False,
        },
    }


def crd_resources(version: str, obj: dict[str, Any]) -> list[GenericResources]:
    return [
        GenericResources(
            group="apiextensions.k8s.io",
            kind="CustomResourceDefinition",
            versions=[GenericVersion(version=version, objects=[obj])],
        )
    ]


def test_no_crds() -> None:
    """Test resources without any CustomResourceDefinitions."""
    resources = [
        GenericResources(
            group="acme.com",
            kind="Anvil",
            versions=[
                GenericVersion(version="v1", objects=[{"metadata": {"name": "a"}}])
            ],
        )
    ]
    assert get_crds([]) == []
    assert get_crds(resources) == []


def test_v1beta1_crd() -> None:
    """Test a v1beta1 CRD is converted to the v1 shape."""
    assert get_crds(crd_resources("v1beta1", v1beta1_crd())) == [ANVIL_CRD]


def test_v1_crd() -> None:
    """Test a v1 CRD."""
    crds = get_crds(crd_resources("v1", v1_crd()))
    assert crds == [ANVIL_CRD]
    assert crds[0].group_versions == [GroupVersionKind("acme.com", "v1", "Anvil")]
    assert crds[0].to_dict()["preserveUnknownFields"] is False


def test_v1beta1_multiple_versions() -> None:
    """Test a v1beta1 CRD with versions sharing the top level schema."""
    obj = v1beta1_crd()
    del obj["spec"]["version"]
    obj["spec"]["versions"] = [
        {"name": "v1alpha1", "served": True, "storage": False},
        {"name": "v1", "served": True, "storage": True},
    ]
    (crd,) = get_crds(crd_resources("v1beta1", obj))
    assert [version.name for version in crd.versions] == ["v1alpha1", "v1"]
    assert all(version.schema == ANVIL_SCHEMA for version in crd.versions)


@pytest.mark.parametrize("version", ["v1beta1", "v1"])
def test_malformed_crd(version: str) -> None:
    """Test a CRD whose group is not a string."""
    obj = v1beta1_crd() if version == "v1beta1" else v1_crd()
    obj["spec"]["group"] = False
    with pytest.raises(DecodeException, match="spec.group must be a str, got bool"):
        get_crds(crd_resources(version, obj))


@pytest.mark.parametrize(
    ("obj", "match"),
    [
        ({"spec": {}}, "missing metadata.name"),
        ({"metadata": {"name": "anvils.acme.com"}}, "spec must be a dict"),
        (
            {"metadata": {"name": "anvils.acme.com"}, "spec": {"group": "acme.com"}},
            "spec.names must be a dict",
        ),
    ],
)
def test_incomplete_crd(obj: dict[str, Any], match: str) -> None:
    """Test CRDs missing required fields."""
    with pytest.raises(DecodeException, match=match):
        get_crds(crd_resources("v1", obj))


def test_unsupported_crd_version() -> None:
    """Test a CRD with an unknown api version."""
    with pytest.raises(DecodeException, match="unsupported"):
        get_crds(crd_resources("v2", v1_crd()))
