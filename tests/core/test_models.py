"""Unit tests for the snapshot data model."""

import dataclasses

import pytest

from probe.core.models import (
    ConfigSnapshot,
    DistributionIdentity,
    PackageBackendKind,
    PackageRecord,
    SystemSnapshot,
)


def test_backend_kind_values() -> None:
    """Check the closed set of backend kinds."""
    assert {kind.value for kind in PackageBackendKind} == {"rpm", "debian"}


def test_distribution_identity_copies_input() -> None:
    """Check later changes to the source dict do not leak in."""
    source = {"ID": "ubuntu"}
    identity = DistributionIdentity(source)
    source["ID"] = "changed"
    assert identity.os_id == "ubuntu"
    assert identity == {"ID": "ubuntu"}


def test_package_record_is_frozen() -> None:
    """Check records cannot be mutated."""
    record = PackageRecord("foo", "1.0", ("/etc/foo",))
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "bar"  # type: ignore[misc]


def test_system_snapshot_freezes_collections() -> None:
    """Check the packages and configurations cannot be modified after assembly."""
    configurations = {"/etc/foo": ConfigSnapshot("/etc/foo", "X", "2024-01-01T00:00:00+00:00")}
    snapshot = SystemSnapshot(
        os_release=DistributionIdentity({"ID": "debian"}),
        packages=[PackageRecord("foo", "1.0", ("/etc/foo",))],
        configurations=configurations,
    )

    configurations["/etc/other"] = ConfigSnapshot("/etc/other", "", "")

    assert isinstance(snapshot.packages, tuple)
    assert list(snapshot.configurations) == ["/etc/foo"]
    with pytest.raises(TypeError):
        snapshot.configurations["/etc/bar"] = None  # type: ignore[index]


def test_system_snapshot_to_dict() -> None:
    """Check the serializable layout."""
    snapshot = SystemSnapshot(
        os_release=DistributionIdentity({"ID": "debian", "VERSION_ID": "12"}),
        packages=[PackageRecord("foo", "1.0", ("/etc/foo",)), PackageRecord("bar", "2")],
        configurations={"/etc/foo": ConfigSnapshot("/etc/foo", "X", "2024-01-01T00:00:00+00:00")},
    )

    assert snapshot.to_dict() == {
        "os_release": {"ID": "debian", "VERSION_ID": "12"},
        "packages": [
            {"name": "foo", "version": "1.0", "config_files": ["/etc/foo"]},
            {"name": "bar", "version": "2", "config_files": []},
        ],
        "configurations": {
            "/etc/foo": {"path": "/etc/foo", "content": "X", "modified": "2024-01-01T00:00:00+00:00"}
        },
    }
