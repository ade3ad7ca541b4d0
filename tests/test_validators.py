import pytest

from olmvalidate.model import Bundle, PackageChannel, PackageManifest, err_invalid_package_manifest
from olmvalidate.validators import (
    ALL_VALIDATORS,
    OPERATOR_HUB_VALIDATOR,
    PACKAGE_MANIFEST_VALIDATOR,
)


@pytest.fixture(autouse=True)
def _no_custom_categories(monkeypatch):
    monkeypatch.delenv("OPERATOR_BUNDLE_CATEGORIES", raising=False)


def _valid_bundle():
    return Bundle(
        name="etcd",
        csv={
            "apiVersion": "operators.coreos.com/v1alpha1",
            "kind": "ClusterServiceVersion",
            "metadata": {
                "name": "etcdoperator.v0.9.4",
                "annotations": {"capabilities": "Full Lifecycle", "categories": "Database"},
            },
            "spec": {
                "provider": {"name": "Example"},
                "maintainers": [{"name": "etcd", "email": "etcd-dev@example.com"}],
                "links": [{"name": "Docs", "url": "https://example.com/docs"}],
                "version": "0.9.4",
                "icon": [{"base64data": "iVBORw0KGgo", "mediatype": "image/png"}],
                "minKubeVersion": "1.16.0",
            },
        },
    )


def test_validate_success():
    results = ALL_VALIDATORS.validate(
        _valid_bundle(), {"index-path": "./testdata/dockerfile/valid_bundle.Dockerfile"}
    )
    assert len(results) == 4
    assert all(not result.has_error() for result in results)


def test_validate_package_success():
    pkg = PackageManifest(
        package_name="etcd",
        channels=[PackageChannel(name="alpha", current_csv_name="etcdoperator.v0.9.4")],
        default_channel_name="alpha",
    )
    results = ALL_VALIDATORS.validate(_valid_bundle(), pkg)
    assert len(results) == 5
    assert all(not result.has_error() for result in results)


def test_validate_package_error():
    pkg = PackageManifest(
        package_name="",
        channels=[PackageChannel(name="alpha", current_csv_name="etcdoperator.v0.9.4")],
        default_channel_name="alpha",
    )
    results = ALL_VALIDATORS.validate(pkg)
    assert len(results) == 1
    assert results[0].has_error() is True
    assert results[0].errors == [err_invalid_package_manifest("packageName empty", "")]


def test_unknown_objects_ignored():
    assert ALL_VALIDATORS.validate("text", 42) == []


def test_single_validator_only_handles_its_type():
    assert PACKAGE_MANIFEST_VALIDATOR.validate(_valid_bundle()) == []


def test_deprecated_operatorhub_adds_notice():
    results = OPERATOR_HUB_VALIDATOR.validate(_valid_bundle())
    assert len(results) == 2
    assert results[0].has_error() is False
    assert results[1].has_warn() is True