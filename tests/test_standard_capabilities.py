import pytest

from olmvalidate.csv_checks import CSVChecks
from olmvalidate.model import Bundle
from olmvalidate.standard_capabilities import check_capabilities, validate_capabilities


def _csv(capability=None):
    annotations = {"categories": "Database"}
    if capability is not None:
        annotations["capabilities"] = capability
    return {
        "metadata": {"name": "etcdoperator.v0.9.4", "annotations": annotations},
        "spec": {},
    }


def test_valid_bundle_has_no_error():
    results = validate_capabilities(Bundle(name="etcd", csv=_csv("Basic Install")))
    assert len(results) == 1
    assert results[0].has_error() is False


def test_invalid_capability_reported():
    results = validate_capabilities(Bundle(name="etcd", csv=_csv("Installs and stuff")))
    assert results[0].has_error() is True
    assert [str(e) for e in results[0].errors] == [
        'Error: Value : (etcdoperator.v0.9.4) csv.Metadata.Annotations.Capabilities '
        '"Installs and stuff" is not a valid capabilities level'
    ]


@pytest.mark.parametrize(
    "capability",
    ["Basic Install", "Seamless Upgrades", "Full Lifecycle", "Deep Insights", "Auto Pilot"],
)
def test_all_standard_capabilities_accepted(capability):
    assert check_capabilities(CSVChecks(csv=_csv(capability))).errs == []


def test_missing_annotation_is_accepted():
    checks = check_capabilities(CSVChecks(csv={"metadata": {}}))
    assert checks.errs == [] and checks.warns == []


def test_non_bundle_objects_ignored():
    assert validate_capabilities("x", {"k8s-version": "1.22"}) == []


def test_result_named_after_bundle():
    results = validate_capabilities(Bundle(name="my-bundle", csv=_csv("Auto Pilot")))
    assert results[0].name == "my-bundle"