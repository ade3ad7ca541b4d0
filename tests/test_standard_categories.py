import json

import pytest

from olmvalidate.csv_checks import CSVChecks
from olmvalidate.model import Bundle
from olmvalidate.standard_categories import check_categories, validate_categories


@pytest.fixture(autouse=True)
def _no_custom_categories(monkeypatch):
    monkeypatch.delenv("OPERATOR_BUNDLE_CATEGORIES", raising=False)


def _csv(categories):
    return {
        "metadata": {"name": "etcdoperator.v0.9.4", "annotations": {"categories": categories}},
        "spec": {},
    }


@pytest.fixture
def custom_file(tmp_path):
    path = tmp_path / "categories.json"
    path.write_text(
        json.dumps({"categories": ["Cloud Pak", "Registry", "MyCoolThing", "This/Or & That"]})
    )
    return str(path)


def test_valid_bundle_has_no_error():
    results = validate_categories(Bundle(name="etcd", csv=_csv("Database, Big Data")))
    assert len(results) == 1
    assert results[0].has_error() is False


def test_invalid_category_reported():
    results = validate_categories(Bundle(name="etcd", csv=_csv("Magic")))
    assert results[0].has_error() is True
    assert [str(e) for e in results[0].errors] == [
        'Error: Value : (etcdoperator.v0.9.4) csv.Metadata.Annotations["categories"] '
        'value "Magic" is not in the set of standard categories'
    ]


def test_each_bad_category_reported_unstripped():
    checks = check_categories(CSVChecks(csv=_csv("Database, Magic, Spells")))
    assert checks.errs == [
        'csv.Metadata.Annotations["categories"] value " Magic" is not in the set of standard categories',
        'csv.Metadata.Annotations["categories"] value " Spells" is not in the set of standard categories',
    ]


def test_custom_categories_accepted(monkeypatch, custom_file):
    monkeypatch.setenv("OPERATOR_BUNDLE_CATEGORIES", custom_file)
    checks = check_categories(CSVChecks(csv=_csv("Cloud Pak, This/Or & That")))
    assert checks.errs == []


def test_standard_category_rejected_with_custom_set(monkeypatch, custom_file):
    monkeypatch.setenv("OPERATOR_BUNDLE_CATEGORIES", custom_file)
    checks = check_categories(CSVChecks(csv=_csv("Database")))
    assert checks.errs == [
        'csv.Metadata.Annotations["categories"] value "Database" is not in the set of custom categories'
    ]


def test_unreadable_custom_file(monkeypatch, tmp_path):
    monkeypatch.setenv("OPERATOR_BUNDLE_CATEGORIES", str(tmp_path / "missing.json"))
    checks = check_categories(CSVChecks(csv=_csv("Database")))
    assert len(checks.errs) == 1
    assert checks.errs[0].startswith("could not extract custom categories from categories")


def test_no_annotation_no_error():
    assert check_categories(CSVChecks(csv={"metadata": {"annotations": {}}})).errs == []