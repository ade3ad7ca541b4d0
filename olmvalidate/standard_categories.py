"""Validation of the categories a CSV declares in its annotations."""

from __future__ import annotations

import json
import os
from typing import Any

from olmvalidate.csv_checks import CSVChecks, extract_categories
from olmvalidate.model import Bundle, ManifestResult, err_invalid_csv, warn_invalid_csv

CATEGORIES_ENV = "OPERATOR_BUNDLE_CATEGORIES"

VALID_CATEGORIES = frozenset(
    {
        "AI/Machine Learning",
        "Application Runtime",
        "Big Data",
        "Cloud Provider",
        "Developer Tools",
        "Database",
        "Integration & Delivery",
        "Logging & Tracing",
        "Monitoring",
        "Modernization & Migration",
        "Networking",
        "OpenShift Optional",
        "Security",
        "Storage",
        "Streaming & Messaging",
        "Observability",
    }
)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _csv_name(csv: dict) -> str:
    return str((csv.get("metadata") or {}).get("name") or "")


def check_categories(checks: CSVChecks) -> CSVChecks:
    """Report categories not in the standard set, or in the custom set if one is configured.

    A custom set is read from the JSON file named by OPERATOR_BUNDLE_CATEGORIES.
    """
    annotations = (checks.csv.get("metadata") or {}).get("annotations") or {}
    if "categories" not in annotations:
        return checks
    categories = str(annotations["categories"]).split(",")

    custom_path = os.environ.get(CATEGORIES_ENV, "")
    if custom_path:
        try:
            allowed = extract_categories(custom_path)
        except ValueError as exc:
            checks.errs.append(
                f"could not extract custom categories from categories {custom_path!r}: {exc}"
            )
            return checks
        kind = "custom"
    else:
        allowed = VALID_CATEGORIES
        kind = "standard"

    for category in categories:
        if category.strip() not in allowed:
            checks.errs.append(
                f'csv.Metadata.Annotations["categories"] value {_quote(category)} '
                f"is not in the set of {kind} categories"
            )
    return checks


def _validate_bundle(bundle: Bundle) -> ManifestResult:
    result = ManifestResult(name=bundle.name)
    csv = bundle.csv or {}
    checks = check_categories(CSVChecks(csv=csv))
    name = _csv_name(csv)
    result.add(*(err_invalid_csv(msg, name) for msg in checks.errs))
    result.add(*(warn_invalid_csv(msg, name) for msg in checks.warns))
    return result


def validate_categories(*args: Any) -> list[ManifestResult]:
    """Validate the category annotation of every bundle among the given objects."""
    return [_validate_bundle(obj) for obj in args if isinstance(obj, Bundle)]