"""Validation of the capability level a CSV declares in its annotations."""

from __future__ import annotations

import json
from typing import Any

from olmvalidate.csv_checks import CSVChecks
from olmvalidate.model import Bundle, ManifestResult, err_invalid_csv, warn_invalid_csv

VALID_CAPABILITIES = frozenset(
    {
        "Basic Install",
        "Seamless Upgrades",
        "Full Lifecycle",
        "Deep Insights",
        "Auto Pilot",
    }
)


def _annotations(csv: dict) -> dict:
    return (csv.get("metadata") or {}).get("annotations") or {}


def _csv_name(csv: dict) -> str:
    return str((csv.get("metadata") or {}).get("name") or "")


def check_capabilities(checks: CSVChecks) -> CSVChecks:
    """Report a "capabilities" annotation that is not a known capability level."""
    annotations = _annotations(checks.csv)
    if "capabilities" in annotations:
        capability = annotations["capabilities"]
        if capability not in VALID_CAPABILITIES:
            checks.errs.append(
                f"csv.Metadata.Annotations.Capabilities "
                f"{json.dumps(str(capability), ensure_ascii=False)} is not a valid capabilities level"
            )
    return checks


def _validate_bundle(bundle: Bundle) -> ManifestResult:
    result = ManifestResult(name=bundle.name)
    csv = bundle.csv or {}
    checks = check_capabilities(CSVChecks(csv=csv))
    name = _csv_name(csv)
    result.add(*(err_invalid_csv(msg, name) for msg in checks.errs))
    result.add(*(warn_invalid_csv(msg, name) for msg in checks.warns))
    return result


def validate_capabilities(*args: Any) -> list[ManifestResult]:
    """Validate the capability annotation of every bundle among the given objects."""
    return [_validate_bundle(obj) for obj in args if isinstance(obj, Bundle)]