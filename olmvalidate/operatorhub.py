"""OperatorHub publication checks for operator bundles."""

from __future__ import annotations

from typing import Any, Callable

from olmvalidate.csv_checks import (
    CSVChecks,
    check_spec_icon,
    check_spec_links,
    check_spec_maintainers,
    check_spec_min_kube_version,
    check_spec_provider_name,
    check_spec_version,
)
from olmvalidate.model import (
    Bundle,
    ManifestResult,
    err_failed_validation,
    err_invalid_bundle,
    err_invalid_csv,
    warn_deprecated_validator,
    warn_failed_validation,
    warn_invalid_csv,
)
from olmvalidate.removed_apis import check_deprecated_apis, k8s_version_from
from olmvalidate.standard_capabilities import check_capabilities
from olmvalidate.standard_categories import check_categories

DEPRECATED_VALIDATOR_MESSAGE = (
    'The "operatorhub" validator is deprecated; for equivalent validation use '
    '"operatorhub/v2", "standardcapabilities" and "standardcategories" validators'
)


def validate_hub_csv_spec(csv: dict) -> CSVChecks:
    """Run every OperatorHub check, including capabilities and categories."""
    checks = CSVChecks(csv=csv)
    for check in (
        check_spec_provider_name,
        check_spec_maintainers,
        check_spec_links,
        check_capabilities,
        check_categories,
        check_spec_version,
        check_spec_icon,
        check_spec_min_kube_version,
    ):
        checks = check(checks)
    return checks


def validate_hub_csv_spec_v2(csv: dict) -> CSVChecks:
    """Run the OperatorHub checks that do not concern annotations."""
    checks = CSVChecks(csv=csv)
    for check in (
        check_spec_provider_name,
        check_spec_maintainers,
        check_spec_links,
        check_spec_version,
        check_spec_icon,
        check_spec_min_kube_version,
    ):
        checks = check(checks)
    return checks


def _validate_bundle(
    bundle: Bundle | None, k8s_version: str, spec_check: Callable[[dict], CSVChecks]
) -> ManifestResult:
    result = ManifestResult(name=bundle.name if bundle is not None else "")
    if bundle is None:
        result.add(err_invalid_bundle("Bundle is nil", None))
        return result
    if bundle.csv is None:
        result.add(err_invalid_bundle("Bundle csv is nil", bundle.name))
        return result

    csv_name = str((bundle.csv.get("metadata") or {}).get("name") or "")
    checks = spec_check(bundle.csv)
    result.add(*(err_invalid_csv(msg, csv_name) for msg in checks.errs))
    result.add(*(warn_invalid_csv(msg, csv_name) for msg in checks.warns))

    errs, warns = check_deprecated_apis(bundle, k8s_version)
    result.add(*(err_failed_validation(msg, csv_name) for msg in errs))
    result.add(*(warn_failed_validation(msg, csv_name) for msg in warns))
    return result


def validate_operator_hub(*args: Any) -> list[ManifestResult]:
    """Deprecated OperatorHub validation; always ends with a deprecation warning."""
    k8s_version = k8s_version_from(args)
    results = [
        _validate_bundle(obj, k8s_version, validate_hub_csv_spec)
        for obj in args
        if isinstance(obj, Bundle)
    ]
    notice = ManifestResult()
    notice.add(warn_deprecated_validator(DEPRECATED_VALIDATOR_MESSAGE))
    results.append(notice)
    return results


def validate_operator_hub_v2(*args: Any) -> list[ManifestResult]:
    """Validate every bundle among the given objects for OperatorHub publication."""
    k8s_version = k8s_version_from(args)
    return [
        _validate_bundle(obj, k8s_version, validate_hub_csv_spec_v2)
        for obj in args
        if isinstance(obj, Bundle)
    ]