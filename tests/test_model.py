from olmvalidate.model import (
    Bundle,
    ErrorType,
    Level,
    ManifestResult,
    PackageManifest,
    Validator,
    Validators,
    err_failed_validation,
    err_invalid_bundle,
    err_invalid_csv,
    err_invalid_package_manifest,
    warn_deprecated_validator,
    warn_failed_validation,
    warn_invalid_csv,
)


def test_error_string_format():
    finding = err_invalid_csv("csv.Spec.Provider.Name not specified", "etcdoperator.v0.9.4")
    assert str(finding) == (
        "Error: Value : (etcdoperator.v0.9.4) csv.Spec.Provider.Name not specified"
    )


def test_warning_string_format():
    finding = warn_invalid_csv("csv.Spec.Icon not specified", "etcdoperator.v0.9.4")
    assert str(finding) == "Warning: Value : (etcdoperator.v0.9.4) csv.Spec.Icon not specified"


def test_deprecated_validator_warning_has_no_value():
    finding = warn_deprecated_validator("old validator")
    assert finding.level is Level.WARN
    assert finding.type is ErrorType.DEPRECATED_VALIDATOR
    assert str(finding) == "Warning: old validator"


def test_constructor_levels_and_types():
    assert err_invalid_bundle("x", None).level is Level.ERROR
    assert err_invalid_bundle("x", None).type is ErrorType.INVALID_BUNDLE
    assert err_failed_validation("x", "v").type is ErrorType.FAILED_VALIDATION
    assert warn_failed_validation("x", "v").level is Level.WARN
    assert err_invalid_package_manifest("x", "p").type is ErrorType.INVALID_PACKAGE_MANIFEST


def test_manifest_result_splits_by_level():
    result = ManifestResult(name="pkg")
    assert not result.has_error()
    assert not result.has_warn()
    error = err_invalid_csv("bad", "csv")
    warning = warn_invalid_csv("meh", "csv")
    result.add(error, warning, error)
    assert result.errors == [error, error]
    assert result.warnings == [warning]
    assert result.has_error()
    assert result.has_warn()


def test_equal_findings_compare_equal():
    result = ManifestResult(name="test-package")
    result.add(err_invalid_package_manifest("packageName empty", "test-package"))
    assert result.errors == [err_invalid_package_manifest("packageName empty", "test-package")]
    assert result.errors != [err_invalid_package_manifest("channels empty", "test-package")]
    assert result.errors[0].type is ErrorType.INVALID_PACKAGE_MANIFEST
    assert str(result.errors[0]) == "Error: Value : (test-package) packageName empty"


def _bundle_names(*objs):
    return [ManifestResult(name=obj.name) for obj in objs if isinstance(obj, Bundle)]


def _package_errors(*objs):
    results = []
    for obj in objs:
        if isinstance(obj, PackageManifest):
            result = ManifestResult(name=obj.package_name)
            result.add(err_invalid_package_manifest("packageName empty", obj.package_name))
            results.append(result)
    return results


def test_validator_passes_all_objects():
    validator = Validator(_bundle_names)
    results = validator.validate(Bundle(name="a"), PackageManifest(), Bundle(name="b"))
    assert [r.name for r in results] == ["a", "b"]


def test_validators_concatenate_in_order():
    validators = Validators([Validator(_bundle_names), Validator(_package_errors)])
    pkg = PackageManifest(package_name="")
    results = validators.validate(pkg, Bundle(name="bundle"))
    assert [r.name for r in results] == ["bundle", ""]
    assert results[1].has_error()
    assert results[1].errors == [err_invalid_package_manifest("packageName empty", "")]


def test_validators_with_nothing_relevant_report_nothing():
    validators = Validators([Validator(_bundle_names), Validator(_package_errors)])
    assert validators.validate({"k8s-version": "1.22"}) == []