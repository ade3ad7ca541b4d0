# olmvalidate

Validation checks for Operator Lifecycle Manager content: bundles, their
ClusterServiceVersion (CSV), and package manifests. Each validator takes any
mix of objects, picks out the ones it understands, and returns a list of
`ManifestResult` values holding errors and warnings.

## Installation

```
pip install olmvalidate
```

## Data model

Everything lives in `olmvalidate.model`:

- `Bundle(name, csv, v1beta1_crds, v1_crds, objects)`: the CSV and the other
  manifests are plain dictionaries, as loaded from YAML or JSON.
- `PackageManifest(package_name, channels, default_channel_name)` with a
  list of `PackageChannel(name, current_csv_name)`.
- `ManifestResult(name, errors, warnings)` with `add()`, `has_error()` and
  `has_warn()`.
- `ValidationError`, carrying an `ErrorType`, a `Level` (`ERROR` or `WARN`),
  a detail message and the offending value. `str()` gives text such as
  `Error: Value : (etcdoperator.v0.9.4) csv.Spec.Version must be set`.
- `Validator` wraps one validation function; `Validators` is a list of
  validators whose `validate()` runs them all and joins their results.

## Validators

| Function | What it checks |
| --- | --- |
| `package_manifest.validate_package_manifests` | package name, channels, default channel |
| `operatorhub.validate_operator_hub_v2` | CSV metadata required by OperatorHub.io (provider, maintainers, links, version, icon, minKubeVersion) and removed Kubernetes APIs |
| `operatorhub.validate_operator_hub` | deprecated; the v2 checks plus capabilities and categories, followed by a deprecation warning |
| `standard_capabilities.validate_capabilities` | the `capabilities` annotation |
| `standard_categories.validate_categories` | the `categories` annotation |
| `removed_apis.validate_deprecated_apis` | use of APIs removed in Kubernetes 1.22, 1.25 and 1.26 |

`olmvalidate.validators` wraps each of these in a ready-made `Validator`
(`PACKAGE_MANIFEST_VALIDATOR`, `OPERATOR_HUB_VALIDATOR`,
`OPERATOR_HUB_V2_VALIDATOR`, `STANDARD_CAPABILITIES_VALIDATOR`,
`STANDARD_CATEGORIES_VALIDATOR`, `ALPHA_DEPRECATED_APIS_VALIDATOR`) and
groups all but the deprecated one in `ALL_VALIDATORS`.

The individual CSV checks (`check_spec_provider_name`, `check_spec_icon`,
and so on) are available in `olmvalidate.csv_checks`, working on a
`CSVChecks` value.

## Example

```python
from olmvalidate.model import PackageChannel, PackageManifest
from olmvalidate.package_manifest import validate_package_manifests

pkg = PackageManifest(
    package_name="test-package",
    channels=[PackageChannel(name="foo", current_csv_name="bar")],
    default_channel_name="baz",
)

for result in validate_package_manifests(pkg):
    for error in result.errors:
        print(error)
# Error: Value : (test-package) default channel "baz" not found in the list of declared channels
```

## Optional values

Validators that look at removed APIs accept a plain `dict` among their
arguments. The `k8s-version` key names the Kubernetes version the bundle is
meant for; when it, or the CSV's `minKubeVersion`, is at or above the version
that removed an API in use, that finding becomes an error instead of a
warning.

```python
from olmvalidate.model import Bundle
from olmvalidate.validators import ALL_VALIDATORS

bundle = Bundle(
    name="memcached-operator",
    csv={"metadata": {"name": "memcached-operator.v0.0.1"}, "spec": {"version": "0.0.1"}},
    objects=[
        {
            "apiVersion": "autoscaling/v2beta2",
            "kind": "HorizontalPodAutoscaler",
            "metadata": {"name": "memcached-operator-hpa"},
        }
    ],
)

results = ALL_VALIDATORS.validate(bundle, {"k8s-version": "1.26"})
```

## Custom categories

Set `OPERATOR_BUNDLE_CATEGORIES` to the path of a JSON file of the form
`{"categories": ["Cloud Pak", "Registry"]}` and the categories check uses that
list instead of the standard one.

## What this package does not do

- It does not read bundles or package manifests from disk; build `Bundle`
  and `PackageManifest` values yourself from parsed manifests.
- It has no command-line tool.
- It does not check the structure of CSVs or CRDs against their schemas,
  nor validate OperatorGroups, object manifests or multi-architecture
  settings.