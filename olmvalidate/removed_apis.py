"""Detection of Kubernetes APIs that were removed in newer cluster versions."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import semver

from olmvalidate.model import (
    Bundle,
    ManifestResult,
    err_failed_validation,
    err_invalid_bundle,
    warn_failed_validation,
)

K8S_VERSION_KEY = "k8s-version"

DEPRECATE_MESSAGE = (
    "this bundle is using APIs which were deprecated and removed in v{major}.{minor}. "
    "More info: https://kubernetes.io/docs/reference/using-api/deprecation-guide/#v{major}-{minor}. "
    "Migrate the API(s) for {apis}"
)

K8S_VERSIONS_SUPPORTED_BY_VALIDATOR = ("1.22.0", "1.25.0", "1.26.0")

PRIORITY_CLASS_KIND = "PriorityClass"
ROLE_KIND = "Role"
CLUSTER_ROLE_KIND = "ClusterRole"

_REMOVED_IN_1_22: dict[str, frozenset[str]] = {
    "scheduling.k8s.io/v1beta1": frozenset({PRIORITY_CLASS_KIND}),
    "rbac.authorization.k8s.io/v1beta1": frozenset(
        {ROLE_KIND, "ClusterRoleBinding", "RoleBinding", CLUSTER_ROLE_KIND}
    ),
    "apiregistration.k8s.io/v1beta1": frozenset({"APIService"}),
    "authentication.k8s.io/v1beta1": frozenset({"TokenReview"}),
    "authorization.k8s.io/v1beta1": frozenset(
        {"LocalSubjectAccessReview", "SelfSubjectAccessReview", "SubjectAccessReview"}
    ),
    "admissionregistration.k8s.io/v1beta1": frozenset(
        {"MutatingWebhookConfiguration", "ValidatingWebhookConfiguration"}
    ),
    "coordination.k8s.io/v1beta1": frozenset({"Lease"}),
    "extensions/v1beta1": frozenset({"Ingress"}),
    "networking.k8s.io/v1beta1": frozenset({"Ingress", "IngressClass"}),
    "storage.k8s.io/v1beta1": frozenset(
        {"CSIDriver", "CSINode", "StorageClass", "VolumeAttachment"}
    ),
    "certificates.k8s.io/v1beta1": frozenset({"CertificateSigningRequest"}),
}

_REMOVED_GVK_1_25 = frozenset(
    {
        ("batch", "v1beta1", "CronJob"),
        ("discovery.k8s.io", "v1beta1", "EndpointSlice"),
        ("events.k8s.io", "v1beta1", "Event"),
        ("autoscaling", "v2beta1", "HorizontalPodAutoscaler"),
        ("policy", "v1beta1", "PodDisruptionBudget"),
        ("policy", "v1beta1", "PodSecurityPolicy"),
        ("node.k8s.io", "v1beta1", "RuntimeClass"),
    }
)

_REMOVED_GROUP_RESOURCE_1_25 = frozenset(
    {
        ("batch", "cronjobs"),
        ("discovery.k8s.io", "endpointslices"),
        ("events.k8s.io", "events"),
        ("autoscaling", "horizontalpodautoscalers"),
        ("policy", "poddisruptionbudgets"),
        ("policy", "podsecuritypolicies"),
        ("node.k8s.io", "runtimeclasses"),
    }
)

_CSV_API_VERSION = "operators.coreos.com/v1alpha1"


def _name(obj: Mapping | None) -> str:
    metadata = (obj or {}).get("metadata") or {}
    return str(metadata.get("name") or "")


def _gvk(obj: Mapping) -> tuple[str, str, str]:
    api_version = str(obj.get("apiVersion") or "")
    kind = str(obj.get("kind") or "")
    if not api_version:
        return "", "", kind
    parts = api_version.split("/")
    if len(parts) == 1:
        return "", parts[0], kind
    if len(parts) == 2:
        return parts[0], parts[1], kind
    return "", "", ""


def _parse_tolerant(text: str) -> semver.Version:
    """Parse a version leniently: a leading "v" and missing parts are accepted."""
    stripped = text.strip()
    if stripped.startswith("v"):
        stripped = stripped[1:]
    parts = []
    for part in stripped.split(".", 2):
        if len(part) > 1:
            part = part.lstrip("0")
            if not part or not part[0].isdigit():
                part = "0" + part
        parts.append(part)
    if len(parts) < 3:
        if any(char in parts[-1] for char in "+-"):
            raise ValueError("short version cannot contain prerelease or build metadata")
        parts.extend(["0"] * (3 - len(parts)))
    try:
        return semver.Version.parse(".".join(parts))
    except (ValueError, TypeError) as exc:
        raise ValueError(str(exc)) from exc


_ZERO = semver.Version(0, 0, 0)


def _parse_or_zero(text: str) -> semver.Version:
    try:
        return _parse_tolerant(text)
    except ValueError:
        return _ZERO


def k8s_version_from(objs: Any) -> str:
    """Return the Kubernetes version given through an optional-values mapping."""
    version = ""
    for obj in objs:
        if isinstance(obj, Mapping):
            version = str(obj.get(K8S_VERSION_KEY) or "")
    return version


def get_removed_apis_on_1_22(bundle: Bundle) -> dict[str, list[str]]:
    """Resources in the bundle whose APIs were removed in Kubernetes 1.22."""
    deprecated: dict[str, list[str]] = {}
    if bundle.v1beta1_crds:
        deprecated["CRD"] = [_name(crd) for crd in bundle.v1beta1_crds]
    for obj in bundle.objects:
        kind = str(obj.get("kind") or "")
        if kind in _REMOVED_IN_1_22.get(str(obj.get("apiVersion") or ""), ()):
            deprecated.setdefault(kind, []).append(_name(obj))
    return deprecated


def get_removed_apis_on_1_25(
    bundle: Bundle,
) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
    """Resources removed in Kubernetes 1.25, and CSV permissions that may refer to them."""
    deprecated: dict[str, list[str]] = {}
    warnings: dict[str, list[str]] = {}

    def add_if_deprecated(obj: Mapping) -> None:
        if _gvk(obj) in _REMOVED_GVK_1_25:
            deprecated.setdefault(str(obj.get("kind") or ""), []).append(_name(obj))

    for obj in bundle.objects:
        if obj.get("apiVersion") == _CSV_API_VERSION:
            if obj.get("kind") == "ClusterServiceVersion":
                _check_csv_1_25(obj, add_if_deprecated, warnings)
        else:
            add_if_deprecated(obj)
    return deprecated, warnings


def _check_csv_1_25(csv: Mapping, add_if_deprecated, warnings: dict[str, list[str]]) -> None:
    spec = csv.get("spec") or {}
    crds = spec.get("customresourcedefinitions") or {}
    resources_in_crds: set[str] = set()

    for field_name, key in (("Owned", "owned"), ("Required", "required")):
        for i, desc in enumerate(crds.get(key) or []):
            for j, res in enumerate((desc or {}).get("resources") or []):
                kind = str(res.get("kind") or "")
                resources_in_crds.add(f"{kind.lower()}s")
                add_if_deprecated(
                    {
                        "apiVersion": res.get("version") or "",
                        "kind": kind,
                        "metadata": {
                            "name": "ClusterServiceVersion.Spec.CustomResourceDefinitions."
                            f"{field_name}[{i}].Resource[{j}]"
                        },
                    }
                )

    strategy = ((spec.get("install") or {}).get("spec")) or {}
    for field_name, key in (
        ("ClusterPermissions", "clusterPermissions"),
        ("Permissions", "permissions"),
    ):
        for i, perm in enumerate(strategy.get(key) or []):
            for j, rule in enumerate((perm or {}).get("rules") or []):
                for group in rule.get("apiGroups") or []:
                    for resource in rule.get("resources") or []:
                        if resource in resources_in_crds:
                            continue
                        if (group, resource) in _REMOVED_GROUP_RESOURCE_1_25:
                            warnings.setdefault(resource, []).append(
                                "ClusterServiceVersion.Spec.InstallStrategy.StrategySpec."
                                f"{field_name}[{i}].Rules[{j}]"
                            )


def get_removed_apis_on_1_26(bundle: Bundle) -> dict[str, list[str]]:
    """Resources in the bundle whose APIs were removed in Kubernetes 1.26."""
    deprecated: dict[str, list[str]] = {}
    for obj in bundle.objects:
        if obj.get("apiVersion") == "autoscaling/v2beta2" and obj.get("kind") == "HorizontalPodAutoscaler":
            deprecated.setdefault("HorizontalPodAutoscaler", []).append(_name(obj))
    return deprecated


def _quote_list(values: list[str]) -> str:
    return "[" + " ".join(json.dumps(value, ensure_ascii=True) for value in values) + "]"


def generate_message_with_deprecated_apis(deprecated_apis: Mapping[str, list[str]]) -> str:
    """Describe the removed APIs found, one kind after another in sorted order."""
    if len(deprecated_apis) == 1:
        ((kind, names),) = deprecated_apis.items()
        return f"{kind}: ({_quote_list(names)})"
    return "".join(
        f"{kind}: ({_quote_list(deprecated_apis[kind])})," for kind in sorted(deprecated_apis)
    )


def _removed_for(bundle: Bundle, version: str) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
    if version == "1.22.0":
        return get_removed_apis_on_1_22(bundle), {}
    if version == "1.25.0":
        return get_removed_apis_on_1_25(bundle)
    if version == "1.26.0":
        return get_removed_apis_on_1_26(bundle), {}
    raise ValueError(
        f"invalid internal call to check the removed apis with the version ({version}) "
        "which is not supported"
    )


def check_deprecated_apis(bundle: Bundle, version_provided: str) -> tuple[list[str], list[str]]:
    """Return the errors and warnings about removed APIs used by the bundle.

    A finding is an error when the given Kubernetes version or the CSV's
    minKubeVersion is at or above the version that removed the API;
    otherwise it is a warning.
    """
    errs: list[str] = []
    warns: list[str] = []

    provided = _parse_or_zero(version_provided)
    if version_provided:
        try:
            _parse_tolerant(version_provided)
        except ValueError:
            errs.append(f"invalid value informed via the k8s key option : {version_provided}")

    spec = (bundle.csv or {}).get("spec") or {}
    min_kube_text = str(spec.get("minKubeVersion") or "")
    min_kube = _ZERO
    if min_kube_text:
        try:
            min_kube = _parse_tolerant(min_kube_text)
        except ValueError:
            errs.append(
                "unable to use csv.Spec.MinKubeVersion to verify the CRD/Webhook apis "
                f"because it has an invalid value: {min_kube_text}"
            )

    for version_text in K8S_VERSIONS_SUPPORTED_BY_VALIDATOR:
        version = semver.Version.parse(version_text)
        found, warns_found = _removed_for(bundle, version_text)
        if found:
            msg = DEPRECATE_MESSAGE.format(
                major=version.major,
                minor=version.minor,
                apis=generate_message_with_deprecated_apis(found),
            )
            if provided >= version or min_kube >= version:
                errs.append(msg)
            else:
                warns.append(msg)
        if warns_found:
            warns.append(
                DEPRECATE_MESSAGE.format(
                    major=version.major,
                    minor=version.minor,
                    apis=generate_message_with_deprecated_apis(warns_found),
                )
            )
    return errs, warns


def validate_bundle_deprecated_apis(bundle: Bundle | None, k8s_version: str) -> ManifestResult:
    """Report removed APIs used by one bundle."""
    result = ManifestResult()
    if bundle is None:
        result.add(err_invalid_bundle("Bundle is nil", None))
        return result
    result.name = bundle.name
    if bundle.csv is None:
        result.add(err_invalid_bundle("Bundle csv is nil", bundle.name))
        return result
    errs, warns = check_deprecated_apis(bundle, k8s_version)
    csv_name = _name(bundle.csv)
    result.add(*(err_failed_validation(msg, csv_name) for msg in errs))
    result.add(*(warn_failed_validation(msg, csv_name) for msg in warns))
    return result


def validate_deprecated_apis(*args: Any) -> list[ManifestResult]:
    """Validate every bundle among the given objects for removed APIs."""
    k8s_version = k8s_version_from(args)
    return [
        validate_bundle_deprecated_apis(obj, k8s_version)
        for obj in args
        if isinstance(obj, Bundle)
    ]