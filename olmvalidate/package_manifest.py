"""Validation of package manifests and their channels."""

from __future__ import annotations

import json
from typing import Any

from olmvalidate.model import (
    ManifestResult,
    PackageManifest,
    ValidationError,
    err_invalid_package_manifest,
)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def validate_channels(pkg: PackageManifest) -> list[ValidationError]:
    """Check the package name, channels and default channel."""
    name = pkg.package_name
    errs: list[ValidationError] = []

    def report(detail: str) -> None:
        errs.append(err_invalid_package_manifest(detail, name))

    if not name:
        report("packageName empty")
    if not pkg.channels:
        report("channels empty")
        return errs
    if not pkg.default_channel_name and len(pkg.channels) > 1:
        report("default channel is empty but more than one channel exists")

    seen: set[str] = set()
    for index, channel in enumerate(pkg.channels):
        if not channel.name:
            report(f"channel {index} name is empty")
        if not channel.current_csv_name:
            report(f"channel {_quote(channel.name)} currentCSV is empty")
        if channel.name in seen:
            report(f"duplicate package manifest channel name {_quote(channel.name)}")
        seen.add(channel.name)

    default = pkg.default_channel_name
    if default and default not in seen:
        report(f"default channel {_quote(default)} not found in the list of declared channels")
    return errs


def validate_package_manifest(pkg: PackageManifest) -> ManifestResult:
    result = ManifestResult(name=pkg.package_name)
    result.add(*validate_channels(pkg))
    return result


def validate_package_manifests(*args: Any) -> list[ManifestResult]:
    """Validate every package manifest among the given objects."""
    return [validate_package_manifest(obj) for obj in args if isinstance(obj, PackageManifest)]