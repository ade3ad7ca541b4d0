"""Core result types, manifest containers and validator plumbing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable


class Level(enum.Enum):
    """Severity of a validation finding."""

    ERROR = "Error"
    WARN = "Warning"


class ErrorType(enum.Enum):
    """Category of a validation finding."""

    INVALID_CSV = "CSVFileNotValid"
    INVALID_BUNDLE = "BundleNotValid"
    FAILED_VALIDATION = "ValidationFailed"
    INVALID_PACKAGE_MANIFEST = "PackageManifestNotValid"
    DEPRECATED_VALIDATOR = "DeprecatedValidator"


@dataclass(frozen=True)
class ValidationError:
    """A single error or warning reported about a manifest."""

    type: ErrorType
    level: Level
    detail: str = ""
    bad_value: Any = None
    field: str = ""

    def __str__(self) -> str:
        text = f"{self.level.value}: "
        if self.field:
            text += f"Field {self.field} "
        if self.bad_value is not None:
            text += f"Value : ({self.bad_value}) "
        return text + self.detail


@dataclass
class ManifestResult:
    """Findings for one manifest, split into errors and warnings."""

    name: str = ""
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    def add(self, *args: ValidationError) -> None:
        """Record findings, sorting them by level."""
        for finding in args:
            if finding.level is Level.ERROR:
                self.errors.append(finding)
            else:
                self.warnings.append(finding)

    def has_error(self) -> bool:
        return bool(self.errors)

    def has_warn(self) -> bool:
        return bool(self.warnings)


@dataclass
class Bundle:
    """An operator bundle: its CSV and the other manifests shipped with it.

    Manifests are plain mappings as loaded from YAML or JSON.
    """

    name: str = ""
    csv: dict | None = None
    v1beta1_crds: list[dict] = field(default_factory=list)
    v1_crds: list[dict] = field(default_factory=list)
    objects: list[dict] = field(default_factory=list)


@dataclass
class PackageChannel:
    """A channel of a package manifest."""

    name: str = ""
    current_csv_name: str = ""


@dataclass
class PackageManifest:
    """A package manifest listing the channels of an operator."""

    package_name: str = ""
    channels: list[PackageChannel] = field(default_factory=list)
    default_channel_name: str = ""


class Validator:
    """Runs one validation function over an arbitrary set of objects."""

    def __init__(self, func: Callable[..., Iterable[ManifestResult]]) -> None:
        self._func = func

    def validate(self, *args: Any) -> list[ManifestResult]:
        return list(self._func(*args))


class Validators(list):
    """An ordered collection of validators run one after another."""

    def validate(self, *args: Any) -> list[ManifestResult]:
        results: list[ManifestResult] = []
        for validator in self:
            results.extend(validator.validate(*args))
        return results


def _error(kind: ErrorType, detail: str, value: Any) -> ValidationError:
    return ValidationError(kind, Level.ERROR, detail, value)


def _warning(kind: ErrorType, detail: str, value: Any) -> ValidationError:
    return ValidationError(kind, Level.WARN, detail, value)


def err_invalid_bundle(detail: str, value: Any) -> ValidationError:
    return _error(ErrorType.INVALID_BUNDLE, detail, value)


def err_invalid_csv(detail: str, value: Any) -> ValidationError:
    return _error(ErrorType.INVALID_CSV, detail, value)


def warn_invalid_csv(detail: str, value: Any) -> ValidationError:
    return _warning(ErrorType.INVALID_CSV, detail, value)


def err_failed_validation(detail: str, value: Any) -> ValidationError:
    return _error(ErrorType.FAILED_VALIDATION, detail, value)


def warn_failed_validation(detail: str, value: Any) -> ValidationError:
    return _warning(ErrorType.FAILED_VALIDATION, detail, value)


def err_invalid_package_manifest(detail: str, value: Any) -> ValidationError:
    return _error(ErrorType.INVALID_PACKAGE_MANIFEST, detail, value)


def warn_deprecated_validator(detail: str) -> ValidationError:
    return _warning(ErrorType.DEPRECATED_VALIDATOR, detail, None)