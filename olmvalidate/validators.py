"""Ready-made validators and the collection that runs them all."""

from __future__ import annotations

from olmvalidate.model import Validator, Validators
from olmvalidate.operatorhub import validate_operator_hub, validate_operator_hub_v2
from olmvalidate.package_manifest import validate_package_manifests
from olmvalidate.removed_apis import validate_deprecated_apis
from olmvalidate.standard_capabilities import validate_capabilities
from olmvalidate.standard_categories import validate_categories

PACKAGE_MANIFEST_VALIDATOR = Validator(validate_package_manifests)

# Deprecated: use OPERATOR_HUB_V2_VALIDATOR together with the standard
# capabilities and categories validators.
OPERATOR_HUB_VALIDATOR = Validator(validate_operator_hub)

OPERATOR_HUB_V2_VALIDATOR = Validator(validate_operator_hub_v2)

STANDARD_CAPABILITIES_VALIDATOR = Validator(validate_capabilities)

STANDARD_CATEGORIES_VALIDATOR = Validator(validate_categories)

ALPHA_DEPRECATED_APIS_VALIDATOR = Validator(validate_deprecated_apis)

ALL_VALIDATORS = Validators(
    [
        PACKAGE_MANIFEST_VALIDATOR,
        OPERATOR_HUB_V2_VALIDATOR,
        STANDARD_CATEGORIES_VALIDATOR,
        STANDARD_CAPABILITIES_VALIDATOR,
        ALPHA_DEPRECATED_APIS_VALIDATOR,
    ]
)