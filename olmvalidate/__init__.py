"""Validators for Operator Lifecycle Manager bundles, CSVs and package manifests."""

__version__ = "0.1.0"