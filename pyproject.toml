[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "olmvalidate"
version = "0.1.0"
description = "Validators for Operator Lifecycle Manager bundles, CSVs and package manifests"
requires-python = ">=3.10"
dependencies = [
    "semver>=3.0",
]
keywords = ["operator", "olm", "kubernetes", "bundle", "validation", "csv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["olmvalidate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
