[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "valigo"
version = "1.0.0"
description = "Building blocks for translatable validation rules on Python objects"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["validation", "validator", "i18n", "translation", "dataclasses", "accept-language"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["valigo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
