[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "barky"
version = "0.1.0"
description = "Flatten nested configuration data into dotted keys and store it with conflict checks and file provenance."
requires-python = ">=3.10"
dependencies = []
keywords = ["configuration", "flatten", "properties", "key-path", "nested-data"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["barky"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
