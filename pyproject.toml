[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "patmatch"
version = "0.1.0"
description = "Pattern matching over indexed data using predicates, constraint trees and branch selectors"
requires-python = ">=3.10"
dependencies = []
keywords = ["pattern matching", "constraints", "predicates", "indexing", "bindings"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["patmatch"]

[tool.pytest.ini_options]
addopts = "-ra"
