[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "helia"
version = "0.1.0"
description = "Request helpers for a bookkeeping web application: CRUD handlers, pagination, dialogs and locale-aware value formatting."
requires-python = ">=3.10"
dependencies = []
keywords = ["accounting", "bookkeeping", "crud", "pagination", "htmx"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["helia"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
