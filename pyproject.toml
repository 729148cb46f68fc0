[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "replicator"
version = "0.1.0"
description = "Work-item tracking, agent sessions, reports and a tool registry for coordinating AI coding agents over SQLite."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "agents",
    "work-items",
    "sqlite",
    "orchestration",
    "json-rpc",
    "tools",
]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["replicator"]

[tool.hatch.build.targets.sdist]
include = ["replicator", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
