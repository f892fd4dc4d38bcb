[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eventhorizon"
version = "0.1.0"
description = "CQRS and event sourcing building blocks: an in-memory event store, matchers, middleware, WSGI apps and example domains"
requires-python = ">=3.10"
dependencies = []
keywords = ["cqrs", "event-sourcing", "ddd", "events", "aggregates", "wsgi"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["eventhorizon"]

[tool.pytest.ini_options]
addopts = "-ra"
