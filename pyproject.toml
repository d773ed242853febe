[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "knotdi"
version = "0.1.0"
description = "A small dependency injection container with singleton, transient and external services backed by a bounded memory pool"
requires-python = ">=3.10"
dependencies = []
keywords = ["dependency injection", "di", "container", "ioc", "singleton", "memory pool"]
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
packages = ["knotdi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
