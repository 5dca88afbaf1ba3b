[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ormkit"
version = "0.1.0"
description = "SQL fragment helpers, table events and model/entity/DAO source generation from table metadata"
requires-python = ">=3.10"
dependencies = []
keywords = ["orm", "sql", "code-generation", "mysql", "dao", "entity", "templates"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ormkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
