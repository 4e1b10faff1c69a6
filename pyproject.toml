[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kickframe"
version = "0.1.1"
description = "Dependency-injection container, modules, context-contributor pipelines, mount sorting and dotenv/environment helpers"
requires-python = ">=3.11"
dependencies = []
keywords = [
    "dependency-injection",
    "di",
    "container",
    "framework",
    "dotenv",
    "environment",
    "topological-sort",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "pytest-asyncio>=0.21",
]

[tool.hatch.build.targets.wheel]
packages = ["kickframe"]

[tool.hatch.build.targets.sdist]
include = ["kickframe", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
