[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mergelens"
version = "0.1.0"
description = "Structural two-way diffs and three-way merges of JSON documents, with per-path conflict resolution"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "diff", "merge", "three-way-merge", "conflict-resolution"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mergelens = "mergelens.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mergelens"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
