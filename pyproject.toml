[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "opensheet"
version = "1.0.0"
description = "Spreadsheet engine: cells, sheets, workbooks, dependency tracking, number formats, auto fill, pivot tables and data validation"
requires-python = ">=3.10"
dependencies = []
keywords = ["spreadsheet", "workbook", "pivot", "autofill", "number-format", "validation", "undo"]
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
    "Topic :: Office/Business :: Financial :: Spreadsheet",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["opensheet"]

[tool.pytest.ini_options]
addopts = "-ra"
