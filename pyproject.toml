[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskmates"
version = "0.1.0"
description = "Desktop mascot manager core: environment geometry, roster rules, window placement, settings and a command-line client for the manager's local HTTP API"
requires-python = ">=3.10"
dependencies = []
keywords = ["mascot", "shimeji", "desktop", "pet", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
deskmates = "deskmates.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["deskmates"]

[tool.pytest.ini_options]
addopts = "-ra"
