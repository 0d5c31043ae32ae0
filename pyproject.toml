[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pointclick"
version = "0.1.0"
description = "Building blocks for point-and-click adventure games: futures, command queues, a binary resource format, animations, costumes, dialogs and verbs."
requires-python = ">=3.10"
keywords = ["adventure", "point-and-click", "game", "resources", "animation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pointclick"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
