[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "chasegrid"
version = "0.1.0"
description = "Terminal predator-prey chase simulation on a grid with A* pathfinding, stamina, fear and safe zones"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "predator", "prey", "pathfinding", "a-star", "terminal", "game"]
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
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["chasegrid*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
