[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polygraph"
version = "0.1.0"
description = "Node graphs for procedural mesh modelling, compiled into a small typed instruction language"
requires-python = ">=3.10"
dependencies = []
keywords = ["procedural", "mesh", "node-graph", "3d-modeling", "compiler"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["polygraph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
