[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sparsecpd"
version = "0.1.0"
description = "Sparse tensor utilities: coordinate tensors, sorting, reordering and load-balanced partitioning"
requires-python = ">=3.10"
dependencies = []
keywords = ["tensor", "sparse", "coordinate", "partitioning", "reordering", "sorting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sparsecpd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
