[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridglue"
version = "0.1.0"
description = "Geometry for coupling non-matching grids: simplex intersections, normal projections and simplex subdivision"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["mesh", "grid coupling", "mortar", "intersection", "projection", "simplex"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gridglue"]

[tool.pytest.ini_options]
addopts = "-ra"
