[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hpcgref"
version = "0.8.9"
description = "Building blocks for the 27-point 3D stencil problem: grid decomposition, problem generation, vector and sparse kernels, and a symmetric Gauss-Seidel smoother"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "stencil",
    "sparse",
    "gauss-seidel",
    "domain-decomposition",
    "linear-algebra",
    "benchmark",
]
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
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hpcgref"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
