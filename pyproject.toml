[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nowall"
version = "1.0.0"
description = "Finite-volume building blocks and result post-processing for counterflow channel combustion with a heat-exchanging wall"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["finite volume", "combustion", "heat exchange", "cfd", "post-processing"]
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
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["nowall"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
