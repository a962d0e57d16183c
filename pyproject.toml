[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "poissoncg"
version = "0.1.0"
description = "Finite-difference Poisson solver on structured grids with CG and Gauss-Seidel preconditioned CG"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["poisson", "laplace", "conjugate-gradient", "finite-difference", "pde", "preconditioning"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
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

[project.scripts]
poissoncg-perf = "poissoncg.perf:main"

[tool.hatch.build.targets.wheel]
packages = ["poissoncg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
