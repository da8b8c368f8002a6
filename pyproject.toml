[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hpcwork"
version = "0.1.0"
description = "Parallel computing exercises: odd-even sort, Mandelbrot rendering and MapReduce word count building blocks"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "parallel",
    "odd-even sort",
    "mandelbrot",
    "png",
    "mapreduce",
    "word count",
    "job tracker",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hpcwork-sort = "hpcwork.oddeven:main"
hpcwork-mandelbrot = "hpcwork.mandelbrot:main"
hpcwork-wordcount = "hpcwork.wordcount:main"

[tool.hatch.build.targets.wheel]
packages = ["hpcwork"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
