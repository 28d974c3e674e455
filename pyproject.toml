[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "carmenlog"
version = "0.1.0"
description = "Read Carmen-style robot sensor logs and run simple particle filters over them"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "robotics",
    "laser",
    "odometry",
    "sensor log",
    "particle filter",
    "resampling",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
carmen-log-plot = "carmenlog.logplot:main"
rdk2carmen = "carmenlog.rdk2carmen:main"
scanstudio2carmen = "carmenlog.scanstudio:main"
carmen-range-bearing = "carmenlog.rangebearing:main"

[tool.hatch.build.targets.wheel]
packages = ["carmenlog"]

[tool.hatch.build.targets.sdist]
include = ["carmenlog", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
